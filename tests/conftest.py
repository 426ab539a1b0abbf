import sys
from pathlib import Path

import pytest
from loguru import logger


# Ensure local src/ package imports work without editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from zepmcp.core.config import reset_config  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test away from any local config.yaml and ambient credentials."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ZEPAPIKEY", raising=False)
    for name in [
        "ZEPMCP_ZEP_BASE_URL",
        "ZEPMCP_ZEP_TIMEOUT_SECONDS",
        "ZEPMCP_TRANSPORT",
        "ZEPMCP_HOST",
        "ZEPMCP_PORT",
        "ZEPMCP_LOG_LEVEL",
        "ZEPMCP_JSON_LOGS",
        "ZEPMCP_CORS_ORIGINS",
        "LOG_FORMAT",
    ]:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
    # Sinks may point at streams captured by the test runner.
    logger.remove()


class FakeZepAdapter:
    """In-memory stand-in for ZepAPIAdapter that records every call."""

    def __init__(self, search_hits=None):
        self.sessions = {}
        self.search_hits = search_hits or []
        self.calls = []

    def add_memory(self, session_id, messages):
        self.calls.append(("add_memory", session_id, messages))
        stored = self.sessions.setdefault(session_id, [])
        for m in messages:
            stored.append({
                "role": m["role"],
                "role_type": m["role_type"],
                "content": m["content"],
                "created_at": f"2024-01-01T00:00:0{len(stored)}Z",
            })
        return {"context": ""}

    def get_memory(self, session_id):
        self.calls.append(("get_memory", session_id))
        return {"messages": list(self.sessions.get(session_id, [])), "summary": None}

    def search_sessions(self, text, limit):
        self.calls.append(("search_sessions", text, limit))
        return {"results": self.search_hits[:limit]}


@pytest.fixture
def fake_adapter():
    return FakeZepAdapter()


@pytest.fixture
def memory_client(fake_adapter):
    from zepmcp.core.memory_client import ZepMemoryClient

    return ZepMemoryClient(fake_adapter)
