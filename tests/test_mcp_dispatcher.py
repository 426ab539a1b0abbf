"""
Tests for ToolDispatcher: name matching, decoding and result tagging.
"""

import pytest

from zepmcp.core.exceptions import ZepAPIError
from zepmcp.core.memory_client import ZepMemoryClient
from zepmcp.mcp.dispatcher import ToolDispatcher


class RejectingAdapter:
    def add_memory(self, session_id, messages):
        raise ZepAPIError("Upstream error (400): invalid role_type", status_code=400)

    def get_memory(self, session_id):
        raise KeyError("boom")

    def search_sessions(self, text, limit):
        raise ZepAPIError("Upstream request failed: timeout")


@pytest.fixture
def dispatcher(memory_client):
    return ToolDispatcher(memory_client)


def test_list_tools_returns_copy(dispatcher):
    tools = dispatcher.list_tools()
    tools[0]["name"] = "mutated"
    assert dispatcher.list_tools()[0]["name"] == "create_memory"


@pytest.mark.asyncio
async def test_create_memory(dispatcher):
    result = await dispatcher.dispatch(
        "create_memory", {"sessionId": "s1", "message": "hello", "role": "user"}
    )
    assert result.ok is True
    assert result.data == {"success": True, "sessionId": "s1"}


@pytest.mark.asyncio
async def test_unknown_tool_is_a_failure_not_a_raise(dispatcher):
    result = await dispatcher.dispatch("forget_everything", {})
    assert result.ok is False
    assert result.error == "Unknown tool: forget_everything"


@pytest.mark.asyncio
async def test_missing_argument_is_named(dispatcher, fake_adapter):
    result = await dispatcher.dispatch("create_memory", {"sessionId": "s1", "message": "x"})
    assert result.ok is False
    assert "role" in result.error
    assert fake_adapter.calls == []


@pytest.mark.asyncio
async def test_get_memory_on_empty_session(dispatcher):
    result = await dispatcher.dispatch("get_memory", {"sessionId": "never-written"})
    assert result.ok is True
    assert result.data == {"sessionId": "never-written", "messages": []}


@pytest.mark.asyncio
async def test_search_defaults_to_ten(dispatcher, fake_adapter):
    result = await dispatcher.dispatch("search_memory", {"query": "q"})
    assert result.ok is True
    assert result.data == []
    assert fake_adapter.calls == [("search_sessions", "q", 10)]


@pytest.mark.asyncio
async def test_search_zero_limit_is_empty(dispatcher, fake_adapter):
    fake_adapter.search_hits = [{"message": {"content": "a"}, "score": 1.0, "session_id": "s1"}]
    result = await dispatcher.dispatch("search_memory", {"query": "q", "limit": 0})
    assert result.ok is True
    assert result.data == []


@pytest.mark.asyncio
async def test_search_respects_limit(dispatcher, fake_adapter):
    fake_adapter.search_hits = [
        {"message": {"content": f"hit {i}"}, "score": 1.0 - i / 10, "session_id": "s1"}
        for i in range(5)
    ]
    result = await dispatcher.dispatch("search_memory", {"query": "q", "limit": 2})
    assert [hit["content"] for hit in result.data] == ["hit 0", "hit 1"]


@pytest.mark.asyncio
async def test_upstream_role_rejection_surfaces_as_failure():
    dispatcher = ToolDispatcher(ZepMemoryClient(RejectingAdapter()))
    result = await dispatcher.dispatch(
        "create_memory", {"sessionId": "s1", "message": "hi", "role": "narrator"}
    )
    assert result.ok is False
    assert result.error == "Failed to create memory: Upstream error (400): invalid role_type"


@pytest.mark.asyncio
async def test_unexpected_errors_are_flattened():
    dispatcher = ToolDispatcher(ZepMemoryClient(RejectingAdapter()))
    result = await dispatcher.dispatch("get_memory", {"sessionId": "s1"})
    assert result.ok is False
    assert result.error.startswith("Failed to retrieve memory:")


@pytest.mark.asyncio
async def test_get_memory_is_idempotent(dispatcher):
    await dispatcher.dispatch("create_memory", {"sessionId": "s1", "message": "hello", "role": "user"})
    first = await dispatcher.dispatch("get_memory", {"sessionId": "s1"})
    second = await dispatcher.dispatch("get_memory", {"sessionId": "s1"})
    assert first.data == second.data


@pytest.mark.asyncio
async def test_create_then_get_round_trip(dispatcher):
    created = await dispatcher.dispatch(
        "create_memory", {"sessionId": "s1", "message": "hello", "role": "user"}
    )
    assert created.data == {"success": True, "sessionId": "s1"}

    fetched = await dispatcher.dispatch("get_memory", {"sessionId": "s1"})
    messages = fetched.data["messages"]
    assert len(messages) == 1
    assert messages[0]["role"] == "user"
    assert messages[0]["content"] == "hello"
