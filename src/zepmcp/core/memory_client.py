"""
Zep Memory Client
=================
Adapts the three Zep operations (add message, get session, semantic search)
to the adapter's own shapes. Every failure surfaces as a single
MemoryOperationError carrying only the cause's message.
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from zepmcp.core.exceptions import MemoryOperationError, ZepMCPError
from zepmcp.core.models import CreateMemoryResult, MemoryResult, Message, SearchResult
from zepmcp.mcp.adapters.zep_adapter import ZepAPIAdapter

DEFAULT_SEARCH_LIMIT = 10


def _reason(exc: Exception) -> str:
    if isinstance(exc, ZepMCPError):
        return exc.message
    return str(exc) or "Unknown error"


def _to_message(raw: Dict[str, Any]) -> Message:
    return Message(
        role=raw.get("role_type") or raw.get("role") or "",
        content=raw.get("content") or "",
        timestamp=raw.get("created_at"),
    )


def _to_search_result(raw: Dict[str, Any]) -> SearchResult:
    message = raw.get("message") or {}
    return SearchResult(
        content=message.get("content") or "",
        score=raw.get("score") or 0,
        session_id=raw.get("session_id"),
        metadata=raw.get("metadata"),
    )


class ZepMemoryClient:
    """
    Thin wrapper over ZepAPIAdapter.

    Constructed once at startup and handed to the tool dispatcher.
    """

    def __init__(self, adapter: ZepAPIAdapter):
        self.adapter = adapter

    @classmethod
    def from_api_key(cls, api_key: str, base_url: Optional[str] = None, timeout_seconds: int = 15) -> "ZepMemoryClient":
        kwargs: Dict[str, Any] = {"timeout_seconds": timeout_seconds}
        if base_url:
            kwargs["base_url"] = base_url
        return cls(ZepAPIAdapter(api_key, **kwargs))

    def create_memory(self, session_id: str, message: str, role: str) -> CreateMemoryResult:
        """Append one message to a session. ``role`` is forwarded unchanged."""
        try:
            self.adapter.add_memory(
                session_id,
                [{"role_type": role, "role": role, "content": message}],
            )
        except Exception as exc:
            logger.warning(f"create_memory failed for session {session_id!r}: {exc}")
            raise MemoryOperationError("create", _reason(exc)) from exc

        return CreateMemoryResult(success=True, session_id=session_id)

    def get_memory(self, session_id: str) -> MemoryResult:
        """Fetch the full remembered conversation of a session."""
        try:
            memory = self.adapter.get_memory(session_id) or {}
            summary = memory.get("summary") or {}
            return MemoryResult(
                session_id=session_id,
                messages=[_to_message(m) for m in memory.get("messages") or []],
                summary=summary.get("content"),
            )
        except Exception as exc:
            logger.warning(f"get_memory failed for session {session_id!r}: {exc}")
            raise MemoryOperationError("retrieve", _reason(exc)) from exc

    def search_memory(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[SearchResult]:
        """Semantic search across all sessions, capped at ``limit`` hits."""
        if limit == 0:
            return []
        try:
            response = self.adapter.search_sessions(query, limit)
            if isinstance(response, list):
                hits = response
            else:
                hits = (response or {}).get("results") or []
            return [_to_search_result(hit) for hit in hits]
        except Exception as exc:
            logger.warning(f"search_memory failed for query {query!r}: {exc}")
            raise MemoryOperationError("search", _reason(exc)) from exc
