"""
Tool Dispatcher
===============
Maps an incoming tool call onto one ZepMemoryClient operation and returns a
tagged ToolResult. Tool-level failures never escape as exceptions; only the
transport binding decides how a failure is rendered.
"""

import asyncio
import copy
from typing import Any, Awaitable, Callable, Dict, List, Optional

from loguru import logger

from zepmcp.core.exceptions import ZepMCPError
from zepmcp.core.memory_client import ZepMemoryClient
from zepmcp.mcp.schemas import (
    TOOL_DEFINITIONS,
    CreateMemoryInput,
    GetMemoryInput,
    SearchMemoryInput,
    ToolResult,
    decode_arguments,
)


class ToolDispatcher:
    def __init__(self, client: ZepMemoryClient):
        self.client = client
        self._handlers: Dict[str, Callable[[Any], Awaitable[Any]]] = {
            "create_memory": self._create_memory,
            "get_memory": self._get_memory,
            "search_memory": self._search_memory,
        }

    @staticmethod
    def list_tools() -> List[Dict[str, Any]]:
        return copy.deepcopy(TOOL_DEFINITIONS)

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        try:
            request = decode_arguments(name, arguments)
            data = await self._handlers[name](request)
        except ZepMCPError as exc:
            logger.info(f"Tool call {name!r} failed: {exc.message}")
            return ToolResult.failure(exc.message)
        except Exception as exc:
            logger.exception(f"Unexpected error in tool call {name!r}")
            return ToolResult.failure(str(exc) or type(exc).__name__)
        return ToolResult.success(data)

    async def _create_memory(self, request: CreateMemoryInput) -> Dict[str, Any]:
        result = await asyncio.to_thread(
            self.client.create_memory, request.session_id, request.message, request.role
        )
        return result.to_payload()

    async def _get_memory(self, request: GetMemoryInput) -> Dict[str, Any]:
        result = await asyncio.to_thread(self.client.get_memory, request.session_id)
        return result.to_payload()

    async def _search_memory(self, request: SearchMemoryInput) -> List[Dict[str, Any]]:
        results = await asyncio.to_thread(
            self.client.search_memory, request.query, request.effective_limit
        )
        return [r.to_payload() for r in results]
