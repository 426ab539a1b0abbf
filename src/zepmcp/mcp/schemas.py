from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from zepmcp.core.exceptions import UnknownToolError, ValidationError
from zepmcp.core.memory_client import DEFAULT_SEARCH_LIMIT


TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "name": "create_memory",
        "description": "Create or update a memory in Zep for a user session",
        "inputSchema": {
            "type": "object",
            "properties": {
                "sessionId": {
                    "type": "string",
                    "description": "Unique session identifier",
                },
                "message": {
                    "type": "string",
                    "description": "Message content to store",
                },
                "role": {
                    "type": "string",
                    "enum": ["user", "assistant"],
                    "description": "Role of the message sender",
                },
            },
            "required": ["sessionId", "message", "role"],
        },
    },
    {
        "name": "get_memory",
        "description": "Retrieve memory history for a user session",
        "inputSchema": {
            "type": "object",
            "properties": {
                "sessionId": {
                    "type": "string",
                    "description": "Session identifier to retrieve memories for",
                },
            },
            "required": ["sessionId"],
        },
    },
    {
        "name": "search_memory",
        "description": "Search across all memories using semantic search",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query",
                },
                "limit": {
                    "type": "number",
                    "description": "Maximum number of results",
                    "default": DEFAULT_SEARCH_LIMIT,
                },
            },
            "required": ["query"],
        },
    },
]


class _ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateMemoryInput(_ToolInput):
    session_id: str = Field(..., alias="sessionId", min_length=1)
    message: str
    # Not restricted to user/assistant: the remote service owns that check.
    role: str


class GetMemoryInput(_ToolInput):
    session_id: str = Field(..., alias="sessionId", min_length=1)


class SearchMemoryInput(_ToolInput):
    query: str
    limit: Optional[int] = Field(default=None, ge=0)

    @field_validator("limit", mode="before")
    @classmethod
    def reject_boolean_limit(cls, value: Any) -> Any:
        # bool subclasses int; lax mode would read true as 1.
        if isinstance(value, bool):
            raise ValueError("limit must be a non-negative integer, not a boolean")
        return value

    @property
    def effective_limit(self) -> int:
        return DEFAULT_SEARCH_LIMIT if self.limit is None else self.limit


TOOL_INPUTS: Dict[str, Type[_ToolInput]] = {
    "create_memory": CreateMemoryInput,
    "get_memory": GetMemoryInput,
    "search_memory": SearchMemoryInput,
}


def decode_arguments(name: str, arguments: Optional[Dict[str, Any]]) -> _ToolInput:
    """
    Decode a raw argument bag into the tool's input model.

    Raises:
        UnknownToolError: If no tool is registered under ``name``.
        ValidationError: If a required argument is missing or has the wrong type.
    """
    model = TOOL_INPUTS.get(name)
    if model is None:
        raise UnknownToolError(name)
    try:
        return model.model_validate(arguments or {})
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or name
        raise ValidationError(
            field=field,
            reason=first.get("msg", "invalid value"),
            value=first.get("input") if first.get("type") != "missing" else None,
        ) from exc


class ToolResult(BaseModel):
    ok: bool
    data: Optional[Any] = None
    error: Optional[str] = None

    @field_validator("error")
    @classmethod
    def validate_error(cls, value: Optional[str], info):
        if info.data.get("ok") and value:
            raise ValidationError(
                field="error",
                reason="error must be empty when ok is true",
                value=value
            )
        return value

    @classmethod
    def success(cls, data: Any) -> "ToolResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(ok=False, error=message)
