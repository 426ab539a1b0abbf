"""
Memory transfer objects.

Request-scoped shapes returned by the memory client. Field names follow the
tool surface (camelCase) when serialized with ``by_alias=True``.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _TransferModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for a tool response; absent optional fields are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Message(_TransferModel):
    role: str
    content: str = ""
    timestamp: Optional[str] = None


class MemoryResult(_TransferModel):
    session_id: str = Field(..., alias="sessionId")
    messages: List[Message] = Field(default_factory=list)
    summary: Optional[str] = None


class SearchResult(_TransferModel):
    content: str = ""
    score: float = 0
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    metadata: Optional[Dict[str, Any]] = None


class CreateMemoryResult(_TransferModel):
    success: bool
    session_id: str = Field(..., alias="sessionId")
