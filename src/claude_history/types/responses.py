"""Response envelope and pass-through JSON types."""

from dataclasses import dataclass
from typing import Any, Union

# Parsed but never interpreted: handed to the presentation layer as-is.
JsonValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


@dataclass(frozen=True)
class ConversationDetail:
    id: str
    data: JsonValue
    timestamp: int

    def to_dict(self) -> dict:
        return {"id": self.id, "data": self.data, "timestamp": self.timestamp}


@dataclass(frozen=True)
class ApiResponse:
    success: bool
    error: str | None = None
    data: Any = None

    @classmethod
    def ok(cls, data: Any) -> "ApiResponse":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, message: str) -> "ApiResponse":
        return cls(success=False, error=message)

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}
