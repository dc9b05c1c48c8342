"""Record-level types for parsed transcript and history lines."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class RecordType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value) -> "RecordType":
        if value == cls.USER.value:
            return cls.USER
        if value == cls.ASSISTANT.value:
            return cls.ASSISTANT
        return cls.OTHER


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_input_tokens: int = 0
    cache_creation_input_tokens: int = 0

    @property
    def total(self) -> int:
        return (self.input_tokens + self.output_tokens +
                self.cache_read_input_tokens + self.cache_creation_input_tokens)

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
            cache_read_input_tokens=self.cache_read_input_tokens + other.cache_read_input_tokens,
            cache_creation_input_tokens=(
                self.cache_creation_input_tokens + other.cache_creation_input_tokens
            ),
        )

    def to_dict(self) -> dict:
        return {
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
            "cacheReadTokens": self.cache_read_input_tokens,
            "cacheCreationTokens": self.cache_creation_input_tokens,
            "totalTokens": self.total,
        }


@dataclass(frozen=True)
class ContentBlock:
    """One entry of a block-list message body. Either field may be missing."""
    type: Optional[str] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class TextContent:
    text: str


@dataclass(frozen=True)
class BlockContent:
    blocks: tuple[ContentBlock, ...] = ()


MessageContent = Union[TextContent, BlockContent]


@dataclass(frozen=True)
class ConversationRecord:
    uuid: str = ""
    session_id: str = ""
    parent_uuid: Optional[str] = None
    timestamp: str = ""
    type: RecordType = RecordType.OTHER
    raw_type: str = ""
    role: str = ""
    content: MessageContent = TextContent("")
    is_meta: bool = False
    is_sidechain: bool = False
    cwd: str = ""
    model: str = ""
    usage: Optional[TokenUsage] = None


@dataclass(frozen=True)
class HistoryEntry:
    """One prompt from the flat history log."""
    display: str = ""
    pasted_contents: dict[str, Any] = field(default_factory=dict)
    timestamp: int = 0
    project: Optional[str] = None
    session_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "display": self.display,
            "pastedContents": self.pasted_contents,
            "timestamp": self.timestamp,
            "project": self.project,
            "sessionId": self.session_id,
        }
