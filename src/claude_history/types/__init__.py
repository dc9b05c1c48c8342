"""Type definitions for claude-history."""

from claude_history.types.records import (
    BlockContent,
    ContentBlock,
    ConversationRecord,
    HistoryEntry,
    MessageContent,
    RecordType,
    TextContent,
    TokenUsage,
)
from claude_history.types.sessions import (
    ModelUsage,
    ProjectInfo,
    ProjectStatistics,
    SessionInfo,
    SessionUsage,
    Statistics,
    UsageQuota,
)
from claude_history.types.responses import ApiResponse, ConversationDetail, JsonValue

__all__ = [
    "BlockContent",
    "ContentBlock",
    "ConversationRecord",
    "HistoryEntry",
    "MessageContent",
    "RecordType",
    "TextContent",
    "TokenUsage",
    "ModelUsage",
    "ProjectInfo",
    "ProjectStatistics",
    "SessionInfo",
    "SessionUsage",
    "Statistics",
    "UsageQuota",
    "ApiResponse",
    "ConversationDetail",
    "JsonValue",
]
