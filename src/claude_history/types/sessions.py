"""Derived session, project and usage aggregates."""

from dataclasses import dataclass, field
from typing import Optional

from claude_history.types.records import HistoryEntry, TokenUsage


@dataclass
class SessionInfo:
    session_id: str
    title: Optional[str]
    message_count: int = 0
    first_timestamp: int = 0
    last_timestamp: int = 0

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "title": self.title,
            "messageCount": self.message_count,
            "firstTimestamp": self.first_timestamp,
            "lastTimestamp": self.last_timestamp,
        }


@dataclass
class ProjectInfo:
    path: str
    name: str
    count: int = 0
    last_access: int = 0
    messages: list[HistoryEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "name": self.name,
            "count": self.count,
            "lastAccess": self.last_access,
            "messages": [m.to_dict() for m in self.messages],
        }


@dataclass
class Statistics:
    total_messages: int = 0
    total_projects: int = 0
    first_message: Optional[HistoryEntry] = None
    last_message: Optional[HistoryEntry] = None
    messages_by_day: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalMessages": self.total_messages,
            "totalProjects": self.total_projects,
            "firstMessage": self.first_message.to_dict() if self.first_message else None,
            "lastMessage": self.last_message.to_dict() if self.last_message else None,
            "messagesByDay": dict(sorted(self.messages_by_day.items())),
        }


@dataclass
class ModelUsage:
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    cost: float = 0.0
    context_limit: int = 0

    def to_dict(self) -> dict:
        return {
            "model": self.model,
            "usage": self.usage.to_dict(),
            "cost": self.cost,
            "contextLimit": self.context_limit,
        }


@dataclass
class SessionUsage:
    session_id: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    cost: float = 0.0
    models: list[str] = field(default_factory=list)
    message_count: int = 0
    last_timestamp: int = 0

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "usage": self.usage.to_dict(),
            "cost": self.cost,
            "models": list(self.models),
            "messageCount": self.message_count,
            "lastTimestamp": self.last_timestamp,
        }


@dataclass
class ProjectStatistics:
    project_path: str
    total_sessions: int = 0
    total_usage: TokenUsage = field(default_factory=TokenUsage)
    estimated_cost: float = 0.0
    sessions: list[SessionUsage] = field(default_factory=list)
    by_model: list[ModelUsage] = field(default_factory=list)
    last_updated: int = 0

    def to_dict(self) -> dict:
        return {
            "projectPath": self.project_path,
            "totalSessions": self.total_sessions,
            "totalUsage": self.total_usage.to_dict(),
            "estimatedCost": self.estimated_cost,
            "sessions": [s.to_dict() for s in self.sessions],
            "byModel": [m.to_dict() for m in self.by_model],
            "lastUpdated": self.last_updated,
        }


@dataclass
class UsageQuota:
    percentage: int
    total_tokens: int
    limit: int
    estimated_cost: float = 0.0

    def to_dict(self) -> dict:
        return {
            "percentage": self.percentage,
            "totalTokens": self.total_tokens,
            "limit": self.limit,
            "estimatedCost": self.estimated_cost,
        }
