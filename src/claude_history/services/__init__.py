"""Services for claude-history."""

from claude_history.services.config_manager import ConfigManager, IndexConfig
from claude_history.services.query_service import QueryService
from claude_history.services.session_reconstructor import SessionReconstructor, reconstruct
from claude_history.services.usage_aggregator import UsageAggregator, UsageStatisticsService

__all__ = [
    "ConfigManager",
    "IndexConfig",
    "QueryService",
    "SessionReconstructor",
    "reconstruct",
    "UsageAggregator",
    "UsageStatisticsService",
]
