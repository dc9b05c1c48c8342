"""Named-query entry point used by the presentation layer."""

import logging
from typing import Callable
from urllib.parse import unquote

import orjson

from claude_history.services.config_manager import IndexConfig
from claude_history.services.conversation_details import read_conversation_details
from claude_history.services.session_reconstructor import SessionReconstructor
from claude_history.services.statistics_aggregator import (
    build_projects,
    compute_statistics,
    read_history,
    search_history,
)
from claude_history.services.usage_aggregator import ALL_PROJECTS, UsageAggregator, usage_quota
from claude_history.types.responses import ApiResponse

logger = logging.getLogger(__name__)

_JSON_OPTIONS = orjson.OPT_NON_STR_KEYS


def parse_request(raw: str) -> tuple[str, dict[str, str]]:
    """Split a bridge request ``endpoint|k=v&k2=v2`` into endpoint and params.

    Values are percent-decoded; pairs without ``=`` are ignored.
    """
    endpoint, _, query = raw.partition("|")
    params: dict[str, str] = {}
    if query:
        for pair in query.split("&"):
            key, sep, value = pair.partition("=")
            if sep:
                params[key] = unquote(value)
    return endpoint, params


class QueryService:
    """Dispatches named queries and wraps every result in an ApiResponse."""

    def __init__(self, config: IndexConfig):
        self._config = config
        self._sessions = SessionReconstructor(config.projects_dir)
        self._usage = UsageAggregator(config.projects_dir)
        self._handlers: dict[str, Callable[[dict[str, str]], object]] = {
            "history": self._history,
            "stats": self._stats,
            "search": self._search,
            "project": self._project,
            "details": self._details,
            "usage": self._usage_statistics,
        }

    def handle(self, endpoint: str, params: dict[str, str] | None = None) -> str:
        """Run a query and return the JSON envelope."""
        return self.serialize(self.query(endpoint, params))

    def handle_request(self, raw: str) -> str:
        endpoint, params = parse_request(raw)
        return self.handle(endpoint, params)

    def query(self, endpoint: str, params: dict[str, str] | None = None) -> dict:
        """Run a query and return the envelope as a dict. Never raises."""
        try:
            name = endpoint[1:] if endpoint.startswith("/") else endpoint
            handler = self._handlers.get(name)
            if handler is None:
                logger.warning("Unknown endpoint requested: %s", endpoint)
                return ApiResponse.failure(f"Unknown endpoint: {endpoint}").to_dict()
            return ApiResponse.ok(handler(params or {})).to_dict()
        except Exception as e:
            logger.exception("Failed to handle %s", endpoint)
            return ApiResponse.failure(f"Failed to handle request: {e}").to_dict()

    @staticmethod
    def serialize(envelope: dict) -> str:
        return orjson.dumps(envelope, option=_JSON_OPTIONS).decode()

    def _history(self, params: dict[str, str]) -> dict:
        history = read_history(self._config.history_file)
        return {
            "history": [e.to_dict() for e in history[: self._config.history_limit]],
            "projects": [p.to_dict() for p in build_projects(history)],
            "stats": compute_statistics(history).to_dict(),
            "total": len(history),
        }

    def _stats(self, params: dict[str, str]) -> dict:
        return compute_statistics(read_history(self._config.history_file)).to_dict()

    def _search(self, params: dict[str, str]) -> dict:
        query = params.get("q", "")
        results = search_history(
            read_history(self._config.history_file), query, self._config.search_limit,
        )
        return {
            "query": query,
            "count": len(results),
            "results": [e.to_dict() for e in results],
        }

    def _project(self, params: dict[str, str]) -> dict:
        project_path = params.get("path", "")
        sessions = self._sessions.sessions_for_project(project_path)
        return {
            "sessions": [s.to_dict() for s in sessions],
            "currentProject": project_path,
            "total": sum(s.message_count for s in sessions),
            "sessionCount": len(sessions),
        }

    def _details(self, params: dict[str, str]) -> dict:
        return read_conversation_details(self._config.projects_dir, params.get("path", ""))

    def _usage_statistics(self, params: dict[str, str]) -> dict:
        stats = self._usage.project_statistics(params.get("scope") or ALL_PROJECTS)
        payload = stats.to_dict()
        payload["quota"] = usage_quota(stats, self._config.monthly_token_limit).to_dict()
        return payload
