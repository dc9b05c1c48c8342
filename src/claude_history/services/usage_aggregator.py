"""Token usage and cost aggregation over transcript files."""

import logging
from pathlib import Path

import orjson
from PySide6.QtCore import QObject, QThread, Signal, Slot

from claude_history.services.session_reconstructor import load_sessions
from claude_history.services.transcript_scanner import iter_project_dirs
from claude_history.types.records import ConversationRecord, RecordType, TokenUsage
from claude_history.types.sessions import ModelUsage, ProjectStatistics, SessionUsage, UsageQuota
from claude_history.utils.path_codec import PathSanitizer, SanitizeStrategy
from claude_history.utils.pricing import calculate_cost, context_limit
from claude_history.utils.timestamps import now_ms, parse_instant

logger = logging.getLogger(__name__)

ALL_PROJECTS = "all"
MONTHLY_TOKEN_LIMIT = 5_000_000


def aggregate_records(records: list[ConversationRecord]) -> dict[str, TokenUsage]:
    """Sum assistant usage per model. Records without usage add nothing."""
    by_model: dict[str, TokenUsage] = {}
    for record in records:
        if record.type is not RecordType.ASSISTANT or record.usage is None:
            continue
        by_model[record.model] = by_model.get(record.model, TokenUsage()) + record.usage
    return by_model


def summarize_usage(session_id: str, records: list[ConversationRecord]) -> SessionUsage:
    by_model = aggregate_records(records)
    total = sum(by_model.values(), TokenUsage())
    return SessionUsage(
        session_id=session_id,
        usage=total,
        cost=sum(calculate_cost(usage, model) for model, usage in by_model.items()),
        models=sorted(model for model in by_model if model),
        message_count=len(records),
        last_timestamp=max((parse_instant(r.timestamp) for r in records), default=0),
    )


def usage_quota(stats: ProjectStatistics, monthly_limit: int = MONTHLY_TOKEN_LIMIT) -> UsageQuota:
    """Share of the monthly token budget consumed, clamped to 0-100."""
    total_tokens = stats.total_usage.input_tokens + stats.total_usage.output_tokens
    percentage = 0
    if monthly_limit > 0:
        percentage = max(0, min(100, int(total_tokens * 100.0 / monthly_limit)))
    return UsageQuota(
        percentage=percentage,
        total_tokens=total_tokens,
        limit=monthly_limit,
        estimated_cost=stats.estimated_cost,
    )


def resolve_scope(content: str | None, current_project: str | None) -> str:
    """Interpret a usage request payload as ``"all"`` or a project path.

    Accepts ``""``, ``"{}"``, ``{"scope": "current"|"all"}``, the bare word
    ``current`` or a raw project path. Any other JSON value is taken as a
    raw path too.
    """
    if not content or content == "{}":
        return ALL_PROJECTS
    try:
        payload = orjson.loads(content)
    except orjson.JSONDecodeError:
        payload = None

    if isinstance(payload, dict):
        if payload.get("scope") == "current" and current_project:
            return current_project
        return ALL_PROJECTS
    if content == "current":
        return current_project or ALL_PROJECTS
    return content


class UsageAggregator:
    """Builds ProjectStatistics for one project or for every project."""

    def __init__(self, projects_dir: str | Path):
        self._projects_dir = Path(projects_dir)
        self._sanitizer = PathSanitizer(SanitizeStrategy.ALPHANUMERIC)

    def _project_dirs(self, scope: str) -> list[Path]:
        if scope == ALL_PROJECTS:
            return iter_project_dirs(self._projects_dir)
        return [self._projects_dir / self._sanitizer.sanitize(scope)]

    def project_statistics(self, scope: str = ALL_PROJECTS) -> ProjectStatistics:
        scope = scope or ALL_PROJECTS
        sessions: list[SessionUsage] = []
        by_model: dict[str, TokenUsage] = {}

        for project_dir in self._project_dirs(scope):
            for session_id, records in load_sessions(project_dir).items():
                sessions.append(summarize_usage(session_id, records))
                for model, usage in aggregate_records(records).items():
                    by_model[model] = by_model.get(model, TokenUsage()) + usage

        sessions.sort(key=lambda s: s.last_timestamp, reverse=True)
        models = [
            ModelUsage(
                model=model,
                usage=usage,
                cost=calculate_cost(usage, model),
                context_limit=context_limit(model),
            )
            for model, usage in sorted(by_model.items())
        ]
        logger.debug("Aggregated usage for %s: %d sessions", scope, len(sessions))
        return ProjectStatistics(
            project_path=scope,
            total_sessions=len(sessions),
            total_usage=sum((m.usage for m in models), TokenUsage()),
            estimated_cost=sum(m.cost for m in models),
            sessions=sessions,
            by_model=models,
            last_updated=now_ms(),
        )


class _UsageWorker(QThread):
    """Background thread for aggregating usage across transcripts."""

    result_ready = Signal(str, str, str)  # scope, statistics json, error

    def __init__(self, aggregator: UsageAggregator, scope: str, monthly_limit: int, parent=None):
        super().__init__(parent)
        self._aggregator = aggregator
        self._scope = scope
        self._monthly_limit = monthly_limit

    def run(self):
        try:
            stats = self._aggregator.project_statistics(self._scope)
            payload = stats.to_dict()
            payload["quota"] = usage_quota(stats, self._monthly_limit).to_dict()
            self.result_ready.emit(self._scope, orjson.dumps(payload).decode(), "")
        except Exception as e:
            logger.exception("Usage aggregation failed for %s", self._scope)
            self.result_ready.emit(self._scope, "", f"Failed to get usage statistics: {e}")


class UsageStatisticsService(QObject):
    """Runs usage aggregation off the caller's thread and reports back via signals.

    Only one scan runs at a time. Requests made while a scan is in flight
    are coalesced into a single follow-up scan for the latest scope.
    """

    statistics_ready = Signal(str)  # ProjectStatistics json
    usage_updated = Signal(str)     # UsageQuota json
    error_occurred = Signal(str)
    busy_changed = Signal(bool)

    def __init__(
        self,
        projects_dir: str | Path,
        current_project: str | None = None,
        monthly_limit: int = MONTHLY_TOKEN_LIMIT,
        parent=None,
    ):
        super().__init__(parent)
        self._aggregator = UsageAggregator(projects_dir)
        self._current_project = current_project
        self._monthly_limit = monthly_limit
        self._worker: _UsageWorker | None = None
        self._pending_scope: str | None = None

    def is_busy(self) -> bool:
        return self._worker is not None

    @Slot(str)
    def request_statistics(self, content: str = ""):
        scope = resolve_scope(content, self._current_project)
        if self._worker is not None:
            self._pending_scope = scope
            return
        self._start(scope)

    def _start(self, scope: str):
        worker = _UsageWorker(self._aggregator, scope, self._monthly_limit, self)
        worker.result_ready.connect(self._on_finished)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        self.busy_changed.emit(True)
        worker.start()

    def _on_finished(self, scope: str, statistics_json: str, error: str):
        self._worker = None
        logger.debug("Usage scan finished for %s", scope)
        if error:
            self.error_occurred.emit(error)
        else:
            payload = orjson.loads(statistics_json)
            self.statistics_ready.emit(statistics_json)
            self.usage_updated.emit(orjson.dumps(payload["quota"]).decode())

        if self._pending_scope is not None:
            next_scope, self._pending_scope = self._pending_scope, None
            self._start(next_scope)
        else:
            self.busy_changed.emit(False)

    def wait(self, timeout_ms: int = 5000) -> bool:
        """Block until the in-flight worker thread exits."""
        worker = self._worker
        if worker is None:
            return True
        return worker.wait(timeout_ms)
