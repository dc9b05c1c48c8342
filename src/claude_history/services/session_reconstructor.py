"""Rebuild the session list of a project from its transcript files."""

import logging
from pathlib import Path

from claude_history.services.jsonl_parser import extract_text, stream_records
from claude_history.services.transcript_scanner import scan_transcripts, session_id_for
from claude_history.types.records import ConversationRecord, RecordType
from claude_history.types.sessions import SessionInfo
from claude_history.utils.path_codec import PathSanitizer, SanitizeStrategy
from claude_history.utils.timestamps import parse_instant

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 45
TITLE_ELLIPSIS = "..."
WARMUP_SESSION_PREFIX = "agent-"
PLACEHOLDER_TITLES = ("warmup", "no prompt")
MIN_SESSION_RECORDS = 2


def load_sessions(project_dir: str | Path) -> dict[str, list[ConversationRecord]]:
    """Parse every transcript in a project directory, keyed by session id.

    Transcripts without a single valid record are left out.
    """
    sessions: dict[str, list[ConversationRecord]] = {}
    for transcript in scan_transcripts(project_dir):
        session_id = session_id_for(transcript)
        try:
            records = list(stream_records(transcript))
        except OSError:
            logger.exception("Failed to read transcript %s", transcript)
            continue
        if records:
            sessions[session_id] = records
    return sessions


def normalize_title(text: str) -> str:
    text = " ".join(text.splitlines()).strip()
    if len(text) > TITLE_MAX_LENGTH:
        text = text[:TITLE_MAX_LENGTH] + TITLE_ELLIPSIS
    return text


def derive_title(records: list[ConversationRecord]) -> str | None:
    """Title a session after its first real user prompt."""
    for record in records:
        if record.type is not RecordType.USER or record.is_meta:
            continue
        text = extract_text(record.content)
        if not text:
            continue
        title = normalize_title(text)
        if title:
            return title
    return None


def is_valid_session(session_id: str, title: str | None, message_count: int) -> bool:
    """Drop warm-up sessions, untitled sessions and one-liners."""
    if session_id.startswith(WARMUP_SESSION_PREFIX):
        return False
    if not title:
        return False
    lowered = title.lower()
    if any(lowered.startswith(placeholder) for placeholder in PLACEHOLDER_TITLES):
        return False
    return message_count >= MIN_SESSION_RECORDS


def summarize_session(session_id: str, records: list[ConversationRecord]) -> SessionInfo:
    timestamps = [ts for ts in (parse_instant(r.timestamp) for r in records) if ts > 0]
    return SessionInfo(
        session_id=session_id,
        title=derive_title(records),
        message_count=len(records),
        first_timestamp=min(timestamps, default=0),
        last_timestamp=max(timestamps, default=0),
    )


def reconstruct(project_dir: str | Path) -> list[SessionInfo]:
    """Valid sessions of a project, most recently active first."""
    sessions = []
    for session_id, records in load_sessions(project_dir).items():
        info = summarize_session(session_id, records)
        if is_valid_session(info.session_id, info.title, info.message_count):
            sessions.append(info)

    sessions.sort(key=lambda s: s.last_timestamp, reverse=True)
    return sessions


class SessionReconstructor:
    """Resolves project paths to transcript directories under a projects root."""

    def __init__(self, projects_dir: str | Path):
        self._projects_dir = Path(projects_dir)
        self._sanitizer = PathSanitizer(SanitizeStrategy.ALPHANUMERIC)

    def project_dir(self, project_path: str) -> Path:
        return self._projects_dir / self._sanitizer.sanitize(project_path)

    def sessions_for_project(self, project_path: str | None) -> list[SessionInfo]:
        if not project_path:
            return []
        return reconstruct(self.project_dir(project_path))
