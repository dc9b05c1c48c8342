"""Discover transcript files inside Claude project directories."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TRANSCRIPT_SUFFIX = ".jsonl"


def scan_transcripts(project_dir: str | Path) -> list[Path]:
    """List non-empty ``*.jsonl`` files directly inside a project directory.

    A missing directory means "no history yet" and yields an empty list.
    Subdirectories are not descended into.
    """
    path = Path(project_dir)
    if not path.is_dir():
        return []

    transcripts = []
    for entry in sorted(path.iterdir()):
        if not entry.name.endswith(TRANSCRIPT_SUFFIX):
            continue
        try:
            if not entry.is_file() or entry.stat().st_size == 0:
                continue
        except OSError:
            logger.debug("Cannot stat %s, skipping", entry)
            continue
        transcripts.append(entry)
    return transcripts


def session_id_for(transcript: Path) -> str:
    """transcript ``abc-123.jsonl`` → session id ``abc-123``."""
    return transcript.name[: -len(TRANSCRIPT_SUFFIX)]


def iter_project_dirs(projects_root: str | Path) -> list[Path]:
    """List the project directories under the projects root."""
    root = Path(projects_root)
    if not root.is_dir():
        logger.debug("Projects root does not exist: %s", root)
        return []
    return [entry for entry in sorted(root.iterdir()) if entry.is_dir()]
