"""Global statistics, project grouping and search over the flat history log."""

import logging
from pathlib import Path

from claude_history.services.jsonl_parser import stream_history
from claude_history.types.records import HistoryEntry
from claude_history.types.sessions import ProjectInfo, Statistics
from claude_history.utils.path_codec import project_display_name
from claude_history.utils.timestamps import day_key

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 100


def read_history(history_file: str | Path) -> list[HistoryEntry]:
    """Load the whole history log, newest entries first."""
    history = list(stream_history(history_file))
    history.sort(key=lambda e: e.timestamp, reverse=True)
    return history


def build_projects(history: list[HistoryEntry]) -> list[ProjectInfo]:
    """Group history entries by project, most recently used project first."""
    projects: dict[str, ProjectInfo] = {}
    for entry in history:
        if entry.project is None:
            continue
        project = projects.get(entry.project)
        if project is None:
            project = ProjectInfo(path=entry.project, name=project_display_name(entry.project))
            projects[entry.project] = project
        project.count += 1
        project.messages.append(entry)
        if entry.timestamp > project.last_access:
            project.last_access = entry.timestamp

    return sorted(projects.values(), key=lambda p: p.last_access, reverse=True)


def compute_statistics(history: list[HistoryEntry]) -> Statistics:
    stats = Statistics(total_messages=len(history))
    if not history:
        return stats

    oldest_first = sorted(history, key=lambda e: e.timestamp)
    stats.first_message = oldest_first[0]
    stats.last_message = oldest_first[-1]
    stats.total_projects = len({e.project for e in history if e.project is not None})

    for entry in history:
        if entry.timestamp > 0:
            day = day_key(entry.timestamp)
            if day is None:
                logger.debug("Timestamp out of range, skipping day bucket: %d", entry.timestamp)
                continue
            stats.messages_by_day[day] = stats.messages_by_day.get(day, 0) + 1
    return stats


def search_history(
    history: list[HistoryEntry],
    query: str | None,
    limit: int = SEARCH_RESULT_LIMIT,
) -> list[HistoryEntry]:
    """Case-insensitive substring match on the prompt text, order preserved."""
    needle = (query or "").lower()
    results = []
    for entry in history:
        if len(results) >= limit:
            break
        if needle in entry.display.lower():
            results.append(entry)
    return results
