"""Legacy per-conversation detail documents (``<subdir>/conversation.json``)."""

import logging
from pathlib import Path

import orjson

from claude_history.types.responses import ConversationDetail
from claude_history.utils.path_codec import SanitizeStrategy, sanitize_path

logger = logging.getLogger(__name__)

CONVERSATION_FILE = "conversation.json"


def read_conversation_details(projects_dir: str | Path, project_path: str | None) -> dict:
    """Collect the conversation documents stored for a project.

    The documents are decoded but not interpreted; their shape belongs to
    whoever renders them.
    """
    details = {"path": project_path, "exists": False, "conversations": []}
    if not project_path:
        return details

    project_dir = Path(projects_dir) / sanitize_path(project_path, SanitizeStrategy.SEPARATORS)
    if not project_dir.is_dir():
        return details

    details["exists"] = True
    conversations = []
    for sub_dir in sorted(project_dir.iterdir()):
        conv_file = sub_dir / CONVERSATION_FILE
        if not sub_dir.is_dir() or not conv_file.is_file():
            continue
        try:
            detail = ConversationDetail(
                id=sub_dir.name,
                data=orjson.loads(conv_file.read_bytes()),
                timestamp=int(conv_file.stat().st_mtime * 1000),
            )
        except (OSError, orjson.JSONDecodeError) as e:
            logger.warning("Failed to read conversation file %s: %s", conv_file, e)
            continue
        conversations.append(detail.to_dict())

    details["conversations"] = conversations
    return details
