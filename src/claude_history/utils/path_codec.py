"""Map project paths to Claude project directory names.

Two naming conventions exist under ``~/.claude/projects``:

* ``ALPHANUMERIC``: every character outside ``[A-Za-z0-9]`` becomes ``-``.
  Session transcripts (``<id>/<sessionId>.jsonl``) live under these names.
* ``SEPARATORS``: only path separators become ``-``. The legacy
  ``<id>/<subdir>/conversation.json`` detail documents live under these.

They agree for plain paths like ``/home/wiz/app`` but diverge as soon as the
path contains ``.``, ``_``, spaces or other punctuation, so callers must name
the convention they need.
"""

import re
from enum import Enum

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")

ROOT_NAME = "Root"


class SanitizeStrategy(str, Enum):
    ALPHANUMERIC = "alphanumeric"
    SEPARATORS = "separators"


def sanitize_path(path: str | None, strategy: SanitizeStrategy = SanitizeStrategy.ALPHANUMERIC) -> str:
    """Encode a project path as a directory name.

    /home/wiz/my_app  → -home-wiz-my-app   (ALPHANUMERIC)
    /home/wiz/my_app  → -home-wiz-my_app   (SEPARATORS)
    """
    if not path:
        return ""
    if strategy is SanitizeStrategy.ALPHANUMERIC:
        return _NON_ALNUM.sub("-", path)
    return path.replace("/", "-").replace("\\", "-")


class PathSanitizer:
    """A sanitizer bound to one naming convention."""

    def __init__(self, strategy: SanitizeStrategy = SanitizeStrategy.ALPHANUMERIC):
        self.strategy = strategy

    def sanitize(self, path: str | None) -> str:
        return sanitize_path(path, self.strategy)


def project_display_name(path: str | None) -> str:
    """Get the last path segment as the project display name.

    /home/wiz/AI/LLM → LLM
    /                → Root
    """
    if not path:
        return ROOT_NAME
    name = re.split(r"[/\\]", path.rstrip("/\\"))[-1]
    return name or ROOT_NAME
