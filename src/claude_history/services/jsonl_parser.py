"""Streaming JSONL parser for transcripts and the flat history log."""

import logging
from pathlib import Path
from typing import Iterator

import orjson

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

logger = logging.getLogger(__name__)

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024


def _load_object(line: str, source: str = "<line>", line_num: int = 0) -> dict | None:
    """Decode one JSONL line into an object, or None when it is unusable."""
    line = line.strip()
    if not line:
        return None

    if len(line) > MAX_LINE_SIZE:
        logger.warning(
            "Line %d in %s exceeds %dMB, skipping",
            line_num, source, MAX_LINE_SIZE // (1024 * 1024),
        )
        return None

    try:
        raw = orjson.loads(line)
    except orjson.JSONDecodeError as e:
        logger.debug("Malformed JSON at line %d in %s: %s", line_num, source, e)
        return None
    return raw if isinstance(raw, dict) else None


def parse_record_line(line: str) -> ConversationRecord | None:
    """Parse one transcript line. Returns None when the line is unusable."""
    raw = _load_object(line)
    if raw is None:
        return None
    return parse_record(raw)


def parse_history_line(line: str) -> HistoryEntry | None:
    """Parse one history-log line. Returns None when the line is unusable."""
    raw = _load_object(line)
    if raw is None:
        return None
    return parse_history_entry(raw)


def parse_record(raw: dict) -> ConversationRecord | None:
    """Build a ConversationRecord from a decoded transcript object."""
    message = raw.get("message")
    if message is None:
        message = {}
    elif not isinstance(message, dict):
        return None

    type_str = raw.get("type")
    if type_str is not None and not isinstance(type_str, str):
        return None

    usage = None
    raw_usage = message.get("usage")
    if isinstance(raw_usage, dict):
        usage = TokenUsage(
            input_tokens=_as_int(raw_usage.get("input_tokens")),
            output_tokens=_as_int(raw_usage.get("output_tokens")),
            cache_read_input_tokens=_as_int(raw_usage.get("cache_read_input_tokens")),
            cache_creation_input_tokens=_as_int(raw_usage.get("cache_creation_input_tokens")),
        )

    return ConversationRecord(
        uuid=_as_str(raw.get("uuid")),
        session_id=_as_str(raw.get("sessionId")),
        parent_uuid=raw.get("parentUuid") if isinstance(raw.get("parentUuid"), str) else None,
        timestamp=_as_str(raw.get("timestamp")),
        type=RecordType.from_raw(type_str),
        raw_type=type_str or "",
        role=_as_str(message.get("role")),
        content=parse_content(message.get("content")),
        is_meta=raw.get("isMeta") is True,
        is_sidechain=raw.get("isSidechain") is True,
        cwd=_as_str(raw.get("cwd")),
        model=_as_str(message.get("model")),
        usage=usage,
    )


def parse_content(content) -> MessageContent:
    """Turn a raw ``message.content`` value into the content variant."""
    if isinstance(content, list):
        blocks = []
        for block in content:
            if isinstance(block, dict):
                block_type = block.get("type")
                text = block.get("text")
                blocks.append(ContentBlock(
                    type=block_type if isinstance(block_type, str) else None,
                    text=text if isinstance(text, str) else None,
                ))
            else:
                blocks.append(ContentBlock())
        return BlockContent(tuple(blocks))
    if isinstance(content, str):
        return TextContent(content)
    return TextContent("")


def parse_history_entry(raw: dict) -> HistoryEntry:
    pasted = raw.get("pastedContents")
    project = raw.get("project")
    session_id = raw.get("sessionId")
    return HistoryEntry(
        display=_as_str(raw.get("display")),
        pasted_contents=pasted if isinstance(pasted, dict) else {},
        timestamp=_as_int(raw.get("timestamp")),
        project=project if isinstance(project, str) else None,
        session_id=session_id if isinstance(session_id, str) else None,
    )


def extract_text(content: MessageContent) -> str | None:
    """Return the displayable text of a message body.

    Block lists are scanned from the end; the last text block wins and
    tool/thinking/image blocks are ignored.
    """
    match content:
        case TextContent(text=text):
            return text
        case BlockContent(blocks=blocks):
            for block in reversed(blocks):
                if block.type == "text" and block.text is not None:
                    return block.text
    return None


def stream_records(file_path: str | Path) -> Iterator[ConversationRecord]:
    """Stream-parse a transcript file, yielding ConversationRecord objects.

    Malformed lines are logged and skipped.
    """
    for line_num, raw in _stream_objects(file_path):
        record = parse_record(raw)
        if record is None:
            logger.debug("Unusable record at line %d in %s", line_num, file_path)
            continue
        yield record


def stream_history(file_path: str | Path) -> Iterator[HistoryEntry]:
    """Stream-parse the flat history log."""
    for _, raw in _stream_objects(file_path):
        yield parse_history_entry(raw)


def _stream_objects(file_path: str | Path) -> Iterator[tuple[int, dict]]:
    path = Path(file_path)
    if not path.exists():
        logger.debug("File not found: %s", path)
        return

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line_num, line in enumerate(f, start=1):
            raw = _load_object(line, path.name, line_num)
            if raw is not None:
                yield line_num, raw


def _as_str(value) -> str:
    return value if isinstance(value, str) else ""


def _as_int(value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0
