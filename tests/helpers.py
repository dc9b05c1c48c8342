"""Shared test helpers."""

import json
from pathlib import Path

from PySide6.QtCore import QCoreApplication


def wait_for_worker(service, attempts: int = 50):
    """Wait for the background usage worker to finish and deliver its signals."""
    for _ in range(attempts):
        if not service.is_busy():
            return
        service.wait(5000)
        QCoreApplication.processEvents()


def make_record(
    uuid,
    msg_type="user",
    content="Hello",
    timestamp="2026-02-13T10:00:00.000Z",
    is_meta=False,
    usage=None,
    model="",
    parent=None,
):
    """Build one raw transcript line."""
    message = {"role": msg_type, "content": content}
    if model:
        message["model"] = model
    if usage is not None:
        message["usage"] = usage
    return json.dumps({
        "uuid": uuid,
        "parentUuid": parent,
        "type": msg_type,
        "timestamp": timestamp,
        "cwd": "/home/wiz/projects/myapp",
        "isMeta": is_meta,
        "isSidechain": False,
        "message": message,
    })


def write_jsonl(path: Path, lines: list[str]):
    """Write JSONL lines to a file."""
    path.write_text("\n".join(lines) + "\n")


def write_conversation(project_dir: Path, session_id: str, prompt: str, timestamp: str):
    """A minimal valid two-record session."""
    write_jsonl(project_dir / f"{session_id}.jsonl", [
        make_record(f"{session_id}-1", "user", prompt, timestamp=timestamp),
        make_record(f"{session_id}-2", "assistant",
                    [{"type": "text", "text": "Sure."}], timestamp=timestamp),
    ])
