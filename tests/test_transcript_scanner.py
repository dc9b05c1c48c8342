"""Tests for transcript discovery."""

from claude_history.services.transcript_scanner import (
    iter_project_dirs,
    scan_transcripts,
    session_id_for,
)


def test_lists_non_empty_jsonl(project_dir):
    (project_dir / "b-session.jsonl").write_text("{}\n")
    (project_dir / "a-session.jsonl").write_text("{}\n")
    (project_dir / "empty.jsonl").write_text("")
    (project_dir / "notes.txt").write_text("hello")

    found = scan_transcripts(project_dir)
    assert [p.name for p in found] == ["a-session.jsonl", "b-session.jsonl"]


def test_does_not_recurse(project_dir):
    nested = project_dir / "session-1" / "subagents"
    nested.mkdir(parents=True)
    (nested / "agent-1.jsonl").write_text("{}\n")
    assert scan_transcripts(project_dir) == []


def test_directory_named_like_transcript_ignored(project_dir):
    (project_dir / "odd.jsonl").mkdir()
    assert scan_transcripts(project_dir) == []


def test_missing_directory(tmp_path):
    assert scan_transcripts(tmp_path / "nope") == []


def test_session_id_for(project_dir):
    path = project_dir / "0b7e-42.jsonl"
    assert session_id_for(path) == "0b7e-42"


def test_iter_project_dirs(projects_dir):
    (projects_dir / "-b").mkdir()
    (projects_dir / "-a").mkdir()
    (projects_dir / "stray.jsonl").write_text("{}\n")
    assert [p.name for p in iter_project_dirs(projects_dir)] == ["-a", "-b"]


def test_iter_project_dirs_missing_root(tmp_path):
    assert iter_project_dirs(tmp_path / "missing") == []
