"""Tests for the legacy conversation-detail view."""

import json

from claude_history.services.conversation_details import read_conversation_details


def test_reads_documents_under_separator_name(projects_dir):
    # Separator-only naming keeps the underscore.
    project = projects_dir / "-home-wiz-my_app"
    (project / "conv-b").mkdir(parents=True)
    (project / "conv-a").mkdir()
    (project / "conv-a" / "conversation.json").write_text(json.dumps({"messages": [1, 2]}))
    (project / "conv-b" / "conversation.json").write_text(json.dumps(["opaque", {"x": None}]))

    details = read_conversation_details(projects_dir, "/home/wiz/my_app")

    assert details["path"] == "/home/wiz/my_app"
    assert details["exists"] is True
    assert [c["id"] for c in details["conversations"]] == ["conv-a", "conv-b"]
    assert details["conversations"][0]["data"] == {"messages": [1, 2]}
    assert details["conversations"][1]["data"] == ["opaque", {"x": None}]
    assert details["conversations"][0]["timestamp"] > 0


def test_missing_project(projects_dir):
    details = read_conversation_details(projects_dir, "/home/wiz/none")
    assert details == {"path": "/home/wiz/none", "exists": False, "conversations": []}


def test_empty_path(projects_dir):
    assert read_conversation_details(projects_dir, "")["exists"] is False


def test_skips_bad_documents(projects_dir):
    project = projects_dir / "-home-wiz-app"
    (project / "broken").mkdir(parents=True)
    (project / "broken" / "conversation.json").write_text("{oops")
    (project / "no-doc").mkdir()
    (project / "loose.jsonl").write_text("{}\n")

    details = read_conversation_details(projects_dir, "/home/wiz/app")
    assert details["exists"] is True
    assert details["conversations"] == []
