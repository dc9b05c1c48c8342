"""Integration tests for the command-line entry point."""

import json
import shutil

import pytest
from click.testing import CliRunner

from claude_history.app import cli
from helpers import make_record, write_conversation, write_jsonl


@pytest.fixture
def runner(isolated_settings):
    return CliRunner()


@pytest.fixture
def home(claude_home, history_path):
    shutil.copy(history_path, claude_home / ".claude" / "history.jsonl")
    project = claude_home / ".claude" / "projects" / "-home-wiz-projects-myapp"
    project.mkdir()
    write_conversation(project, "s1", "Fix the login bug", "2026-02-13T10:00:00Z")
    write_jsonl(project / "s2.jsonl", [
        make_record("u1", "user", "Count my tokens"),
        make_record("a1", "assistant", "ok", model="claude-haiku-4-5",
                    usage={"input_tokens": 1000, "output_tokens": 500}),
    ])
    return claude_home


class TestAppImports:
    def test_app_module_importable(self):
        from claude_history import app
        assert hasattr(app, "run")


class TestCli:
    def test_query_stats(self, runner, home):
        result = runner.invoke(cli, ["--home", str(home), "query", "stats"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["totalMessages"] == 4

    def test_query_with_params(self, runner, home):
        result = runner.invoke(cli, [
            "--home", str(home), "query", "project", "path=/home/wiz/projects/myapp",
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["sessionCount"] == 2

    def test_bad_param(self, runner, home):
        result = runner.invoke(cli, ["--home", str(home), "query", "search", "oops"])
        assert result.exit_code != 0

    def test_unknown_endpoint(self, runner, home):
        result = runner.invoke(cli, ["--home", str(home), "query", "bogus"])
        assert json.loads(result.output)["success"] is False

    def test_raw_request(self, runner, home):
        result = runner.invoke(cli, ["--home", str(home), "request", "/search|q=LOGIN%20bug"])
        assert json.loads(result.output)["data"]["count"] == 1

    def test_usage(self, runner, home):
        result = runner.invoke(cli, [
            "--home", str(home), "usage", "--scope", "/home/wiz/projects/myapp",
        ])
        assert result.exit_code == 0, result.output
        stats = json.loads(result.output)
        assert stats["totalUsage"]["inputTokens"] == 1000
        assert stats["quota"]["totalTokens"] == 1500
