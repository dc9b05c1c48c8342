"""Shared test fixtures for claude-history."""

import sys
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication for tests that need Qt."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv or ["test"])
    yield app


@pytest.fixture
def isolated_settings(qapp, tmp_path):
    """Point QSettings at a throwaway directory."""
    from PySide6.QtCore import QSettings
    QSettings.setDefaultFormat(QSettings.IniFormat)
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, str(tmp_path / "config"))
    return tmp_path / "config"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def simple_session_path(fixtures_dir) -> Path:
    return fixtures_dir / "simple_session.jsonl"


@pytest.fixture
def malformed_session_path(fixtures_dir) -> Path:
    return fixtures_dir / "malformed_session.jsonl"


@pytest.fixture
def history_path(fixtures_dir) -> Path:
    return fixtures_dir / "history.jsonl"


@pytest.fixture
def claude_home(tmp_path) -> Path:
    """Create a temporary home directory with an empty .claude/projects tree."""
    (tmp_path / ".claude" / "projects").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def projects_dir(claude_home) -> Path:
    return claude_home / ".claude" / "projects"


@pytest.fixture
def project_dir(projects_dir) -> Path:
    """Transcript directory for /home/wiz/projects/myapp."""
    path = projects_dir / "-home-wiz-projects-myapp"
    path.mkdir()
    return path
