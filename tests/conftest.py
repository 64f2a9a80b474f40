"""Shared test fixtures for claude-session-insights."""

from pathlib import Path

import pytest

from claude_session_insights.utils import redaction
from claude_session_insights.utils.path_codec import ClaudePaths, claude_paths, encode_path
from helpers import PROJECT, write_jsonl


@pytest.fixture
def claude_dir(tmp_path) -> Path:
    """An empty ~/.claude directory structure."""
    base = tmp_path / ".claude"
    (base / "projects").mkdir(parents=True)
    return base


@pytest.fixture
def paths(claude_dir) -> ClaudePaths:
    return claude_paths(claude_dir)


@pytest.fixture
def home_dir(monkeypatch) -> str:
    """Pin the home directory used by home-dir redaction."""
    home = "/home/wiz"
    monkeypatch.setattr(redaction, "HOME_DIR", home)
    return home


@pytest.fixture
def write_history(paths):
    def _write(rows):
        return write_jsonl(paths.history_file, rows)
    return _write


@pytest.fixture
def write_transcript(paths):
    def _write(session_id, rows, project=PROJECT):
        return write_jsonl(paths.projects_dir / encode_path(project) / f"{session_id}.jsonl", rows)
    return _write
