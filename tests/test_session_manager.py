"""Tests for claude_session_insights.services.session_manager."""

import pytest

from claude_session_insights.services.config_manager import ClaudeHistoryConfig, ConfigManager
from claude_session_insights.services.session_manager import SessionManager
from claude_session_insights.types import (
    DateFilter,
    SessionDetail,
    SessionListFilter,
    SessionMeta,
    SessionView,
    UserMessage,
)
from claude_session_insights.utils.redaction import REDACTED_PROMPT
from helpers import DAY, PROJECT, assistant_line, history_row, local_ms, set_mtime, text, user_line

TODAY = SessionListFilter(date=DAY)


@pytest.fixture
def populated(paths, write_history, write_transcript):
    write_history([
        history_row("s1", "fix the parser", local_ms(hour=9)),
        history_row("s1", "add a test", local_ms(hour=9, minute=10)),
        history_row("s1", "run it", local_ms(hour=9, minute=20)),
        history_row("s2", "quick question", local_ms(hour=11), project="/home/wiz/projects/docs"),
    ])
    write_transcript("s1", [
        user_line("fix the parser", gitBranch="main"),
        assistant_line(
            [text("Looking at the parser implementation first.")],
            model="claude-opus-4-6",
            usage={"input_tokens": 1000, "output_tokens": 500},
        ),
    ])
    return paths


@pytest.fixture
def manager(populated):
    return SessionManager(ClaudeHistoryConfig(claude_dir=populated.base))


class TestConstruction:
    def test_accepts_config_manager(self, populated):
        config = ConfigManager(ClaudeHistoryConfig(claude_dir=populated.base, privacy="strict"))
        manager = SessionManager(config)
        assert manager.privacy.redact_prompts
        assert manager.paths.base == populated.base

    def test_defaults(self):
        manager = SessionManager()
        assert not manager.privacy.redact_prompts


class TestSessionTiers:
    def test_list_sessions(self, manager):
        sessions = manager.list_sessions(TODAY)
        assert [type(s) for s in sessions] == [SessionView, SessionView]
        assert [s.session_id for s in sessions] == ["s1", "s2"]
        assert manager.count_sessions(TODAY) == 2

    def test_project_filter(self, manager):
        sessions = manager.list_sessions(SessionListFilter(date=DAY, project="docs"))
        assert [s.session_id for s in sessions] == ["s2"]

    def test_with_meta(self, manager):
        metas = manager.list_sessions_with_meta(TODAY)
        assert all(type(m) is SessionMeta for m in metas)
        assert metas[0].git_branch == "main"
        assert metas[0].model == "claude-opus-4-6"
        assert metas[0].total_input_tokens == 1000
        assert metas[1].model is None

    def test_session_detail_without_history(self, manager):
        detail = manager.session_detail("s1", PROJECT)
        assert isinstance(detail, SessionDetail)
        assert detail.project_name == "myapp"
        assert detail.prompts == []
        assert detail.assistant_summaries == ["Looking at the parser implementation first."]

    def test_transcript_streams_filtered_records(self, populated):
        manager = SessionManager(ClaudeHistoryConfig(claude_dir=populated.base, privacy="strict"))
        records = list(manager.transcript("s1", PROJECT))
        assert isinstance(records[0], UserMessage)
        assert records[0].content == REDACTED_PROMPT

    def test_strict_listing(self, populated):
        manager = SessionManager(ClaudeHistoryConfig(claude_dir=populated.base, privacy="strict"))
        assert all(p == REDACTED_PROMPT for s in manager.list_sessions(TODAY) for p in s.prompts)


class TestArtifacts:
    def test_projects(self, manager):
        assert [p.name for p in manager.list_projects()] == ["myapp"]

    def test_project_memory(self, manager, populated):
        memory = populated.projects_dir / "-home-wiz-projects-myapp" / "memory" / "MEMORY.md"
        memory.parent.mkdir()
        memory.write_text("notes")
        assert manager.project_memory(PROJECT).content == "notes"

    def test_plans(self, manager, populated):
        plan = populated.plans_dir / "p.md"
        plan.parent.mkdir()
        plan.write_text("# Ship it\nsoon")
        set_mtime(plan)
        plans = manager.list_plans(DateFilter(date=DAY), include_content=True)
        assert plans[0].title == "Ship it"
        assert plans[0].content == "# Ship it\nsoon"

    def test_empty_collections(self, manager):
        assert manager.list_tasks(DateFilter(date=DAY)) == []
        assert manager.list_todos(DateFilter(date=DAY)) == []
        assert manager.list_skills() == []
        assert manager.stats() is None


class TestAggregations:
    def test_daily(self, manager):
        summary = manager.daily(DAY)
        assert summary.total_sessions == 2
        assert [s.session_id for s in summary.sessions] == ["s1"]

    def test_daily_range(self, manager):
        assert [s.date for s in manager.daily_range("2026-02-08", "2026-02-10")] == [DAY]

    def test_by_project(self, manager):
        assert [s.project_name for s in manager.by_project(TODAY)] == ["myapp", "docs"]

    def test_tool_usage(self, manager):
        assert manager.tool_usage(TODAY).total == 0

    def test_estimates(self, manager):
        sessions = manager.list_sessions(TODAY)
        assert manager.estimate_hours(sessions) == pytest.approx(25 / 60)
        meta = manager.list_sessions_with_meta(TODAY)[0]
        # opus: 1000 input at $15/M + 500 output at $75/M
        assert manager.estimate_cost(meta) == pytest.approx(0.015 + 0.0375)
