"""Central entry point tying readers, parsers and aggregations to one configuration."""

import logging
from typing import Iterable, Iterator

from claude_session_insights.services.aggregations import (
    build_daily_range,
    build_daily_summary,
    build_project_summaries,
    build_tool_usage_report,
)
from claude_session_insights.services.config_manager import ClaudeHistoryConfig, ConfigManager
from claude_session_insights.services.history_reader import filter_by_project, read_history
from claude_session_insights.services.plan_reader import read_plans
from claude_session_insights.services.project_reader import read_project_memory, read_projects
from claude_session_insights.services.session_parser import (
    parse_session_detail,
    peek_session,
    stream_transcript,
)
from claude_session_insights.services.skill_reader import read_skill_content, read_skills
from claude_session_insights.services.stats_reader import read_stats
from claude_session_insights.services.task_reader import read_tasks, read_todos
from claude_session_insights.types import (
    DailySummary,
    DateFilter,
    PlanInfo,
    ProjectInfo,
    ProjectMemory,
    ProjectSummary,
    SessionDetail,
    SessionListFilter,
    SessionMeta,
    SessionView,
    TaskInfo,
    TodoItem,
    ToolUsageReport,
    TranscriptRecord,
)
from claude_session_insights.utils.dates import resolve_date_range
from claude_session_insights.utils.path_codec import project_name
from claude_session_insights.utils.pricing import estimate_cost
from claude_session_insights.utils.time_estimator import estimate_hours

logger = logging.getLogger(__name__)


class SessionManager:
    """Reads Claude Code session data from a ~/.claude directory.

    Sessions come in three tiers of increasing cost: list_sessions reads
    history.jsonl only, list_sessions_with_meta also scans each transcript
    for branch/model/tokens, and session_detail extracts everything. Every
    call re-reads from disk; nothing is cached between calls.
    """

    def __init__(self, config: ClaudeHistoryConfig | ConfigManager | None = None):
        self._config = config if isinstance(config, ConfigManager) else ConfigManager(config)
        self.paths = self._config.paths
        self.privacy = self._config.privacy
        self.pricing = self._config.pricing

    # Sessions

    def _sessions(self, session_filter: SessionListFilter | None) -> list[SessionView]:
        from_date, to_date = resolve_date_range(session_filter)
        sessions = read_history(self.paths.history_file, from_date, to_date, self.privacy)
        return filter_by_project(sessions, session_filter.project if session_filter else None)

    def list_sessions(self, session_filter: SessionListFilter | None = None) -> list[SessionView]:
        """Fast: reads only history.jsonl."""
        return self._sessions(session_filter)

    def list_sessions_with_meta(self, session_filter: SessionListFilter | None = None) -> list[SessionMeta]:
        """Medium: also scans each transcript for branch, model and tokens."""
        return [
            peek_session(s, self.paths.projects_dir, self.privacy)
            for s in self._sessions(session_filter)
        ]

    def session_detail(self, session_id: str, project: str) -> SessionDetail:
        """Full: parses one transcript without any history.jsonl context."""
        session = SessionView(
            session_id=session_id,
            project=project,
            project_name=project_name(project),
        )
        return parse_session_detail(session, self.paths.projects_dir, self.privacy)

    def transcript(self, session_id: str, project: str) -> Iterator[TranscriptRecord]:
        """Streaming: yields filtered transcript records one at a time."""
        return stream_transcript(session_id, project, self.paths.projects_dir, self.privacy)

    def count_sessions(self, session_filter: SessionListFilter | None = None) -> int:
        return len(self._sessions(session_filter))

    # Projects and side artifacts

    def list_projects(self) -> list[ProjectInfo]:
        return read_projects(self.paths.projects_dir, self.privacy)

    def project_memory(self, project: str) -> ProjectMemory | None:
        return read_project_memory(project, self.paths.projects_dir)

    def list_tasks(self, date_filter: DateFilter | None = None) -> list[TaskInfo]:
        return read_tasks(self.paths.tasks_dir, *resolve_date_range(date_filter))

    def list_todos(self, date_filter: DateFilter | None = None) -> list[TodoItem]:
        return read_todos(self.paths.todos_dir, *resolve_date_range(date_filter))

    def list_plans(self, date_filter: DateFilter | None = None, include_content: bool = False) -> list[PlanInfo]:
        from_date, to_date = resolve_date_range(date_filter)
        return read_plans(self.paths.plans_dir, from_date, to_date, include_content)

    def list_skills(self) -> list[str]:
        return read_skills(self.paths.skills_dir)

    def read_skill(self, name: str) -> str:
        return read_skill_content(self.paths.skills_dir, name)

    def stats(self) -> dict | None:
        return read_stats(self.paths.stats_cache)

    # Aggregations

    def daily(self, date: str) -> DailySummary:
        return build_daily_summary(date, self.paths, self.privacy, self.pricing)

    def daily_range(self, from_date: str, to_date: str) -> list[DailySummary]:
        return build_daily_range(from_date, to_date, self.paths, self.privacy, self.pricing)

    def by_project(self, session_filter: SessionListFilter | None = None) -> list[ProjectSummary]:
        return build_project_summaries(session_filter, self.paths, self.privacy, self.pricing)

    def tool_usage(self, session_filter: SessionListFilter | None = None) -> ToolUsageReport:
        return build_tool_usage_report(session_filter, self.paths, self.privacy)

    def estimate_hours(self, sessions: Iterable[SessionView]) -> float:
        return estimate_hours(sessions)

    def estimate_cost(self, session: SessionMeta) -> float:
        return estimate_cost(session, self.pricing)
