"""Derived report types. None of these have identity; they are rebuilt per call."""

from dataclasses import dataclass, field

from claude_session_insights.types.artifacts import PlanInfo, TaskInfo, TodoItem
from claude_session_insights.types.sessions import SessionDetail, SessionView, ToolCallSummary


@dataclass
class DateFilter:
    date: str | None = None        # YYYY-MM-DD, wins over from/to
    from_date: str | None = None
    to_date: str | None = None


@dataclass
class SessionListFilter(DateFilter):
    project: str | None = None     # Case-insensitive substring of the project name


@dataclass
class DailySummary:
    date: str
    sessions: list[SessionDetail] = field(default_factory=list)
    short_sessions: list[SessionView] = field(default_factory=list)
    tasks: list[TaskInfo] = field(default_factory=list)
    plans: list[PlanInfo] = field(default_factory=list)
    todos: list[TodoItem] = field(default_factory=list)
    total_prompts: int = 0
    total_sessions: int = 0
    projects: list[str] = field(default_factory=list)
    project_memory: dict[str, str] = field(default_factory=dict)  # project path -> MEMORY.md snippet
    estimated_hours: float = 0.0
    estimated_cost: float = 0.0


@dataclass
class ProjectSummary:
    project: str
    project_name: str
    session_count: int = 0
    prompt_count: int = 0
    estimated_hours: float = 0.0
    estimated_cost: float = 0.0
    branches: list[str] = field(default_factory=list)
    files_referenced: list[str] = field(default_factory=list)
    tool_calls: list[ToolCallSummary] = field(default_factory=list)
    models: list[str] = field(default_factory=list)


@dataclass
class RankedCount:
    value: str
    count: int


@dataclass
class ToolUsageReport:
    by_tool: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)
    top_files: list[RankedCount] = field(default_factory=list)
    top_commands: list[RankedCount] = field(default_factory=list)
    total: int = 0
