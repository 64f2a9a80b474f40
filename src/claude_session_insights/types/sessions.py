"""Session types for the three read tiers."""

from dataclasses import dataclass, field, fields
from enum import Enum


@dataclass(frozen=True)
class HistoryRecord:
    """One line of history.jsonl: a single user prompt."""
    display: str
    timestamp: int  # epoch milliseconds
    project: str
    session_id: str


@dataclass
class TimeRange:
    start: int = 0
    end: int = 0


@dataclass
class SessionView:
    """Tier 1: built from history.jsonl only, no transcript reads."""
    session_id: str
    project: str
    project_name: str
    prompts: list[str] = field(default_factory=list)
    prompt_timestamps: list[int] = field(default_factory=list)
    time_range: TimeRange = field(default_factory=TimeRange)

    def view_fields(self) -> dict:
        """Copy of the tier-1 fields, for building deeper tiers."""
        return dict(
            session_id=self.session_id,
            project=self.project,
            project_name=self.project_name,
            prompts=list(self.prompts),
            prompt_timestamps=list(self.prompt_timestamps),
            time_range=TimeRange(self.time_range.start, self.time_range.end),
        )


@dataclass
class SessionMeta(SessionView):
    """Tier 2: tier 1 plus metadata from a full transcript scan."""
    git_branch: str | None = None
    model: str | None = None
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0
    message_count: int = 0


class ToolCategory(str, Enum):
    FILE_READ = "file_read"
    FILE_WRITE = "file_write"
    SHELL = "shell"
    SEARCH = "search"
    WEB = "web"
    TASK = "task"
    OTHER = "other"


@dataclass(frozen=True)
class ToolCallSummary:
    name: str
    display_name: str
    category: ToolCategory
    target: str | None = None  # file_path for Read/Write, command for Bash


@dataclass
class SessionDetail(SessionMeta):
    """Tier 3: everything extracted from the transcript."""
    assistant_summaries: list[str] = field(default_factory=list)
    tool_calls: list[ToolCallSummary] = field(default_factory=list)
    files_referenced: list[str] = field(default_factory=list)
    plan_referenced: bool = False
    thinking_block_count: int = 0
    has_sidechains: bool = False

    def to_meta(self) -> SessionMeta:
        return SessionMeta(**{f.name: getattr(self, f.name) for f in fields(SessionMeta)})
