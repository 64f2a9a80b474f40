"""Types for the side artifacts kept next to sessions: tasks, todos, plans, projects."""

from dataclasses import dataclass, field


@dataclass
class TaskInfo:
    id: str
    subject: str
    description: str = ""
    status: str = ""
    session_dir: str = ""
    blocks: list[str] = field(default_factory=list)
    blocked_by: list[str] = field(default_factory=list)


@dataclass
class TodoItem:
    id: str
    content: str
    status: str = "unknown"
    session_dir: str = ""


@dataclass
class PlanInfo:
    filename: str
    title: str
    snippet: str = ""
    content: str | None = None


@dataclass
class ProjectInfo:
    encoded_path: str   # Directory name under projects/
    decoded_path: str   # Best-effort filesystem path
    name: str           # Last path segment
    session_count: int = 0
    has_memory: bool = False


@dataclass
class ProjectMemory:
    project_path: str
    project_name: str
    content: str
