"""List projects under ~/.claude/projects and read their MEMORY.md files."""

import logging
from pathlib import Path
from typing import Iterable

from claude_session_insights.types.artifacts import ProjectInfo, ProjectMemory
from claude_session_insights.types.privacy import PrivacyConfig
from claude_session_insights.utils.path_codec import decode_path, encode_path, project_name
from claude_session_insights.utils.redaction import is_project_excluded

logger = logging.getLogger(__name__)

MEMORY_SNIPPET_LENGTH = 2000


def _memory_path(projects_dir: Path, encoded: str) -> Path:
    return projects_dir / encoded / "memory" / "MEMORY.md"


def read_projects(projects_dir: str | Path, privacy: PrivacyConfig) -> list[ProjectInfo]:
    """All project directories, minus hidden entries and excluded projects."""
    root = Path(projects_dir)
    if not root.is_dir():
        return []

    projects: list[ProjectInfo] = []
    for entry in sorted(root.iterdir()):
        if entry.name.startswith(".") or not entry.is_dir():
            continue

        decoded = decode_path(entry.name)
        if is_project_excluded(decoded, privacy):
            continue

        projects.append(ProjectInfo(
            encoded_path=entry.name,
            decoded_path=decoded,
            name=project_name(decoded),
            session_count=sum(1 for _ in entry.glob("*.jsonl")),
            has_memory=_memory_path(root, entry.name).is_file(),
        ))
    return projects


def read_project_memory(project: str, projects_dir: str | Path) -> ProjectMemory | None:
    """The first MEMORY_SNIPPET_LENGTH characters of a project's MEMORY.md, if any."""
    path = _memory_path(Path(projects_dir), encode_path(project))
    if not path.is_file():
        return None
    content = path.read_text(encoding="utf-8", errors="replace")
    if not content.strip():
        return None
    return ProjectMemory(
        project_path=project,
        project_name=project_name(project),
        content=content[:MEMORY_SNIPPET_LENGTH],
    )


def read_project_memories(projects: Iterable[str], projects_dir: str | Path) -> dict[str, str]:
    """Memory snippets keyed by project path, for projects that have one."""
    memories: dict[str, str] = {}
    for project in dict.fromkeys(projects):
        memory = read_project_memory(project, projects_dir)
        if memory is not None:
            memories[project] = memory.content
    return memories
