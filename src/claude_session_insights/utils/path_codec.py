"""Encode and decode Claude Code project path ↔ directory name."""

from dataclasses import dataclass
from pathlib import Path


def encode_path(path: str) -> str:
    """Encode a filesystem path to a Claude project directory name.

    /home/wiz/AI/LLM → -home-wiz-AI-LLM
    """
    if not path:
        return ""
    return path.replace("/", "-")


def decode_path(encoded: str) -> str:
    """Decode a Claude project directory name to a filesystem path.

    -home-wiz-AI-LLM → /home/wiz/AI/LLM

    Lossy: a literal "-" in the original path also decodes to "/", so only
    dash-free paths survive an encode/decode round trip. The on-disk naming
    is owned by Claude Code, so no escaping is added here.
    """
    if not encoded:
        return ""
    return encoded.replace("-", "/")


def project_name(project_path: str) -> str:
    """Get the last path segment as the project display name.

    /home/wiz/AI/LLM → LLM
    """
    return project_path.split("/")[-1] or project_path


@dataclass(frozen=True)
class ClaudePaths:
    base: Path
    history_file: Path
    projects_dir: Path
    tasks_dir: Path
    plans_dir: Path
    todos_dir: Path
    skills_dir: Path
    stats_cache: Path


def claude_paths(claude_dir: str | Path | None = None) -> ClaudePaths:
    """Build the standard paths under a ~/.claude directory."""
    base = Path(claude_dir).expanduser() if claude_dir else Path.home() / ".claude"
    return ClaudePaths(
        base=base,
        history_file=base / "history.jsonl",
        projects_dir=base / "projects",
        tasks_dir=base / "tasks",
        plans_dir=base / "plans",
        todos_dir=base / "todos",
        skills_dir=base / "skills",
        stats_cache=base / "stats-cache.json",
    )


def session_file_path(projects_dir: str | Path, project: str, session_id: str) -> Path:
    """Location of a session transcript for a project path."""
    return Path(projects_dir) / encode_path(project) / f"{session_id}.jsonl"
