"""Read skills from ~/.claude/skills/<name>/SKILL.md."""

from pathlib import Path

SKILL_FILE = "SKILL.md"


def read_skills(skills_dir: str | Path) -> list[str]:
    """Names of all skills that have a SKILL.md."""
    root = Path(skills_dir)
    if not root.is_dir():
        return []
    return sorted(path.parent.name for path in root.glob(f"*/{SKILL_FILE}"))


def read_skill_content(skills_dir: str | Path, name: str) -> str:
    """Contents of a skill's SKILL.md. Raises FileNotFoundError for unknown skills."""
    path = Path(skills_dir) / name / SKILL_FILE
    if "/" in name or name in ("", ".", "..") or not path.is_file():
        raise FileNotFoundError(f"Skill not found: {name}")
    return path.read_text(encoding="utf-8", errors="replace")
