"""Read plans from ~/.claude/plans/*.md."""

from pathlib import Path

from claude_session_insights.types.artifacts import PlanInfo
from claude_session_insights.utils.dates import in_date_range, mtime_to_local_date

SNIPPET_LINES = 3
SNIPPET_LENGTH = 300


def summarize_plan(filename: str, text: str) -> tuple[str, str]:
    """Title (first "# " heading, else the file stem) and a short snippet."""
    lines = text.split("\n")
    title = next(
        (line[2:].strip() for line in lines if line.startswith("# ")),
        Path(filename).stem,
    )
    body = [line.strip() for line in lines if line.strip() and not line.startswith("#")]
    snippet = " ".join(body[:SNIPPET_LINES])[:SNIPPET_LENGTH]
    return title, snippet


def read_plans(
    plans_dir: str | Path,
    from_date: str,
    to_date: str,
    include_content: bool = False,
) -> list[PlanInfo]:
    """Plans whose file changed within the date range."""
    root = Path(plans_dir)
    if not root.is_dir():
        return []

    plans: list[PlanInfo] = []
    for plan_file in sorted(root.glob("*.md")):
        try:
            mtime = plan_file.stat().st_mtime
        except FileNotFoundError:
            continue
        if not in_date_range(mtime_to_local_date(mtime), from_date, to_date):
            continue

        text = plan_file.read_text(encoding="utf-8", errors="replace")
        title, snippet = summarize_plan(plan_file.name, text)
        plans.append(PlanInfo(
            filename=plan_file.name,
            title=title,
            snippet=snippet,
            content=text if include_content else None,
        ))
    return plans
