"""
Command-line interface for claude-session-insights.

Reads Claude Code session data from ~/.claude and prints JSON.

Usage:
    claude-insights sessions
    claude-insights sessions --date 2026-02-09
    claude-insights sessions --from 2026-02-01 --to 2026-02-09
    claude-insights daily --date 2026-02-09
    claude-insights summary --project myapp
    claude-insights tools --from 2026-02-01
    claude-insights projects
    claude-insights stats

~/.claude contains highly sensitive data (API keys, source code, personal
information). Use --privacy shareable or strict before sharing any output.
"""

import logging
import sys
from typing import Any, Optional

import click
import orjson

from claude_session_insights.services.config_manager import ClaudeHistoryConfig, ConfigManager
from claude_session_insights.services.session_manager import SessionManager
from claude_session_insights.types import DateFilter, PrivacyProfile, SessionListFilter
from claude_session_insights.utils.dates import today

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _output(data: Any) -> None:
    """Print data as indented JSON; dataclasses and enums serialize natively."""
    click.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS).decode())


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def date_options(func):
    func = click.option("--to", "to_date", metavar="YYYY-MM-DD", help="End of date range")(func)
    func = click.option("--from", "from_date", metavar="YYYY-MM-DD", help="Start of date range")(func)
    func = click.option("--date", metavar="YYYY-MM-DD", help="Single day (default: today)")(func)
    return func


def project_option(func):
    return click.option("--project", help="Filter by project name (case-insensitive substring)")(func)


@click.group()
@click.option(
    "--claude-dir",
    envvar="CLAUDE_DIR",
    type=click.Path(file_okay=False),
    help="Path to the .claude directory (or set CLAUDE_DIR env var)",
)
@click.option(
    "--privacy",
    type=click.Choice([p.value for p in PrivacyProfile]),
    default=None,
    help="Privacy profile: local (default), shareable, strict",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="JSON config file (claudeDir, privacy, pricing)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, claude_dir: Optional[str], privacy: Optional[str], config_file: Optional[str], verbose: bool):
    """claude-insights: read Claude Code session data from ~/.claude

    Session listings, daily and project summaries, and tool usage reports,
    filtered through a privacy profile and printed as JSON.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    try:
        if config_file:
            config = ConfigManager.from_file(config_file, claude_dir=claude_dir, privacy=privacy)
        else:
            config = ConfigManager(ClaudeHistoryConfig(claude_dir=claude_dir, privacy=privacy))
    except (OSError, ValueError) as e:
        _fail(str(e))
    ctx.obj = SessionManager(config)


def _run(func, *args):
    """Run a query, turning unexpected failures into an error exit."""
    try:
        return func(*args)
    except (OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        _fail(str(e))


@cli.command()
@date_options
@project_option
@click.option("--meta/--no-meta", default=True, help="Scan transcripts for branch, model and tokens")
@click.pass_obj
def sessions(manager: SessionManager, date, from_date, to_date, project, meta: bool):
    """List sessions (default: today)

    Examples:
        claude-insights sessions --date 2026-02-09
        claude-insights sessions --from 2026-02-01 --to 2026-02-09 --project myapp
    """
    session_filter = SessionListFilter(date=date, from_date=from_date, to_date=to_date, project=project)
    if meta:
        _output(_run(manager.list_sessions_with_meta, session_filter))
    else:
        _output(_run(manager.list_sessions, session_filter))


@cli.command()
@click.pass_obj
def projects(manager: SessionManager):
    """List all projects"""
    _output(_run(manager.list_projects))


@cli.command()
@click.pass_obj
def stats(manager: SessionManager):
    """Show the pre-computed stats cache"""
    result = _run(manager.stats)
    if result is None:
        _fail(f"No stats cache found at {manager.paths.stats_cache}")
    _output(result)


@cli.command()
@click.option("--date", metavar="YYYY-MM-DD", help="Day to summarize (default: today)")
@click.pass_obj
def daily(manager: SessionManager, date: Optional[str]):
    """Show the summary for one day"""
    _output(_run(manager.daily, date or today()))


@cli.command()
@date_options
@click.pass_obj
def export(manager: SessionManager, date, from_date, to_date):
    """Export daily summaries for a date range

    Days without sessions, tasks or plans are left out.
    """
    from_day = from_date or date or today()
    to_day = to_date or date or today()
    _output(_run(manager.daily_range, from_day, to_day))


@cli.command()
@date_options
@project_option
@click.pass_obj
def summary(manager: SessionManager, date, from_date, to_date, project):
    """Summarize activity per project"""
    session_filter = SessionListFilter(date=date, from_date=from_date, to_date=to_date, project=project)
    _output(_run(manager.by_project, session_filter))


@cli.command()
@date_options
@project_option
@click.pass_obj
def tools(manager: SessionManager, date, from_date, to_date, project):
    """Report tool usage, top files and top commands"""
    session_filter = SessionListFilter(date=date, from_date=from_date, to_date=to_date, project=project)
    _output(_run(manager.tool_usage, session_filter))


@cli.command()
@click.argument("session_id")
@click.argument("project")
@click.pass_obj
def detail(manager: SessionManager, session_id: str, project: str):
    """Fully parse one session

    PROJECT is the project path as recorded in history.jsonl.
    """
    result = _run(manager.session_detail, session_id, project)
    _output({**_asdict_shallow(result), "estimated_cost": manager.estimate_cost(result)})


@cli.command()
@click.argument("session_id")
@click.argument("project")
@click.pass_obj
def transcript(manager: SessionManager, session_id: str, project: str):
    """Stream one session's filtered transcript as JSON lines"""
    try:
        for record in manager.transcript(session_id, project):
            click.echo(orjson.dumps(record).decode())
    except (OSError, ValueError) as e:
        _fail(str(e))


@cli.command()
@click.argument("name", required=False)
@click.pass_obj
def skills(manager: SessionManager, name: Optional[str]):
    """List skills, or print one skill's SKILL.md"""
    if name:
        click.echo(_run(manager.read_skill, name))
    else:
        _output(_run(manager.list_skills))


@cli.command()
@date_options
@click.pass_obj
def tasks(manager: SessionManager, date, from_date, to_date):
    """List tasks, todos and plans touched in a date range"""
    date_filter = DateFilter(date=date, from_date=from_date, to_date=to_date)
    _output({
        "tasks": _run(manager.list_tasks, date_filter),
        "todos": _run(manager.list_todos, date_filter),
        "plans": _run(manager.list_plans, date_filter),
    })


def _asdict_shallow(obj) -> dict:
    return {name: getattr(obj, name) for name in obj.__dataclass_fields__}


def main():
    cli(prog_name="claude-insights")


if __name__ == "__main__":
    main()
