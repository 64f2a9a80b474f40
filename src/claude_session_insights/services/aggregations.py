"""Compose tiered session reads into daily, project and tool-usage reports."""

import logging
from typing import Iterable, Mapping

from claude_session_insights.services.history_reader import filter_by_project, read_history
from claude_session_insights.services.plan_reader import read_plans
from claude_session_insights.services.project_reader import read_project_memories
from claude_session_insights.services.session_parser import (
    is_detailed,
    parse_session_detail,
    parse_sessions,
)
from claude_session_insights.services.task_reader import read_tasks, read_todos
from claude_session_insights.types.aggregations import (
    DailySummary,
    ProjectSummary,
    RankedCount,
    SessionListFilter,
    ToolUsageReport,
)
from claude_session_insights.types.privacy import PrivacyConfig
from claude_session_insights.types.sessions import SessionView, ToolCallSummary, ToolCategory
from claude_session_insights.utils.dates import iter_dates, resolve_date_range
from claude_session_insights.utils.path_codec import ClaudePaths
from claude_session_insights.utils.pricing import ModelPricing, estimate_cost
from claude_session_insights.utils.time_estimator import estimate_hours

logger = logging.getLogger(__name__)

# Tool-usage reports ignore sessions below this many prompts
TOOL_USAGE_MIN_PROMPTS = 2
TOP_N = 20

_FILE_CATEGORIES = frozenset({ToolCategory.FILE_READ, ToolCategory.FILE_WRITE})


def _unique(values: Iterable[str]) -> list[str]:
    """Distinct values in first-seen order."""
    return list(dict.fromkeys(values))


def _rank(counts: dict[str, int], limit: int = TOP_N) -> list[RankedCount]:
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [RankedCount(value=value, count=count) for value, count in ranked[:limit]]


def build_daily_summary(
    date: str,
    paths: ClaudePaths,
    privacy: PrivacyConfig,
    pricing: Mapping[str, ModelPricing] | None = None,
) -> DailySummary:
    """Everything that happened on one local calendar day."""
    sessions = read_history(paths.history_file, date, date, privacy)
    detailed, short = parse_sessions(sessions, paths.projects_dir, privacy)

    return DailySummary(
        date=date,
        sessions=detailed,
        short_sessions=short,
        tasks=read_tasks(paths.tasks_dir, date, date),
        plans=read_plans(paths.plans_dir, date, date),
        todos=read_todos(paths.todos_dir, date, date),
        total_prompts=sum(len(s.prompts) for s in sessions),
        total_sessions=len(sessions),
        projects=_unique(s.project_name for s in sessions),
        project_memory=read_project_memories((s.project for s in sessions), paths.projects_dir),
        estimated_hours=estimate_hours(sessions),
        estimated_cost=sum(estimate_cost(d, pricing) for d in detailed),
    )


def build_daily_range(
    from_date: str,
    to_date: str,
    paths: ClaudePaths,
    privacy: PrivacyConfig,
    pricing: Mapping[str, ModelPricing] | None = None,
) -> list[DailySummary]:
    """Daily summaries for each day in range that has sessions, tasks or plans."""
    summaries = []
    for day in iter_dates(from_date, to_date):
        summary = build_daily_summary(day, paths, privacy, pricing)
        if summary.total_sessions or summary.tasks or summary.plans:
            summaries.append(summary)
    return summaries


def build_project_summaries(
    session_filter: SessionListFilter | None,
    paths: ClaudePaths,
    privacy: PrivacyConfig,
    pricing: Mapping[str, ModelPricing] | None = None,
) -> list[ProjectSummary]:
    """Per-project rollups, busiest project first.

    Only sessions with 3+ prompts are fully parsed for tools, files,
    branches and models; shorter ones still count towards totals and hours.
    """
    from_date, to_date = resolve_date_range(session_filter)
    sessions = read_history(paths.history_file, from_date, to_date, privacy)
    sessions = filter_by_project(sessions, session_filter.project if session_filter else None)

    by_project: dict[str, list[SessionView]] = {}
    for session in sessions:
        by_project.setdefault(session.project_name, []).append(session)

    summaries: list[ProjectSummary] = []
    for name, group in by_project.items():
        tool_calls: list[ToolCallSummary] = []
        files: list[str] = []
        branches: list[str] = []
        models: list[str] = []
        cost = 0.0

        for session in group:
            if not is_detailed(session):
                continue
            detail = parse_session_detail(session, paths.projects_dir, privacy)
            tool_calls.extend(detail.tool_calls)
            files.extend(detail.files_referenced)
            if detail.git_branch:
                branches.append(detail.git_branch)
            if detail.model:
                models.append(detail.model)
            cost += estimate_cost(detail, pricing)

        summaries.append(ProjectSummary(
            project=group[0].project,
            project_name=name,
            session_count=len(group),
            prompt_count=sum(len(s.prompts) for s in group),
            estimated_hours=estimate_hours(group),
            estimated_cost=cost,
            branches=_unique(branches),
            files_referenced=_unique(files),
            tool_calls=tool_calls,
            models=_unique(models),
        ))

    summaries.sort(key=lambda s: s.prompt_count, reverse=True)
    return summaries


def build_tool_usage_report(
    session_filter: SessionListFilter | None,
    paths: ClaudePaths,
    privacy: PrivacyConfig,
) -> ToolUsageReport:
    """Tool call counts by name and category, plus the most used files and commands."""
    from_date, to_date = resolve_date_range(session_filter)
    sessions = read_history(paths.history_file, from_date, to_date, privacy)
    sessions = filter_by_project(sessions, session_filter.project if session_filter else None)

    report = ToolUsageReport()
    file_counts: dict[str, int] = {}
    command_counts: dict[str, int] = {}

    for session in sessions:
        if len(session.prompts) < TOOL_USAGE_MIN_PROMPTS:
            continue
        detail = parse_session_detail(session, paths.projects_dir, privacy)

        for call in detail.tool_calls:
            report.by_tool[call.name] = report.by_tool.get(call.name, 0) + 1
            category = call.category.value
            report.by_category[category] = report.by_category.get(category, 0) + 1
            report.total += 1

            if not call.target:
                continue
            if call.category in _FILE_CATEGORIES:
                file_counts[call.target] = file_counts.get(call.target, 0) + 1
            elif call.category is ToolCategory.SHELL:
                command_counts[call.target] = command_counts.get(call.target, 0) + 1

    report.top_files = _rank(file_counts)
    report.top_commands = _rank(command_counts)
    logger.debug("Tool usage: %d calls across %d sessions", report.total, len(sessions))
    return report
