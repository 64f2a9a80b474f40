"""Tier 1: group history.jsonl prompts into sessions.

This is the fast path. Only the prompt log is read; no transcript files
are opened.
"""

import logging
from pathlib import Path

from claude_session_insights.services.jsonl_parser import stream_jsonl
from claude_session_insights.types.privacy import PrivacyConfig
from claude_session_insights.types.sessions import HistoryRecord, SessionView, TimeRange
from claude_session_insights.utils.dates import in_date_range, to_local_date
from claude_session_insights.utils.path_codec import project_name
from claude_session_insights.utils.redaction import (
    REDACTED_PROMPT,
    is_project_excluded,
    redact_string,
)

logger = logging.getLogger(__name__)


def parse_history_record(raw: dict) -> HistoryRecord | None:
    """Validate one history.jsonl line. Lines without a session id or timestamp are unusable."""
    session_id = raw.get("sessionId")
    timestamp = raw.get("timestamp")
    if not isinstance(session_id, str) or not session_id:
        return None
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return None
    display = raw.get("display")
    project = raw.get("project")
    return HistoryRecord(
        display=display if isinstance(display, str) else "",
        timestamp=int(timestamp),
        project=project if isinstance(project, str) else "",
        session_id=session_id,
    )


def redact_prompt(display: str, privacy: PrivacyConfig) -> str:
    if privacy.redact_prompts:
        return REDACTED_PROMPT
    return redact_string(display, privacy)


def read_history(
    history_file: str | Path,
    from_date: str,
    to_date: str,
    privacy: PrivacyConfig,
) -> list[SessionView]:
    """Read history.jsonl and group prompts in [from_date, to_date] by session.

    Rows outside the date window are dropped before anything else, then rows
    from excluded projects. Prompt text is redacted per row, before grouping.
    A session keeps the project of its first row. Results are sorted by the
    start of their time range.
    """
    grouped: dict[str, SessionView] = {}
    skipped = 0

    for raw in stream_jsonl(history_file):
        record = parse_history_record(raw)
        if record is None:
            skipped += 1
            continue

        try:
            day = to_local_date(record.timestamp)
        except (ValueError, OverflowError, OSError):
            skipped += 1
            continue
        if not in_date_range(day, from_date, to_date):
            continue

        if is_project_excluded(record.project, privacy):
            continue

        prompt = redact_prompt(record.display, privacy)

        session = grouped.get(record.session_id)
        if session is None:
            session = SessionView(
                session_id=record.session_id,
                project=record.project,
                project_name=project_name(record.project),
            )
            grouped[record.session_id] = session
        session.prompts.append(prompt)
        session.prompt_timestamps.append(record.timestamp)

    if skipped:
        logger.debug("Skipped %d unusable history rows in %s", skipped, history_file)

    sessions = list(grouped.values())
    for session in sessions:
        session.time_range = TimeRange(
            start=min(session.prompt_timestamps),
            end=max(session.prompt_timestamps),
        )

    sessions.sort(key=lambda s: s.time_range.start)
    return sessions


def filter_by_project(sessions: list[SessionView], project: str | None) -> list[SessionView]:
    """Keep sessions whose project name contains project (case-insensitive)."""
    if not project:
        return sessions
    needle = project.lower()
    return [s for s in sessions if needle in s.project_name.lower()]
