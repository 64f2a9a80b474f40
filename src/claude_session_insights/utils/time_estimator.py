"""Estimate active working hours from prompt timestamps."""

from typing import Iterable

from claude_session_insights.types.sessions import SessionView

# Gaps between consecutive prompts longer than this count as idle time
GAP_CAP_MS = 15 * 60 * 1000
# A session with a single prompt still counts as a short burst of work
SINGLE_PROMPT_MS = 5 * 60 * 1000
MS_PER_HOUR = 60 * 60 * 1000


def active_ms(timestamps: Iterable[int]) -> int:
    """Gap-capped active time in milliseconds for one session's prompt timestamps."""
    ordered = sorted(timestamps)
    if len(ordered) <= 1:
        return SINGLE_PROMPT_MS
    return sum(
        min(later - earlier, GAP_CAP_MS)
        for earlier, later in zip(ordered, ordered[1:])
    )


def estimate_hours(sessions: Iterable[SessionView]) -> float:
    """Estimate hours of active work across sessions.

    Consecutive prompt gaps are capped at GAP_CAP_MS so that idle time does
    not inflate the estimate; a session with zero or one prompt contributes
    SINGLE_PROMPT_MS.
    """
    total_ms = sum(active_ms(session.prompt_timestamps) for session in sessions)
    return total_ms / MS_PER_HOUR
