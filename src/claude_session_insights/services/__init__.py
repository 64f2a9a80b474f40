"""Services for claude-session-insights."""

from claude_session_insights.services.config_manager import ClaudeHistoryConfig, ConfigManager
from claude_session_insights.services.history_reader import read_history
from claude_session_insights.services.session_parser import (
    parse_session_detail,
    parse_sessions,
    peek_session,
    stream_transcript,
)
from claude_session_insights.services.session_manager import SessionManager

__all__ = [
    "ClaudeHistoryConfig",
    "ConfigManager",
    "SessionManager",
    "parse_session_detail",
    "parse_sessions",
    "peek_session",
    "read_history",
    "stream_transcript",
]
