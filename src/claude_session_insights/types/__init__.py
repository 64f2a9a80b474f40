"""Type definitions for claude-session-insights."""

from claude_session_insights.types.messages import (
    AssistantMessage,
    ContentBlock,
    MessageRecord,
    ProgressEvent,
    RecordType,
    SnapshotRecord,
    TextBlock,
    ThinkingBlock,
    TokenUsage,
    ToolResultBlock,
    ToolUseBlock,
    TranscriptRecord,
    UserMessage,
)
from claude_session_insights.types.sessions import (
    HistoryRecord,
    SessionDetail,
    SessionMeta,
    SessionView,
    TimeRange,
    ToolCallSummary,
    ToolCategory,
)
from claude_session_insights.types.privacy import PrivacyConfig, PrivacyProfile
from claude_session_insights.types.artifacts import (
    PlanInfo,
    ProjectInfo,
    ProjectMemory,
    TaskInfo,
    TodoItem,
)
from claude_session_insights.types.aggregations import (
    DailySummary,
    DateFilter,
    ProjectSummary,
    RankedCount,
    SessionListFilter,
    ToolUsageReport,
)

__all__ = [
    "AssistantMessage",
    "ContentBlock",
    "MessageRecord",
    "ProgressEvent",
    "RecordType",
    "SnapshotRecord",
    "TextBlock",
    "ThinkingBlock",
    "TokenUsage",
    "ToolResultBlock",
    "ToolUseBlock",
    "TranscriptRecord",
    "UserMessage",
    "HistoryRecord",
    "SessionDetail",
    "SessionMeta",
    "SessionView",
    "TimeRange",
    "ToolCallSummary",
    "ToolCategory",
    "PrivacyConfig",
    "PrivacyProfile",
    "PlanInfo",
    "ProjectInfo",
    "ProjectMemory",
    "TaskInfo",
    "TodoItem",
    "DailySummary",
    "DateFilter",
    "ProjectSummary",
    "RankedCount",
    "SessionListFilter",
    "ToolUsageReport",
]
