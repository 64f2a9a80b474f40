"""Message-level types for parsed transcript JSONL data."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class RecordType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    PROGRESS = "progress"
    FILE_HISTORY = "file-history-snapshot"


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0

    @property
    def total(self) -> int:
        return (self.input_tokens + self.output_tokens +
                self.cache_creation_input_tokens + self.cache_read_input_tokens)


# Content blocks: one class per tag, each carrying only its own fields.

@dataclass(frozen=True)
class TextBlock:
    text: str = ""
    type: str = "text"


@dataclass(frozen=True)
class ThinkingBlock:
    thinking: str = ""
    type: str = "thinking"


@dataclass(frozen=True)
class ToolUseBlock:
    name: str = ""
    input: dict = field(default_factory=dict)
    id: str = ""
    type: str = "tool_use"


@dataclass(frozen=True)
class ToolResultBlock:
    tool_use_id: str = ""
    content: Any = ""  # str or list
    is_error: bool = False
    type: str = "tool_result"


ContentBlock = Union[TextBlock, ThinkingBlock, ToolUseBlock, ToolResultBlock]
Content = Union[str, list]


# Transcript records: one variant per record kind.

@dataclass(frozen=True)
class TranscriptRecord:
    """Fields shared by every line of a session transcript."""
    type: str = ""
    uuid: str = ""
    timestamp: str = ""
    git_branch: str = ""
    plan_content: str = ""
    cwd: str = ""
    is_sidechain: bool = False
    has_tool_use_result: bool = False
    tool_use_result: Any = None


@dataclass(frozen=True)
class MessageRecord(TranscriptRecord):
    """A record carrying a ``message`` payload."""
    role: str = ""
    content: Content = ""
    model: str = ""
    usage: TokenUsage | None = None


@dataclass(frozen=True)
class UserMessage(MessageRecord):
    role: str = "user"


@dataclass(frozen=True)
class AssistantMessage(MessageRecord):
    role: str = "assistant"


@dataclass(frozen=True)
class ProgressEvent(TranscriptRecord):
    """Hook progress, system notices and other message-less events."""


@dataclass(frozen=True)
class SnapshotRecord(TranscriptRecord):
    """File-history snapshot written alongside the conversation."""
    type: str = RecordType.FILE_HISTORY.value
