"""Streaming JSONL reader and transcript record parser."""

import logging
from pathlib import Path
from typing import Iterator

import orjson

from claude_session_insights.types.messages import (
    AssistantMessage,
    Content,
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

logger = logging.getLogger(__name__)

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024


def stream_jsonl(file_path: str | Path) -> Iterator[dict]:
    """Stream-parse a JSONL file, yielding one dict per valid line.

    A missing file yields nothing. Malformed lines, non-object lines and
    lines exceeding MAX_LINE_SIZE are logged and skipped. Other OS errors
    (e.g. permission denied) propagate.
    """
    path = Path(file_path)
    if not path.exists():
        logger.debug("JSONL file not found: %s", path)
        return

    line_num = 0
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            line_num += 1
            line = line.strip()
            if not line:
                continue

            if len(line) > MAX_LINE_SIZE:
                logger.warning(
                    "Line %d in %s exceeds %dMB, skipping",
                    line_num, path.name, MAX_LINE_SIZE // (1024 * 1024),
                )
                continue

            try:
                raw = orjson.loads(line)
            except orjson.JSONDecodeError as e:
                logger.debug("Malformed JSON at line %d in %s: %s", line_num, path.name, e)
                continue

            if not isinstance(raw, dict):
                continue

            yield raw


def stream_transcript_file(file_path: str | Path) -> Iterator[TranscriptRecord]:
    """Stream-parse a session transcript into typed records."""
    for raw in stream_jsonl(file_path):
        yield parse_transcript_record(raw)


def parse_transcript_record(raw: dict) -> TranscriptRecord:
    """Turn one raw transcript dict into its record variant.

    The variant is chosen by which fields are present: a message with role
    user or assistant, a message without a known role, a file-history
    snapshot, or any other event.
    """
    common = dict(
        type=_str(raw.get("type")),
        uuid=_str(raw.get("uuid")),
        timestamp=_str(raw.get("timestamp")),
        git_branch=_str(raw.get("gitBranch")),
        plan_content=_str(raw.get("planContent")),
        cwd=_str(raw.get("cwd")),
        is_sidechain=raw.get("isSidechain") is True,
        has_tool_use_result="toolUseResult" in raw,
        tool_use_result=raw.get("toolUseResult"),
    )

    message = raw.get("message")
    if isinstance(message, dict):
        role = _str(message.get("role"))
        fields = dict(
            common,
            content=parse_content(message.get("content")),
            model=_str(message.get("model")),
            usage=_parse_usage(message.get("usage")),
        )
        if role == "user":
            return UserMessage(**fields)
        if role == "assistant":
            return AssistantMessage(**fields)
        return MessageRecord(role=role, **fields)

    if common["type"] == RecordType.FILE_HISTORY.value:
        return SnapshotRecord(**common)
    return ProgressEvent(**common)


def parse_content(content) -> Content:
    """Message content as a string or a list of typed content blocks."""
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return ""
    blocks: list[ContentBlock] = []
    for block in content:
        parsed = _parse_block(block)
        if parsed is not None:
            blocks.append(parsed)
    return blocks


def _parse_block(block) -> ContentBlock | None:
    if not isinstance(block, dict):
        return None
    block_type = block.get("type")
    if block_type == "text":
        return TextBlock(text=_str(block.get("text")))
    if block_type == "thinking":
        return ThinkingBlock(thinking=_str(block.get("thinking")))
    if block_type == "tool_use":
        tool_input = block.get("input")
        return ToolUseBlock(
            name=_str(block.get("name")),
            input=tool_input if isinstance(tool_input, dict) else {},
            id=_str(block.get("id")),
        )
    if block_type == "tool_result":
        return ToolResultBlock(
            tool_use_id=_str(block.get("tool_use_id")),
            content=block.get("content", ""),
            is_error=block.get("is_error") is True,
        )
    # Images, documents and unknown block types carry nothing we report on
    return None


def _parse_usage(raw_usage) -> TokenUsage | None:
    if not isinstance(raw_usage, dict):
        return None
    return TokenUsage(
        input_tokens=_int(raw_usage.get("input_tokens")),
        output_tokens=_int(raw_usage.get("output_tokens")),
        cache_creation_input_tokens=_int(raw_usage.get("cache_creation_input_tokens")),
        cache_read_input_tokens=_int(raw_usage.get("cache_read_input_tokens")),
    )


def _str(value) -> str:
    return value if isinstance(value, str) else ""


def _int(value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0
