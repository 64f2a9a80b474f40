"""Privacy redaction for transcript records and free text.

Everything here is pure: records are frozen dataclasses and filtering
returns new instances. Callers apply these functions before a value is
stored in any view or aggregate.
"""

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Callable, Union

from claude_session_insights.types.messages import (
    ContentBlock,
    MessageRecord,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolUseBlock,
    TranscriptRecord,
)
from claude_session_insights.types.privacy import PrivacyConfig
from claude_session_insights.utils.regex_validator import compile_pattern

logger = logging.getLogger(__name__)

HOME_DIR = str(Path.home())

REDACTED_PROMPT = "[redacted]"
REDACTED_MATCH = "[REDACTED]"

_ABSOLUTE_PATH_RE = re.compile(r"/(?:Users|home)/[^\s\"',;)}\]]+")

Replacement = Union[str, Callable[[re.Match], str]]


def _compact_path(match: re.Match) -> str:
    """Keep only the last two segments of an absolute path."""
    parts = match.group(0).split("/")
    return "/".join(parts[-2:]) if len(parts) > 2 else match.group(0)


def redaction_rules(config: PrivacyConfig) -> list[tuple[re.Pattern, Replacement]]:
    """Ordered (matcher, replacement) rules for a config.

    Order: home directory, absolute paths, then configured patterns in the
    order given. Unusable patterns are left out.
    """
    rules: list[tuple[re.Pattern, Replacement]] = []
    if config.redact_home_dir and HOME_DIR not in ("", "/"):
        rules.append((re.compile(re.escape(HOME_DIR)), "~"))
    if config.redact_absolute_paths:
        rules.append((_ABSOLUTE_PATH_RE, _compact_path))
    for pattern in config.redact_patterns:
        compiled = compile_pattern(pattern)
        if compiled is not None:
            rules.append((compiled, REDACTED_MATCH))
    return rules


def redact_string(text: str, config: PrivacyConfig) -> str:
    """Apply every redaction rule of config to text, in order."""
    if not text:
        return text
    result = text
    for matcher, replacement in redaction_rules(config):
        try:
            if isinstance(replacement, str):
                result = matcher.sub(lambda _m, r=replacement: r, result)
            else:
                result = matcher.sub(replacement, result)
        except (re.error, TypeError, IndexError) as e:
            logger.warning("Redaction rule %r failed, skipping: %s", matcher.pattern, e)
    return result


def is_project_excluded(project_path: str, config: PrivacyConfig) -> bool:
    """True if any exclude_projects entry is a case-insensitive substring of the path."""
    if not config.exclude_projects:
        return False
    lower = project_path.lower()
    return any(p.lower() in lower for p in config.exclude_projects)


def filter_content_blocks(
    blocks: list[ContentBlock],
    config: PrivacyConfig,
    redact_text: bool = False,
) -> list[ContentBlock]:
    """Filter content blocks independently according to config.

    Thinking and tool-result blocks are dropped when the matching strip flag
    is set; every surviving text-bearing field goes through redact_string.
    With redact_text, text blocks are replaced wholesale instead.
    """
    filtered: list[ContentBlock] = []
    for block in blocks:
        if isinstance(block, ThinkingBlock):
            if config.strip_thinking:
                continue
            filtered.append(replace(block, thinking=redact_string(block.thinking, config)))
        elif isinstance(block, ToolResultBlock):
            if config.strip_tool_results:
                continue
            filtered.append(replace(block, content=_redact_result_content(block.content, config)))
        elif isinstance(block, TextBlock):
            text = REDACTED_PROMPT if redact_text else redact_string(block.text, config)
            filtered.append(replace(block, text=text))
        elif isinstance(block, ToolUseBlock):
            filtered.append(replace(block, input=_redact_input(block.input, config)))
    return filtered


def filter_record(record: TranscriptRecord, config: PrivacyConfig) -> TranscriptRecord | None:
    """Filter one transcript record. Returns None when it must be dropped entirely.

    Suppression wins: with strip_tool_results, any record carrying a
    toolUseResult payload is dropped rather than filtered.
    """
    if config.strip_tool_results and record.has_tool_use_result:
        return None

    if not isinstance(record, MessageRecord):
        return record

    content = record.content
    if record.role == "user":
        if isinstance(content, str):
            content = REDACTED_PROMPT if config.redact_prompts else redact_string(content, config)
        else:
            content = filter_content_blocks(content, config, redact_text=config.redact_prompts)
        return replace(record, content=content)

    if record.role == "assistant":
        if isinstance(content, str):
            return replace(record, content=redact_string(content, config))
        return replace(record, content=filter_content_blocks(content, config))

    return record


def _redact_input(tool_input: dict, config: PrivacyConfig) -> dict:
    """Redact top-level string arguments of a tool invocation."""
    return {
        key: redact_string(value, config) if isinstance(value, str) else value
        for key, value in tool_input.items()
    }


def _redact_result_content(content, config: PrivacyConfig):
    if isinstance(content, str):
        return redact_string(content, config)
    if isinstance(content, list):
        items = []
        for item in content:
            if isinstance(item, dict) and isinstance(item.get("text"), str):
                item = {**item, "text": redact_string(item["text"], config)}
            items.append(item)
        return items
    return content
