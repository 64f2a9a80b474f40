"""Extract text, tool calls and file references from message content."""

from claude_session_insights.types.messages import (
    Content,
    TextBlock,
    ThinkingBlock,
    ToolUseBlock,
)
from claude_session_insights.types.sessions import ToolCallSummary
from claude_session_insights.utils.tool_categories import (
    categorize_tool_name,
    tool_display_name,
    tool_target,
)


def extract_text(content: Content | None) -> str:
    """Plain text of message content: the string itself, or all text blocks joined."""
    if not content:
        return ""
    if isinstance(content, str):
        return content
    return "\n".join(
        block.text for block in content
        if isinstance(block, TextBlock) and block.text
    )


def extract_tool_calls(content: Content | None) -> list[ToolCallSummary]:
    """One ToolCallSummary per named tool_use block, in order."""
    if not content or isinstance(content, str):
        return []
    return [
        ToolCallSummary(
            name=block.name,
            display_name=tool_display_name(block.name, block.input),
            category=categorize_tool_name(block.name),
            target=tool_target(block.input),
        )
        for block in content
        if isinstance(block, ToolUseBlock) and block.name
    ]


def extract_file_paths(content: Content | None) -> list[str]:
    """File and notebook paths passed to tool_use blocks."""
    if not content or isinstance(content, str):
        return []
    paths = []
    for block in content:
        if not isinstance(block, ToolUseBlock) or not block.input:
            continue
        for key in ("file_path", "notebook_path"):
            value = block.input.get(key)
            if isinstance(value, str) and value:
                paths.append(value)
    return paths


def count_thinking_blocks(content: Content | None) -> int:
    if not content or isinstance(content, str):
        return 0
    return sum(1 for block in content if isinstance(block, ThinkingBlock))
