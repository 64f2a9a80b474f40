"""Categorize tool invocations and build their display names."""

from claude_session_insights.types.sessions import ToolCategory

MCP_PREFIX = "mcp__"
QUERY_TARGET_LENGTH = 80

TOOL_CATEGORY_MAP: dict[str, ToolCategory] = {
    # File reading
    "Read": ToolCategory.FILE_READ,
    "Glob": ToolCategory.FILE_READ,
    "Grep": ToolCategory.FILE_READ,
    "ListMcpResourcesTool": ToolCategory.FILE_READ,
    "ReadMcpResourceTool": ToolCategory.FILE_READ,
    # File writing
    "Write": ToolCategory.FILE_WRITE,
    "Edit": ToolCategory.FILE_WRITE,
    "MultiEdit": ToolCategory.FILE_WRITE,
    "NotebookEdit": ToolCategory.FILE_WRITE,
    # Shell
    "Bash": ToolCategory.SHELL,
    # Search / web
    "WebSearch": ToolCategory.SEARCH,
    "WebFetch": ToolCategory.WEB,
    # Task and agent management
    "Task": ToolCategory.TASK,
    "TaskCreate": ToolCategory.TASK,
    "TaskUpdate": ToolCategory.TASK,
    "TaskGet": ToolCategory.TASK,
    "TaskList": ToolCategory.TASK,
    "TaskStop": ToolCategory.TASK,
    "TaskOutput": ToolCategory.TASK,
    "TodoWrite": ToolCategory.TASK,
    "EnterPlanMode": ToolCategory.TASK,
    "ExitPlanMode": ToolCategory.TASK,
    "AskUserQuestion": ToolCategory.TASK,
    "Skill": ToolCategory.TASK,
}


def categorize_tool_name(name: str) -> ToolCategory:
    """Map a tool name to its category.

    Known names use the fixed table. MCP tools fall back to keyword checks
    on the name; anything else is OTHER.
    """
    category = TOOL_CATEGORY_MAP.get(name)
    if category is not None:
        return category

    if name.startswith(MCP_PREFIX):
        lowered = name.lower()
        if "search" in lowered:
            return ToolCategory.SEARCH
        if "fetch" in lowered or "read" in lowered:
            return ToolCategory.FILE_READ
        if "write" in lowered or "create" in lowered or "edit" in lowered:
            return ToolCategory.FILE_WRITE

    return ToolCategory.OTHER


def short_tool_name(name: str) -> str:
    """mcp__server__tool → tool; other names unchanged."""
    if name.startswith(MCP_PREFIX):
        return name.split("__")[-1] or name
    return name


def _str_arg(tool_input: dict | None, key: str) -> str:
    if not tool_input:
        return ""
    value = tool_input.get(key)
    return value if isinstance(value, str) else ""


def _first_token(command: str) -> str:
    parts = command.split()
    return parts[0] if parts else ""


def tool_display_name(name: str, tool_input: dict | None = None) -> str:
    """Human-readable name for a tool call, e.g. Read(src/app.py) or Bash(pytest).

    The most salient argument wins: file path (last two segments), notebook
    path, first word of a shell command, search pattern, then query.
    """
    short = short_tool_name(name)

    file_path = _str_arg(tool_input, "file_path")
    if file_path:
        return f"{short}({'/'.join(file_path.split('/')[-2:])})"

    notebook_path = _str_arg(tool_input, "notebook_path")
    if notebook_path:
        return f"{short}({notebook_path})"

    command = _first_token(_str_arg(tool_input, "command"))
    if command:
        return f"{short}({command})"

    pattern = _str_arg(tool_input, "pattern")
    if pattern:
        return f"{short}({pattern})"

    query = _str_arg(tool_input, "query")
    if query:
        return f"{short}({query[:QUERY_TARGET_LENGTH]})"

    return short


def tool_target(tool_input: dict | None) -> str | None:
    """The salient argument of a tool call, with full file paths kept."""
    for key in ("file_path", "notebook_path"):
        value = _str_arg(tool_input, key)
        if value:
            return value

    command = _first_token(_str_arg(tool_input, "command"))
    if command:
        return command

    pattern = _str_arg(tool_input, "pattern")
    if pattern:
        return pattern

    query = _str_arg(tool_input, "query")
    if query:
        return query[:QUERY_TARGET_LENGTH]

    return None
