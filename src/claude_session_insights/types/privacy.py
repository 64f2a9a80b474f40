"""Privacy configuration types."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

# A redaction pattern is either a regex source string or a compiled pattern.
RedactPattern = Union[str, re.Pattern]


class PrivacyProfile(str, Enum):
    LOCAL = "local"
    SHAREABLE = "shareable"
    STRICT = "strict"


@dataclass(frozen=True)
class PrivacyConfig:
    redact_prompts: bool = False         # Replace user prompt text with [redacted]
    redact_absolute_paths: bool = False  # Compact /home/... and /Users/... paths
    redact_home_dir: bool = False        # Replace $HOME with ~
    strip_thinking: bool = True          # Drop thinking blocks entirely
    strip_tool_results: bool = True      # Drop toolUseResult records and tool_result blocks
    redact_patterns: tuple[RedactPattern, ...] = ()
    exclude_projects: tuple[str, ...] = ()
