"""Validation and compilation of caller-supplied redaction patterns."""

import logging
import re
from functools import lru_cache

logger = logging.getLogger(__name__)

# Safety limits
MAX_PATTERN_LENGTH = 200
_NESTED_QUANTIFIER_RE = re.compile(r"[+*]\??[+*]|(?:\{[^}]+\})[+*]")


def validate_regex(pattern: str) -> tuple[bool, str]:
    """Check a caller-supplied redaction pattern before it is compiled.

    Returns (ok, reason); reason is "" when ok. Rejects empty and overlong
    patterns, unbalanced groups or classes, and stacked quantifiers such as
    a++ or a{2}* that invite catastrophic backtracking.
    """
    if not pattern:
        return False, "Pattern is empty"

    if len(pattern) > MAX_PATTERN_LENGTH:
        return False, f"Pattern exceeds {MAX_PATTERN_LENGTH} characters"

    skeleton = _skeleton(pattern)
    if skeleton is None:
        return False, "Unbalanced brackets or parentheses"

    if _NESTED_QUANTIFIER_RE.search(skeleton):
        return False, "Nested quantifiers detected (backtracking risk)"

    try:
        re.compile(pattern)
    except re.error as e:
        return False, f"Invalid regex: {e}"

    return True, ""


def compile_pattern(pattern: str | re.Pattern) -> re.Pattern | None:
    """Compile a redaction pattern, or return None if it is unusable.

    Already-compiled patterns are trusted as-is. Rejected source strings are
    logged once and then skipped by every caller.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        logger.warning("Ignoring redaction pattern of type %s", type(pattern).__name__)
        return None
    return _compile_cached(pattern)


@lru_cache(maxsize=256)
def _compile_cached(pattern: str) -> re.Pattern | None:
    ok, err = validate_regex(pattern)
    if not ok:
        logger.warning("Skipping redaction pattern %r: %s", pattern, err)
        return None
    return re.compile(pattern)


def _skeleton(pattern: str) -> str | None:
    """Reduce a pattern to its operator structure, or None if it is unbalanced.

    Escapes and whole [...] classes collapse to a single "x" atom, so a
    literal + or ( inside them is never read as an operator.
    """
    out: list[str] = []
    depth = 0
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            if not in_class:
                out.append("x")
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
                out.append("x")
        elif ch == "[":
            in_class = True
        elif ch == "]":
            return None
        else:
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth < 0:
                    return None
            out.append(ch)
        i += 1
    if in_class or depth:
        return None
    return "".join(out)
