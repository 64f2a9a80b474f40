"""Named privacy profiles and caller override merging."""

import re
from dataclasses import fields, replace
from typing import Any, Mapping

from claude_session_insights.types.privacy import PrivacyConfig, PrivacyProfile

# Credential patterns: common API key / token / secret shapes
CREDENTIAL_PATTERNS = (
    # "key"/"token"/"secret"/"password" followed by a long alphanumeric string
    re.compile(r"(?:key|token|secret|password|api_key|apikey|auth)[\"\s:=]+[A-Za-z0-9+/=_\-]{20,}", re.IGNORECASE),
    re.compile(r"Bearer\s+[A-Za-z0-9+/=_\-.]{20,}"),
    # AWS access key ids
    re.compile(r"(?:AKIA|ABIA|ACCA|ASIA)[A-Z0-9]{16}"),
    # GitHub tokens
    re.compile(r"gh[pousr]_[A-Za-z0-9_]{36,}"),
    # Generic hex secrets (32+ chars)
    re.compile(r"(?:secret|token|key)[\"\s:=]+[0-9a-f]{32,}", re.IGNORECASE),
)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")
IP_PATTERN = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")

LOCAL_PROFILE = PrivacyConfig(
    strip_thinking=True,
    strip_tool_results=True,
)

SHAREABLE_PROFILE = replace(
    LOCAL_PROFILE,
    redact_absolute_paths=True,
    redact_home_dir=True,
)

STRICT_PROFILE = replace(
    SHAREABLE_PROFILE,
    redact_prompts=True,
    redact_patterns=(*CREDENTIAL_PATTERNS, EMAIL_PATTERN, IP_PATTERN),
)

PRIVACY_PROFILES: dict[PrivacyProfile, PrivacyConfig] = {
    PrivacyProfile.LOCAL: LOCAL_PROFILE,
    PrivacyProfile.SHAREABLE: SHAREABLE_PROFILE,
    PrivacyProfile.STRICT: STRICT_PROFILE,
}

_LIST_FIELDS = frozenset({"redact_patterns", "exclude_projects"})
_FIELD_NAMES = frozenset(f.name for f in fields(PrivacyConfig))


def get_profile(profile: str | PrivacyProfile | None) -> PrivacyConfig:
    """Look up a named profile. None means "local"."""
    if profile is None:
        return LOCAL_PROFILE
    try:
        return PRIVACY_PROFILES[PrivacyProfile(profile)]
    except ValueError:
        valid = ", ".join(p.value for p in PrivacyProfile)
        raise ValueError(f"Invalid privacy profile: {profile}. Use: {valid}") from None


def resolve_privacy_config(
    profile: str | PrivacyProfile | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> PrivacyConfig:
    """Resolve a profile plus overrides into a concrete PrivacyConfig.

    List-valued fields (redact_patterns, exclude_projects) are unioned with
    the profile's values, keeping the profile's entries first. Scalar fields
    replace the profile's values.
    """
    base = get_profile(profile)
    if not overrides:
        return base

    unknown = set(overrides) - _FIELD_NAMES
    if unknown:
        raise ValueError(f"Unknown privacy option(s): {', '.join(sorted(unknown))}")

    changes: dict[str, Any] = {}
    for name, value in overrides.items():
        if name in _LIST_FIELDS:
            if isinstance(value, (str, re.Pattern)):
                value = [value]
            changes[name] = _union(getattr(base, name), value or ())
        else:
            changes[name] = bool(value)
    return replace(base, **changes)


def _union(first, second) -> tuple:
    merged = []
    for item in (*first, *second):
        if item not in merged:
            merged.append(item)
    return tuple(merged)
