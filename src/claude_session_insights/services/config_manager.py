"""Resolve configuration: the ~/.claude location, privacy settings and pricing."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import orjson

from claude_session_insights.types.privacy import PrivacyConfig, PrivacyProfile
from claude_session_insights.utils.path_codec import ClaudePaths, claude_paths
from claude_session_insights.utils.pricing import ModelPricing, resolve_pricing
from claude_session_insights.utils.privacy_profiles import resolve_privacy_config

logger = logging.getLogger(__name__)

# Default values
DEFAULTS: dict[str, Any] = {
    "claude_dir": "~/.claude",
    "privacy": PrivacyProfile.LOCAL.value,
    "pricing": {},
}

# camelCase keys accepted in JSON config files
_FILE_KEYS = {
    "claudeDir": "claude_dir",
    "claude_dir": "claude_dir",
    "privacy": "privacy",
    "pricing": "pricing",
}
_PRIVACY_FILE_KEYS = {
    "redactPrompts": "redact_prompts",
    "redactAbsolutePaths": "redact_absolute_paths",
    "redactHomeDir": "redact_home_dir",
    "stripThinking": "strip_thinking",
    "stripToolResults": "strip_tool_results",
    "redactPatterns": "redact_patterns",
    "excludeProjects": "exclude_projects",
}


@dataclass
class ClaudeHistoryConfig:
    """Caller-facing configuration.

    privacy is a profile name, a mapping of overrides (optionally with a
    "profile" key naming the base profile), or a ready PrivacyConfig.
    pricing entries merge onto the built-in price table.
    """
    claude_dir: str | Path | None = None
    privacy: str | Mapping[str, Any] | PrivacyConfig | None = None
    pricing: Mapping[str, ModelPricing | Mapping[str, float]] = field(default_factory=dict)


class ConfigManager:
    """Turns a ClaudeHistoryConfig into resolved paths, privacy and pricing."""

    def __init__(self, config: ClaudeHistoryConfig | None = None):
        self._config = config or ClaudeHistoryConfig()
        self.paths: ClaudePaths = claude_paths(self._config.claude_dir or DEFAULTS["claude_dir"])
        self.privacy: PrivacyConfig = self._resolve_privacy(self._config.privacy)
        self.pricing: dict[str, ModelPricing] = resolve_pricing(self._config.pricing)

    @classmethod
    def from_file(cls, path: str | Path, **overrides) -> "ConfigManager":
        """Load a JSON config file; keyword overrides that are not None win."""
        config = load_config_file(path)
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        return cls(config)

    @staticmethod
    def _resolve_privacy(privacy) -> PrivacyConfig:
        if isinstance(privacy, PrivacyConfig):
            return privacy
        if privacy is None or isinstance(privacy, (str, PrivacyProfile)):
            return resolve_privacy_config(privacy or DEFAULTS["privacy"])
        options = dict(privacy)
        profile = options.pop("profile", None)
        return resolve_privacy_config(profile, options)


def load_config_file(path: str | Path) -> ClaudeHistoryConfig:
    """Read a JSON config file into a ClaudeHistoryConfig.

    Raises FileNotFoundError for a missing file and ValueError for invalid
    JSON or unknown keys; an explicitly requested config must be usable.
    """
    config_path = Path(path).expanduser()
    try:
        raw = orjson.loads(config_path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object")

    unknown = set(raw) - set(_FILE_KEYS)
    if unknown:
        raise ValueError(f"Unknown config key(s) in {config_path}: {', '.join(sorted(unknown))}")

    values = {_FILE_KEYS[key]: value for key, value in raw.items()}
    privacy = values.get("privacy")
    if isinstance(privacy, dict):
        values["privacy"] = {_PRIVACY_FILE_KEYS.get(k, k): v for k, v in privacy.items()}

    logger.debug("Loaded config from %s", config_path)
    return ClaudeHistoryConfig(
        claude_dir=values.get("claude_dir"),
        privacy=values.get("privacy"),
        pricing=values.get("pricing") or {},
    )
