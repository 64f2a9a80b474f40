"""Pass through the pre-computed ~/.claude/stats-cache.json."""

import logging
from pathlib import Path

import orjson

logger = logging.getLogger(__name__)


def read_stats(stats_path: str | Path) -> dict | None:
    """The stats cache as a dict, or None if it is missing or unreadable JSON."""
    path = Path(stats_path)
    if not path.is_file():
        return None
    try:
        stats = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        logger.debug("Malformed stats cache %s: %s", path, e)
        return None
    return stats if isinstance(stats, dict) else None
