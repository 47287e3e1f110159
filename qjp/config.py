"""User defaults read from a JSON config file.

The file is optional and only ever read. All access is defensive: a missing
or malformed file, or a value of the wrong type, falls back to built-in
defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "qjp"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

logger = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(config: dict[str, object], key: str) -> str | None:
    value = config.get(key)
    if not isinstance(value, str):
        return None
    return value


def load_separator(config: dict[str, object]) -> str | None:
    """Default separator for multiple display attributes; may be empty."""
    return _load_string(config, "separator")


def load_theme_name(config: dict[str, object]) -> str | None:
    """Load UI theme name, returning ``None`` when unset/invalid."""
    value = _load_string(config, "theme")
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_style(config: dict[str, object]) -> str | None:
    """Load Pygments style name for highlighted output."""
    value = _load_string(config, "style")
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_truncate(config: dict[str, object]) -> bool:
    """Return the truncate default; only explicit booleans are accepted."""
    value = config.get("truncate")
    return value if isinstance(value, bool) else False
