"""JSON config helpers.

Reads theme, logging and key-binding preferences. The picker keeps no
session state between runs, so nothing here writes back.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazybranch"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def load_log_level() -> str | None:
    return _load_string("log_level")


def load_log_file() -> Path | None:
    value = _load_string("log_file")
    return Path(value).expanduser() if value else None


def load_key_overrides() -> dict[str, tuple[str, ...]]:
    """Load ``keys`` overrides as ``binding name -> key tokens``.

    A binding may map to one token string or a list of them; entries with any
    other shape, and empty token lists, are dropped.
    """
    value = load_config().get("keys")
    if not isinstance(value, dict):
        return {}

    overrides: dict[str, tuple[str, ...]] = {}
    for name, raw_keys in value.items():
        if not isinstance(name, str):
            continue
        if isinstance(raw_keys, str):
            raw_keys = [raw_keys]
        if not isinstance(raw_keys, list):
            continue
        keys = tuple(key for key in raw_keys if isinstance(key, str) and key)
        if keys:
            overrides[name] = keys
    return overrides
