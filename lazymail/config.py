"""Read-only JSON config helpers.

Reads the theme, graphics preference, external command names, and part
filters. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazymail"
CONFIG_FILENAME = "config.json"
CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
CONFIG_PATH = CONFIG_DIR / CONFIG_FILENAME

DEFAULT_NOTMUCH_COMMAND = "notmuch"
DEFAULT_OPEN_COMMAND = "xdg-open"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _load_command(key: str, default: str) -> str:
    value = load_config().get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def load_theme_name() -> str | None:
    value = load_config().get("theme")
    return value if isinstance(value, str) else None


def load_ascii_graphics() -> bool:
    """Return persisted ASCII tree-graphics preference.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    value = load_config().get("ascii_graphics")
    return bool(value) if isinstance(value, bool) else False


def load_notmuch_command() -> str:
    return _load_command("notmuch_command", DEFAULT_NOTMUCH_COMMAND)


def load_open_command() -> str:
    """Default command offered by the open-part prompt."""
    return _load_command("open_command", DEFAULT_OPEN_COMMAND)


def load_part_filters() -> dict[str, str]:
    """Load content-type -> filter command mappings.

    Used to expand parts notmuch does not inline (``text/html`` through a
    text browser, for example). Non-string keys or commands are dropped and
    content types are lower-cased.
    """
    value = load_config().get("part_filters")
    if not isinstance(value, dict):
        return {}
    filters: dict[str, str] = {}
    for content_type, command in value.items():
        if not isinstance(content_type, str) or not isinstance(command, str):
            continue
        if not content_type.strip() or not command.strip():
            continue
        filters[content_type.strip().lower()] = command.strip()
    return filters
