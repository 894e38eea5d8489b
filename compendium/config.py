"""Persistent JSON config helpers.

Stores the default highlight style and permalink base name for the CLI.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from .render import DEFAULT_STYLE

CONFIG_PATH = Path.home() / ".config" / "compendium.json"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config never stops a run.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str) or not value:
        return None
    return value


def load_highlight_style() -> str:
    """Return the configured Pygments style, or ``DEFAULT_STYLE``."""
    return _load_string("highlight_style") or DEFAULT_STYLE


def save_highlight_style(style: str) -> None:
    config = load_config()
    config["highlight_style"] = style
    save_config(config)


def load_permalink_name() -> str | None:
    """Return the configured permalink base name, if any."""
    return _load_string("permalink_name")


def save_permalink_name(name: str | None) -> None:
    config = load_config()
    if name is None:
        config.pop("permalink_name", None)
    else:
        config["permalink_name"] = name
    save_config(config)
