"""Persistent JSON config helpers.

Stores the hidden-file preference and the executable-extension override.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .fs.platform import ExecutablePolicy, default_executable_policy, executable_by_extension

APP_NAME = "lazyls"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


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


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep listing behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_show_hidden() -> bool:
    """Return persisted hidden-file visibility preference.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    value = load_config().get("show_hidden")
    return bool(value) if isinstance(value, bool) else False


def save_show_hidden(show_hidden: bool) -> None:
    """Persist hidden-file visibility preference as a boolean."""
    config = load_config()
    config["show_hidden"] = bool(show_hidden)
    save_config(config)


def _normalize_extension(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    extension = value.strip().lstrip(".").lower()
    return extension or None


def load_executable_extensions() -> tuple[str, ...] | None:
    """Load the executable-extension override.

    Returns ``None`` when unset or not a list. Non-string and empty items are
    dropped; the rest are lowercased, stripped of a leading dot and
    de-duplicated in order.
    """
    value = load_config().get("executable_extensions")
    if not isinstance(value, list):
        return None

    extensions: list[str] = []
    for raw in value:
        extension = _normalize_extension(raw)
        if extension is not None and extension not in extensions:
            extensions.append(extension)
    return tuple(extensions)


def save_executable_extensions(extensions: list[str] | tuple[str, ...]) -> None:
    """Persist the executable-extension override in normalized form."""
    normalized: list[str] = []
    for raw in extensions:
        extension = _normalize_extension(raw)
        if extension is not None and extension not in normalized:
            normalized.append(extension)
    config = load_config()
    config["executable_extensions"] = normalized
    save_config(config)


def load_executable_policy() -> ExecutablePolicy:
    """Return the configured executable policy, or the platform default."""
    extensions = load_executable_extensions()
    if extensions is None:
        return default_executable_policy()
    return executable_by_extension(extensions)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_show_hidden",
    "save_show_hidden",
    "load_executable_extensions",
    "save_executable_extensions",
    "load_executable_policy",
]
