"""Settings file I/O for tool-result-view.

Manages a general-purpose JSON settings file at
XDG_CONFIG_HOME/tool-result-view/settings.json. The "layout" key overrides
LayoutConfig constants; other settings can be added as top-level keys.

Import as: import tool_result_view.io.settings
"""

import dataclasses
import json
import logging
import os
import tempfile
from pathlib import Path

from tool_result_view.core.layout import LayoutConfig

logger = logging.getLogger(__name__)

LAYOUT_KEY = "layout"


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / tool-result-view / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "tool-result-view" / "settings.json"


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_config_path()
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: dict) -> None:
    """Atomic write of settings dict to JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    # Atomic: write temp → rename
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on failure
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def load_setting(key: str, default=None):
    """Load a single setting by key. Returns default if absent."""
    return load_settings().get(key, default)


def save_setting(key: str, value) -> None:
    """Save a single setting by key (merge into existing settings)."""
    data = load_settings()
    data[key] = value
    save_settings(data)


# [LAW:one-source-of-truth] Smallest accepted value per LayoutConfig field.
LAYOUT_MINIMUMS = {
    "static_reserved_rows": 0,
    "context_reserved_rows": 0,
    "minimum_floor": 0,
    "horizontal_padding": 0,
    "max_characters": 1,
    "default_window_rows": 1,
}


def _valid_layout_value(name: str, value) -> bool:
    if name not in LAYOUT_MINIMUMS:
        return False
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return value >= LAYOUT_MINIMUMS[name]


def load_layout_config() -> LayoutConfig:
    """LayoutConfig defaults overridden by the "layout" settings key.

    Unknown keys, non-integer values and values below a field's minimum
    are ignored; the default stays in effect for that field.
    """
    raw = load_setting(LAYOUT_KEY, {})
    if not isinstance(raw, dict):
        return LayoutConfig()
    overrides = {}
    for name, value in raw.items():
        if _valid_layout_value(name, value):
            overrides[name] = value
        else:
            logger.warning("ignoring layout setting %s=%r", name, value)
    return LayoutConfig(**overrides)


def save_layout_config(config: LayoutConfig) -> None:
    """Persist every LayoutConfig field under the "layout" key."""
    save_setting(LAYOUT_KEY, dataclasses.asdict(config))
