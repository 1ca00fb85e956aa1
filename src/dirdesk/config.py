"""Configuration file management for dirdesk."""

from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any, Dict

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore

import tomli_w

# Default configuration file location
CONFIG_FILE = Path.home() / ".dirdesk.toml"

# Default configuration
DEFAULT_CONFIG = {
    "display": {
        "timestamp_format": "%b %d %H:%M",
    },
    "input": {
        "resize_debounce_ms": 100,
    },
    "logging": {
        "level": "WARNING",
        "file": "~/.dirdesk.log",
    },
}


def load_config() -> Dict[str, Any]:
    """Load configuration from file or return defaults."""
    if not CONFIG_FILE.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(CONFIG_FILE, "rb") as f:
            config = tomllib.load(f)
        # Merge with defaults to ensure all keys exist
        return _merge_config(DEFAULT_CONFIG, config)
    except (OSError, tomllib.TOMLDecodeError):
        # If config is corrupted, return defaults
        return copy.deepcopy(DEFAULT_CONFIG)


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "wb") as f:
            tomli_w.dump(config, f)
    except (OSError, TypeError) as err:
        # Don't break the app if config save fails, but inform the user
        print(f"Warning: Failed to save configuration to {CONFIG_FILE}: {err}", file=sys.stderr)


def _merge_config(default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
    """Merge user config with defaults, preserving user values."""
    result = copy.deepcopy(default)
    for key, value in user.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_config(result[key], value)
        else:
            result[key] = value
    return result


def create_default_config() -> None:
    """Create default configuration file if it doesn't exist."""
    if CONFIG_FILE.exists():
        return

    save_config(DEFAULT_CONFIG)


def get_timestamp_format(config: Dict[str, Any] | None = None) -> str:
    """Get the strftime pattern used for entry timestamps."""
    config = config if config is not None else load_config()
    value = config.get("display", {}).get("timestamp_format")
    if not isinstance(value, str) or not value:
        return DEFAULT_CONFIG["display"]["timestamp_format"]
    return value


def get_resize_debounce_ms(config: Dict[str, Any] | None = None) -> int:
    """Get the quiet period required before a resize is applied."""
    config = config if config is not None else load_config()
    value = config.get("input", {}).get("resize_debounce_ms")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_CONFIG["input"]["resize_debounce_ms"]
    return value


def get_logging_settings(config: Dict[str, Any] | None = None) -> Dict[str, str]:
    """Get the log level and the expanded log file path."""
    config = config if config is not None else load_config()
    section = config.get("logging", {})
    defaults = DEFAULT_CONFIG["logging"]
    level = section.get("level", defaults["level"])
    file = section.get("file", defaults["file"])
    return {
        "level": str(level).upper(),
        "file": str(Path(str(file)).expanduser()),
    }


__all__ = [
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "create_default_config",
    "get_logging_settings",
    "get_resize_debounce_ms",
    "get_timestamp_format",
    "load_config",
    "save_config",
]
