"""Small helpers that turn raw file metadata into readable text."""

from __future__ import annotations

from datetime import datetime

from dirdesk.render_utils import truncate

DEFAULT_TIMESTAMP_FORMAT = "%b %d %H:%M"
DIRECTORY_SIZE_TEXT = "dir"


def format_size(size: int) -> str:
    """Convert a byte count into a friendly string such as ``12.4K``."""
    units = ["B", "K", "M", "G", "T", "P", "E", "Z", "Y"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    unit = units[index]
    if unit == "B":
        return f"{int(value)}{unit}"
    formatted = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{formatted}{unit}"


def format_timestamp(timestamp: datetime, pattern: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Render a timestamp using the configured short format."""
    return timestamp.strftime(pattern)


def build_display_label(
    name: str,
    *,
    created: datetime,
    size: int,
    is_directory: bool,
    budget: int,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> str:
    """Combine timestamp, size and name into a label that fits ``budget``.

    Directories show ``dir`` in place of a size and carry a trailing slash.
    Labels longer than the budget are cut and end with ``...``.
    """
    size_text = DIRECTORY_SIZE_TEXT if is_directory else format_size(size)
    shown_name = f"{name}/" if is_directory else name
    label = f"{format_timestamp(created, timestamp_format)} {size_text} {shown_name}"
    return truncate(label, budget)


def placeholder_label(name: str) -> str:
    """Label used when an entry's metadata cannot be read."""
    return f"? ? {name}"


__all__ = [
    "DEFAULT_TIMESTAMP_FORMAT",
    "build_display_label",
    "format_size",
    "format_timestamp",
    "placeholder_label",
]
