"""Characters and string helpers shared by the line generators."""

from __future__ import annotations

# Decoration characters
ROW_CHARACTER = "|"
COLUMN_CHARACTER = "-"
ROW_PADDING = " " * 2
PROMPT = "> "
END_LINE = "\n"

PARENT_LABEL = "../"
WRITE_MORE_BACKWARD = '"b" to <--'
WRITE_MORE_FORWARD = '"f" to -->'
PAGINATION_HINT = f"{WRITE_MORE_BACKWARD}{ROW_PADDING}{WRITE_MORE_FORWARD}"


def truncate(text: str, max_width: int) -> str:
    """Truncate text to fit within max_width, appending ellipsis if needed."""
    if max_width <= 0:
        return ""
    if len(text) <= max_width:
        return text
    if max_width <= 3:
        return text[:max_width]
    return text[: max_width - 3] + "..."


def fit_width(text: str, width: int) -> str:
    """Cut or right-pad ``text`` so it occupies exactly ``width`` columns."""
    if width <= 0:
        return ""
    return text[:width].ljust(width)


def bordered(text: str) -> str:
    """Wrap ``text`` in the vertical row character on both sides."""
    return f"{ROW_CHARACTER}{text}{ROW_CHARACTER}"


__all__ = [
    "COLUMN_CHARACTER",
    "END_LINE",
    "PAGINATION_HINT",
    "PARENT_LABEL",
    "PROMPT",
    "ROW_CHARACTER",
    "ROW_PADDING",
    "WRITE_MORE_BACKWARD",
    "WRITE_MORE_FORWARD",
    "bordered",
    "fit_width",
    "truncate",
]
