"""Filesystem access used by the directory listing.

The listing only talks to the three operations of :class:`FilesystemProvider`
so tests can swap the local disk for an in-memory fake.
"""

from __future__ import annotations

import os
import shutil
import stat
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Protocol


class MetadataError(OSError):
    """Raised when metadata for a single entry cannot be read."""


@dataclass(frozen=True)
class EntryStat:
    is_directory: bool
    created_at: datetime
    size_bytes: int


class FilesystemProvider(Protocol):
    def list_names(self, path: Path) -> List[str]:
        """Return entry names of ``path``; raise ``OSError`` when unreadable."""
        ...

    def stat_entry(self, path: Path) -> EntryStat:
        """Return metadata for ``path``; raise ``OSError`` when unreadable."""
        ...

    def remove_recursive(self, path: Path) -> None:
        """Delete ``path`` and everything beneath it; raise ``OSError`` on failure."""
        ...


def _created_at(stat_info: os.stat_result) -> datetime:
    """Prefer the birth time where the platform records one."""
    birth = getattr(stat_info, "st_birthtime", None)
    return datetime.fromtimestamp(birth if birth is not None else stat_info.st_ctime)


class LocalFilesystem:
    """Provider backed by the local disk."""

    def list_names(self, path: Path) -> List[str]:
        return sorted(os.listdir(path))

    def stat_entry(self, path: Path) -> EntryStat:
        try:
            stat_info = path.stat()
        except OSError as err:
            raise MetadataError(f"Cannot read metadata for {path}: {err}") from err
        return EntryStat(
            is_directory=stat.S_ISDIR(stat_info.st_mode),
            created_at=_created_at(stat_info),
            size_bytes=stat_info.st_size,
        )

    def remove_recursive(self, path: Path) -> None:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()


__all__ = ["EntryStat", "FilesystemProvider", "LocalFilesystem", "MetadataError"]
