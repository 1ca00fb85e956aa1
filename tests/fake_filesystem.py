"""In-memory filesystem provider for tests.

A tree is a nested dict: a dict value is a directory, an int value is a file
of that many bytes.  Names are listed in insertion order.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from dirdesk.filesystem import EntryStat, MetadataError

Tree = Dict[str, Union["Tree", int]]

ROOT = Path("/desk")
CREATED = datetime(2024, 3, 5, 14, 7)


class FakeFilesystem:
    def __init__(self, tree: Tree, root: Path = ROOT) -> None:
        self.root = root
        self.tree = tree
        self.unreadable: Set[Path] = set()
        self.broken: Set[Path] = set()
        self.locked: Set[Path] = set()
        self.removed: List[Path] = []
        self.stat_calls: List[Path] = []

    def _node(self, path: Path) -> Optional[Union[Tree, int]]:
        try:
            parts = Path(path).relative_to(self.root).parts
        except ValueError:
            return None
        node: Union[Tree, int] = self.tree
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def list_names(self, path: Path) -> List[str]:
        if path in self.unreadable:
            raise PermissionError(13, "Permission denied", str(path))
        node = self._node(path)
        if node is None:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        if not isinstance(node, dict):
            raise NotADirectoryError(20, "Not a directory", str(path))
        return list(node)

    def stat_entry(self, path: Path) -> EntryStat:
        self.stat_calls.append(path)
        node = self._node(path)
        if path in self.broken or node is None:
            raise MetadataError(f"Cannot read metadata for {path}")
        if isinstance(node, dict):
            return EntryStat(is_directory=True, created_at=CREATED, size_bytes=4096)
        return EntryStat(is_directory=False, created_at=CREATED, size_bytes=node)

    def remove_recursive(self, path: Path) -> None:
        if path in self.locked:
            raise PermissionError(13, "Permission denied", str(path))
        parent = self._node(path.parent)
        if not isinstance(parent, dict) or path.name not in parent:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        del parent[path.name]
        self.removed.append(path)
