"""Pruned, depth-bounded directory traversal shared by the census stages."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from orbit.errors import ScanError

SKIP_DIRS = frozenset(
    {
        "node_modules",
        "target",
        ".git",
        "__pycache__",
        "venv",
        ".venv",
        "dist",
        "build",
        ".next",
        "vendor",
        ".orbit",
    }
)


@dataclass(frozen=True, slots=True)
class WalkEntry:
    entry: os.DirEntry[str]
    depth: int
    is_dir: bool
    is_file: bool

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def path(self) -> Path:
        return Path(self.entry.path)

    def stat(self) -> os.stat_result:
        try:
            return self.entry.stat(follow_symlinks=False)
        except OSError as exc:
            raise ScanError(f"Failed to read metadata for {self.entry.path}: {exc}") from exc


def _classify(entry: os.DirEntry[str]) -> tuple[bool, bool]:
    try:
        return entry.is_dir(follow_symlinks=False), entry.is_file(follow_symlinks=False)
    except OSError as exc:
        raise ScanError(f"Failed to read entry {entry.path}: {exc}") from exc


def walk(
    root: Path,
    *,
    max_depth: int | None = None,
    skip_dirs: frozenset[str] = SKIP_DIRS,
) -> Iterator[WalkEntry]:
    """Yield every entry under *root* in sorted pre-order.

    Directories named in *skip_dirs* are yielded but never descended into.
    Symlinks are not followed. Entries deeper than *max_depth* (children of
    *root* are depth 1) are not visited. Any unreadable directory raises
    ``ScanError``; there is no partial result.
    """
    if max_depth is not None and max_depth < 1:
        return
    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        directory, depth = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda item: item.name)
        except OSError as exc:
            raise ScanError(f"Failed to read entry in {directory}: {exc}") from exc

        child_depth = depth + 1
        descend = max_depth is None or child_depth < max_depth
        subdirs: list[tuple[Path, int]] = []
        for entry in entries:
            is_dir, is_file = _classify(entry)
            yield WalkEntry(entry=entry, depth=child_depth, is_dir=is_dir, is_file=is_file)
            if is_dir and descend and entry.name not in skip_dirs:
                subdirs.append((Path(entry.path), child_depth))
        stack.extend(reversed(subdirs))
