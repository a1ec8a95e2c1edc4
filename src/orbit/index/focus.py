"""Pinned ("focus") project list, the source of truth for ``pinned`` flags."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from orbit.index import store
from orbit.model import is_pinned, sync_pinned_flags

logger = logging.getLogger(__name__)

FOCUS_FILE = "focus.json"


@dataclass(slots=True)
class Focus:
    pinned: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"pinned": list(self.pinned)}


def focus_path(root: Path) -> Path:
    return store.storage_dir(root) / FOCUS_FILE


def load_focus(root: Path) -> Focus:
    decoded = store.read_json_document(focus_path(root))
    if decoded is None:
        return Focus()
    raw = decoded.get("pinned")
    if not isinstance(raw, list):
        logger.warning("ignoring malformed focus list %s", focus_path(root))
        return Focus()
    return Focus(pinned=sorted({str(item) for item in raw}))


def save_focus(root: Path, focus: Focus) -> Path:
    focus.pinned = sorted(set(focus.pinned))
    path = focus_path(root)
    store.atomic_write(path, store.dump_json(focus.to_dict()))
    return path


def resync_index(root: Path, focus: Focus) -> None:
    """Re-derive ``pinned`` flags in the stored index after a focus change."""
    if not store.index_path(root).is_file():
        return
    index = store.load(root)
    sync_pinned_flags(index.projects, focus.pinned)
    store.save(root, index)


def pin(root: Path, rel_path: str) -> Focus:
    rel_path = store.root_relative(root, rel_path)
    focus = load_focus(root)
    if rel_path not in focus.pinned:
        focus.pinned.append(rel_path)
    save_focus(root, focus)
    resync_index(root, focus)
    logger.info("pinned %s", rel_path)
    return focus


def unpin(root: Path, rel_path: str) -> Focus:
    rel_path = store.root_relative(root, rel_path, must_exist=False)
    focus = load_focus(root)
    focus.pinned = [item for item in focus.pinned if item != rel_path]
    save_focus(root, focus)
    resync_index(root, focus)
    logger.info("unpinned %s", rel_path)
    return focus


def toggle_pin(root: Path, rel_path: str) -> Focus:
    rel_path = store.root_relative(root, rel_path, must_exist=False)
    if is_pinned(rel_path, load_focus(root).pinned):
        return unpin(root, rel_path)
    return pin(root, rel_path)
