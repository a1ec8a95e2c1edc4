"""Paths protected from snapshot and copy operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from orbit.index import store

logger = logging.getLogger(__name__)

WHITELIST_FILE = "whitelist.json"
WHITELIST_VERSION = "0.1"


@dataclass(slots=True)
class Whitelist:
    version: str = WHITELIST_VERSION
    paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"version": self.version, "paths": list(self.paths)}


def whitelist_path(root: Path) -> Path:
    return store.storage_dir(root) / WHITELIST_FILE


def load_whitelist(root: Path) -> Whitelist:
    decoded = store.read_json_document(whitelist_path(root))
    if decoded is None:
        return Whitelist()
    raw = decoded.get("paths")
    if not isinstance(raw, list):
        logger.warning("ignoring malformed whitelist %s", whitelist_path(root))
        return Whitelist()
    return Whitelist(
        version=str(decoded.get("version", WHITELIST_VERSION)),
        paths=sorted({str(item) for item in raw}),
    )


def save_whitelist(root: Path, whitelist: Whitelist) -> Path:
    whitelist.paths = sorted(set(whitelist.paths))
    path = whitelist_path(root)
    store.atomic_write(path, store.dump_json(whitelist.to_dict()))
    return path


def add_whitelist(root: Path, rel_path: str) -> Whitelist:
    rel_path = store.root_relative(root, rel_path)
    whitelist = load_whitelist(root)
    if rel_path not in whitelist.paths:
        whitelist.paths.append(rel_path)
    save_whitelist(root, whitelist)
    return whitelist


def remove_whitelist(root: Path, rel_path: str) -> Whitelist:
    rel_path = store.root_relative(root, rel_path, must_exist=False)
    whitelist = load_whitelist(root)
    whitelist.paths = [item for item in whitelist.paths if item != rel_path]
    save_whitelist(root, whitelist)
    return whitelist


def is_protected(rel_path: str, whitelist: Whitelist) -> bool:
    """True when *rel_path* equals or sits below any whitelisted path."""
    candidate = PurePosixPath(rel_path).parts
    for entry in whitelist.paths:
        prefix = PurePosixPath(entry).parts
        if candidate[: len(prefix)] == prefix:
            return True
    return False
