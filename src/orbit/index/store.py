"""Project-local JSON store with write-then-rename updates.

Every persisted document lives under ``<root>/.orbit/``. Readers never see
a partially written file: content goes to a sibling temporary file which is
then renamed over the destination.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from orbit.errors import PathValidationError, StoreError
from orbit.model import OrbitIndex

logger = logging.getLogger(__name__)

STORE_DIR = ".orbit"
INDEX_FILE = "index.json"


def storage_dir(root: Path) -> Path:
    return root / STORE_DIR


def index_path(root: Path) -> Path:
    return storage_dir(root) / INDEX_FILE


def root_relative(root: Path, raw: str, *, must_exist: bool = True) -> str:
    """Normalise *raw* into the POSIX root-relative form census paths use.

    Absolute paths are accepted when they sit under *root*. The root itself
    is ``"."``.
    """
    base = Path(os.path.normpath(root.absolute()))
    target = Path(os.path.normpath(base / raw.strip()))
    try:
        rel = target.relative_to(base)
    except ValueError as exc:
        raise PathValidationError(f"Path is outside the root {base}: {raw}") from exc
    if must_exist and not target.exists():
        raise PathValidationError(f"Path does not exist: {target}")
    text = rel.as_posix()
    return "." if text in ("", ".") else text


def dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2) + "\n"


def atomic_write(path: Path, content: str) -> None:
    """Write *content* to *path* via a sibling temp file and ``os.replace``."""
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise StoreError(f"Failed to write {path}: {exc}") from exc


def read_json_document(path: Path) -> dict[str, Any] | None:
    """Decode a JSON object from *path*; ``None`` when missing or malformed."""
    if not path.is_file():
        return None
    try:
        decoded = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("ignoring unreadable document %s: %s", path, exc)
        return None
    if not isinstance(decoded, dict):
        logger.warning("ignoring non-object document %s", path)
        return None
    return decoded


def load(root: Path) -> OrbitIndex:
    """Load the index for *root*, or an empty default. Never raises."""
    path = index_path(root)
    decoded = read_json_document(path)
    if decoded is None:
        return OrbitIndex()
    try:
        return OrbitIndex.from_dict(decoded)
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("ignoring malformed index %s: %s", path, exc)
        return OrbitIndex()


def save(root: Path, index: OrbitIndex) -> Path:
    path = index_path(root)
    atomic_write(path, dump_json(index.to_dict()))
    logger.debug("index saved to %s (%d projects)", path, len(index.projects))
    return path
