"""Timestamped snapshot of focus, index and pinned projects' artifacts."""

from __future__ import annotations

import logging
import re
import shutil
from datetime import datetime
from pathlib import Path

from orbit.errors import StoreError
from orbit.export.markdown import render_markdown
from orbit.index import store
from orbit.index.focus import load_focus
from orbit.index.whitelist import is_protected, load_whitelist
from orbit.scan.artifacts import is_markdown_artifact
from orbit.scan.walk import walk

logger = logging.getLogger(__name__)

SNAPSHOTS_DIR = "snapshots"
STAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
ARTIFACT_MAX_DEPTH = 6
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def sanitize(text: str) -> str:
    return _NON_ALNUM.sub("_", text)


def snapshot_dir_for(root: Path, label: str | None, now: datetime | None = None) -> Path:
    stamp = (now or datetime.now()).strftime(STAMP_FORMAT)
    return store.storage_dir(root) / SNAPSHOTS_DIR / f"{stamp}_{sanitize(label or 'snapshot')}"


def _copy_artifacts(project_root: Path, out_dir: Path, rel: str) -> int:
    copied = 0
    for item in walk(project_root, max_depth=ARTIFACT_MAX_DEPTH):
        if not item.is_file or not is_markdown_artifact(item.name):
            continue
        target = out_dir / f"{sanitize(rel)}__{item.name}"
        try:
            shutil.copyfile(item.path, target)
        except OSError as exc:
            raise StoreError(f"Failed to copy {item.path} to {target}: {exc}") from exc
        copied += 1
    return copied


def snapshot_pinned(root: Path, label: str | None = None, *, dry_run: bool = False) -> Path:
    """Create a snapshot directory and return its path.

    Pinned projects covered by the whitelist are skipped. In dry-run mode
    nothing is created.
    """
    snap_dir = snapshot_dir_for(root, label)
    if dry_run:
        logger.info("dry run: would create snapshot %s", snap_dir)
        return snap_dir

    focus = load_focus(root)
    index = store.load(root)
    whitelist = load_whitelist(root)

    store.atomic_write(snap_dir / "focus.json", store.dump_json(focus.to_dict()))
    store.atomic_write(snap_dir / "index.json", store.dump_json(index.to_dict()))

    artifacts_dir = snap_dir / "artifacts"
    try:
        artifacts_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StoreError(f"Failed to create artifacts directory {artifacts_dir}: {exc}") from exc

    copied = 0
    for rel in focus.pinned:
        if is_protected(rel, whitelist):
            logger.info("skipping whitelisted project %s", rel)
            continue
        project_root = root / rel
        if project_root.is_dir():
            copied += _copy_artifacts(project_root, artifacts_dir, rel)

    store.atomic_write(snap_dir / "summary.md", render_markdown(index))
    logger.info("snapshot %s created with %d artifacts", snap_dir, copied)
    return snap_dir
