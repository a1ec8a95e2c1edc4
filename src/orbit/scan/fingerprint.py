"""Structural similarity fingerprint for a project root.

The hash covers a bounded prefix of well-known marker files (in a fixed
order) plus the sorted names of the root's immediate children. Two copies
of a project with the same markers and the same top-level layout collide
even if nested content differs; large build outputs cost nothing.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from orbit.errors import ScanError

FINGERPRINT_MARKERS = (
    "README.md",
    "CLAUDE.md",
    "AGENT.md",
    "Cargo.toml",
    "pyproject.toml",
    "package.json",
    "HANDOFF.md",
    "handoff.md",
    "Handoff.md",
)
MAX_MARKER_BYTES = 64 * 1024
MAX_CHILD_NAMES = 200


def _read_prefix(path: Path) -> bytes:
    try:
        with path.open("rb") as handle:
            return handle.read(MAX_MARKER_BYTES)
    except OSError as exc:
        raise ScanError(f"Failed to read {path} for fingerprinting: {exc}") from exc


def fingerprint_project(project_root: Path) -> str | None:
    if not project_root.is_dir():
        return None

    hasher = hashlib.sha256()
    used = 0
    for marker in FINGERPRINT_MARKERS:
        candidate = project_root / marker
        if candidate.is_file():
            used += 1
            hasher.update(_read_prefix(candidate))

    try:
        children = sorted(os.fsencode(name) for name in os.listdir(project_root))
    except OSError as exc:
        raise ScanError(f"Failed to read directory {project_root}: {exc}") from exc
    for child in children[:MAX_CHILD_NAMES]:
        hasher.update(child)
        hasher.update(b"\n")

    if used == 0 and not children:
        return None
    return hasher.hexdigest()
