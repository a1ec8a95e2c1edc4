"""One-line inventory status for shells and status bars."""

from __future__ import annotations

from pathlib import Path

from orbit.index import store
from orbit.index.focus import load_focus
from orbit.model import ProjectKind


def build_status(root: Path) -> dict[str, object]:
    index = store.load(root)
    focus = load_focus(root)
    kinds = [project.kind for project in index.projects]
    return {
        "root": str(root),
        "indexed_projects": len(index.projects),
        "active": kinds.count(ProjectKind.ACTIVE_STANDALONE),
        "backup_duplicate": kinds.count(ProjectKind.BACKUP_DUPLICATE),
        "pinned": len(focus.pinned),
        "index_path": str(store.index_path(root)),
    }


def format_status(status: dict[str, object]) -> str:
    lines = [
        "Orbit status",
        f"  Root: {status['root']}",
        f"  Indexed projects: {status['indexed_projects']}",
        f"  Active: {status['active']}",
        f"  Backup/Duplicate: {status['backup_duplicate']}",
        f"  Pinned: {status['pinned']}",
        f"  Index: {status['index_path']}",
    ]
    return "\n".join(lines)
