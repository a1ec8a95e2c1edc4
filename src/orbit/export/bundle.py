"""Export bundle: Markdown summary, pretty JSON copy and CSV table."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from orbit.export.markdown import render_markdown
from orbit.index import store
from orbit.model import OrbitIndex

logger = logging.getLogger(__name__)

EXPORTS_DIR = "exports"
CSV_COLUMNS = (
    "path",
    "kind",
    "pinned",
    "latest_mtime",
    "size_bytes",
    "artifact_count",
    "has_git",
    "has_rust",
    "has_node",
    "has_python",
    "fingerprint",
)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def render_csv(index: OrbitIndex) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for project in index.projects:
        writer.writerow(
            [
                project.path,
                project.kind.label,
                _flag(project.pinned),
                project.latest_mtime.isoformat() if project.latest_mtime else "",
                "" if project.size_bytes is None else str(project.size_bytes),
                str(project.artifact_count),
                _flag(project.has_git),
                _flag(project.has_rust),
                _flag(project.has_node),
                _flag(project.has_python),
                project.fingerprint or "",
            ]
        )
    return buffer.getvalue()


def exports_dir(root: Path) -> Path:
    return store.storage_dir(root) / EXPORTS_DIR


def export_all(root: Path, *, dry_run: bool = False) -> Path:
    """Write ``summary.md``, ``index.json`` and ``index.csv``; return the directory."""
    out = exports_dir(root)
    if dry_run:
        logger.info("dry run: would export to %s", out)
        return out
    index = store.load(root)
    store.atomic_write(out / "summary.md", render_markdown(index))
    store.atomic_write(out / "index.json", store.dump_json(index.to_dict()))
    store.atomic_write(out / "index.csv", render_csv(index))
    logger.info("exported %d projects to %s", len(index.projects), out)
    return out
