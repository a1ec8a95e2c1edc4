"""Per-project activity, size, artifact and ecosystem summary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from orbit.scan.artifacts import is_artifact_name
from orbit.scan.walk import SKIP_DIRS, walk

RUST_MANIFESTS = frozenset({"Cargo.toml"})
NODE_MANIFESTS = frozenset({"package.json"})
PYTHON_MANIFESTS = frozenset({"pyproject.toml", "pytest.ini"})


@dataclass(slots=True)
class ProjectSummary:
    latest_mtime: datetime | None = None
    size_bytes: int = 0
    artifact_count: int = 0
    has_git: bool = False
    has_rust: bool = False
    has_node: bool = False
    has_python: bool = False


def summarize_project(
    project_root: Path,
    cutoff: datetime | None = None,
    *,
    skip_dirs: frozenset[str] = SKIP_DIRS,
) -> ProjectSummary:
    """Walk *project_root* (no depth cap, denylist pruned) and aggregate it.

    Size counts every visited file; ``latest_mtime`` only counts files
    modified at or after *cutoff*. Raises ``ScanError`` on unreadable entries.
    """
    summary = ProjectSummary()
    for item in walk(project_root, skip_dirs=skip_dirs):
        if item.is_dir:
            if item.name == ".git":
                summary.has_git = True
            continue
        if not item.is_file:
            continue

        name = item.name
        if is_artifact_name(name):
            summary.artifact_count += 1
        if name in RUST_MANIFESTS:
            summary.has_rust = True
        if name in NODE_MANIFESTS:
            summary.has_node = True
        if name in PYTHON_MANIFESTS:
            summary.has_python = True

        st = item.stat()
        summary.size_bytes += st.st_size
        modified = datetime.fromtimestamp(st.st_mtime).astimezone()
        if cutoff is not None and modified < cutoff:
            continue
        if summary.latest_mtime is None or modified > summary.latest_mtime:
            summary.latest_mtime = modified
    return summary
