"""Census entry point: discover, summarize, classify, dedupe, persist."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from orbit.errors import CutoffFormatError
from orbit.index import store
from orbit.index.focus import load_focus
from orbit.model import OrbitIndex, ProjectEntry, sync_pinned_flags
from orbit.scan.classify import classify_project
from orbit.scan.discover import DiscoveredProject, discover_projects
from orbit.scan.duplicates import mark_duplicates_by_fingerprint
from orbit.scan.fingerprint import fingerprint_project
from orbit.scan.markers import MarkerMatcher
from orbit.scan.progress import Progress
from orbit.scan.summarize import summarize_project
from orbit.scan.walk import SKIP_DIRS

logger = logging.getLogger(__name__)

CUTOFF_FORMAT = "%Y-%m-%d"


@dataclass(slots=True)
class CensusOptions:
    """Per-command census configuration, built once and passed down."""

    matcher: MarkerMatcher = field(default_factory=MarkerMatcher)
    skip_dirs: frozenset[str] = SKIP_DIRS
    dry_run: bool = False
    progress: Progress = field(default_factory=lambda: Progress(enabled=False))


def parse_cutoff(since: str | None) -> datetime | None:
    """Parse ``YYYY-MM-DD`` into local midnight, or ``None`` when absent."""
    if since is None:
        return None
    try:
        parsed = datetime.strptime(since, CUTOFF_FORMAT)
    except ValueError as exc:
        raise CutoffFormatError(
            f"Invalid date '{since}': expected YYYY-MM-DD format"
        ) from exc
    return parsed.astimezone()


def relpath(root: Path, path: Path) -> str:
    try:
        rel = path.relative_to(root)
    except ValueError:
        rel = path
    text = rel.as_posix().replace("\\", "/")
    return "." if text in ("", ".") else text


def build_project_entries(
    root: Path,
    discovered: list[DiscoveredProject],
    cutoff: datetime | None,
    options: CensusOptions,
) -> list[ProjectEntry]:
    projects: list[ProjectEntry] = []
    for item in discovered:
        rel = relpath(root, item.root)
        options.progress.note(f"summarizing {rel}")
        summary = summarize_project(item.root, cutoff, skip_dirs=options.skip_dirs)
        projects.append(
            ProjectEntry(
                path=rel,
                kind=classify_project(rel, summary.latest_mtime, cutoff),
                latest_mtime=summary.latest_mtime,
                size_bytes=summary.size_bytes,
                artifact_count=summary.artifact_count,
                has_git=summary.has_git,
                has_rust=summary.has_rust,
                has_node=summary.has_node,
                has_python=summary.has_python,
                fingerprint=fingerprint_project(item.root),
            )
        )
    return projects


def run_census(
    root: Path,
    depth: int,
    cutoff: datetime | None = None,
    *,
    options: CensusOptions | None = None,
) -> OrbitIndex:
    """Rebuild the whole index for *root* and save it (unless dry-run).

    Any I/O failure aborts the run with ``ScanError``; nothing is written.
    """
    options = options or CensusOptions()
    focus = load_focus(root)

    options.progress.note(f"discovering projects under {root} (depth {depth})")
    discovered = discover_projects(root, depth, options.matcher, skip_dirs=options.skip_dirs)
    logger.info("discovered %d project roots under %s", len(discovered), root)

    projects = build_project_entries(root, discovered, cutoff, options)
    sync_pinned_flags(projects, focus.pinned)
    demoted = mark_duplicates_by_fingerprint(projects)
    if demoted:
        logger.info("marked %d projects as duplicates", demoted)

    index = OrbitIndex(root=str(root), generated_at=datetime.now().astimezone(), projects=projects)
    if options.dry_run:
        options.progress.note("dry run: index not written")
        return index
    store.save(root, index)
    options.progress.note(f"index written to {store.index_path(root)}")
    return index
