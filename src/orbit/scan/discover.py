"""Find project roots under a workspace root."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from orbit.scan.markers import MarkerMatcher
from orbit.scan.walk import SKIP_DIRS, walk

GIT_MARKER = ".git"


@dataclass(slots=True)
class DiscoveredProject:
    root: Path
    markers: list[str] = field(default_factory=list)


def _upsert(found: dict[Path, DiscoveredProject], root: Path, marker: str) -> None:
    project = found.get(root)
    if project is None:
        found[root] = DiscoveredProject(root=root, markers=[marker])
        return
    if marker not in project.markers:
        project.markers.append(marker)


def discover_projects(
    root: Path,
    depth: int,
    matcher: MarkerMatcher,
    *,
    skip_dirs: frozenset[str] = SKIP_DIRS,
) -> list[DiscoveredProject]:
    """Return project roots under *root* sorted by path.

    A ``.git`` directory qualifies its parent; a file matching *matcher*
    qualifies its containing directory. Raises ``ScanError`` on the first
    unreadable entry.
    """
    found: dict[Path, DiscoveredProject] = {}
    for item in walk(root, max_depth=depth, skip_dirs=skip_dirs):
        if item.is_dir and item.name == GIT_MARKER:
            _upsert(found, item.path.parent, GIT_MARKER)
            continue
        if item.is_file:
            rel = item.path.relative_to(root).as_posix()
            if matcher.matches(rel):
                _upsert(found, item.path.parent, rel)
    return sorted(found.values(), key=lambda project: project.root)
