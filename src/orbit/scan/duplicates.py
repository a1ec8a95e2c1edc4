"""Fingerprint grouping and duplicate demotion."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from orbit.model import ProjectEntry, ProjectKind


def group_by_fingerprint(projects: Sequence[ProjectEntry]) -> dict[str, list[ProjectEntry]]:
    """Fingerprint -> members, for groups with at least two members."""
    groups: dict[str, list[ProjectEntry]] = defaultdict(list)
    for project in projects:
        if project.fingerprint is not None:
            groups[project.fingerprint].append(project)
    return {fp: members for fp, members in groups.items() if len(members) >= 2}


def mark_duplicates_by_fingerprint(projects: Sequence[ProjectEntry]) -> int:
    """Demote unpinned, non-experimental members of shared-fingerprint groups.

    Must run after pinned flags are synced. Idempotent. Returns the number
    of entries whose kind changed.
    """
    changed = 0
    for members in group_by_fingerprint(projects).values():
        for project in members:
            if project.pinned or project.kind is ProjectKind.EXPERIMENTAL:
                continue
            if project.kind is not ProjectKind.BACKUP_DUPLICATE:
                project.kind = ProjectKind.BACKUP_DUPLICATE
                changed += 1
    return changed
