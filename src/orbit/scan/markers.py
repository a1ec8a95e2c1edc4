"""Glob patterns that identify a project root."""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatchcase

MARKER_PATTERNS = (
    "**/CLAUDE.md",
    "**/AGENT.md",
    "**/HANDOFF*.md",
    "**/*handoff*.md",
    "**/*export*.md",
    "**/*session*.md",
    "**/README.md",
    "**/Cargo.toml",
    "**/pyproject.toml",
    "**/package.json",
)


class MarkerMatcher:
    """Case-sensitive matcher over root-relative POSIX paths.

    ``*`` crosses ``/``, so ``**/*export*.md`` also matches any ``.md`` file
    under a directory whose path contains ``export``. A leading ``**/``
    matches zero or more directories. Built once per command and passed to
    discovery.
    """

    def __init__(self, patterns: Iterable[str] = MARKER_PATTERNS) -> None:
        self.patterns = tuple(patterns)
        globs: list[str] = []
        for pattern in self.patterns:
            globs.append(pattern)
            if pattern.startswith("**/"):
                globs.append(pattern[3:])
        self._globs = tuple(globs)

    def matches(self, rel_path: str) -> bool:
        return any(fnmatchcase(rel_path, glob) for glob in self._globs)
