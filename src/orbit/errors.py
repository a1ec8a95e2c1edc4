"""Orbit exception hierarchy.

All Orbit-specific exceptions inherit from OrbitError so the CLI can
turn any of them into a clean user-facing failure.
"""


class OrbitError(Exception):
    """Base exception for all Orbit errors."""


class ScanError(OrbitError):
    """Filesystem entry could not be read during a census."""


class StoreError(OrbitError):
    """Persisted document or export could not be written."""


class PathValidationError(OrbitError):
    """Target path does not exist under the workspace root."""


class CutoffFormatError(OrbitError):
    """Cutoff date is not in YYYY-MM-DD format."""
