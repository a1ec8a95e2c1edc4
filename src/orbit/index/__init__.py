"""Persisted workspace state: index, focus list, whitelist and dashboard session."""

from orbit.index.store import atomic_write, index_path, load, save, storage_dir

__all__ = ["atomic_write", "index_path", "load", "save", "storage_dir"]
