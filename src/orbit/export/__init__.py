"""Read-only renderings of a committed index."""

from orbit.export.bundle import export_all, render_csv
from orbit.export.markdown import render_markdown

__all__ = ["export_all", "render_csv", "render_markdown"]
