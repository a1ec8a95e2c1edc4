"""Orbit: local workspace census and project inventory."""

__version__ = "0.5.0"
