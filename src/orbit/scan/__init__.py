"""Census pipeline: discovery, summarization, fingerprinting and classification."""

from orbit.scan.census import CensusOptions, parse_cutoff, run_census
from orbit.scan.classify import classify_project
from orbit.scan.fingerprint import fingerprint_project

__all__ = [
    "CensusOptions",
    "classify_project",
    "fingerprint_project",
    "parse_cutoff",
    "run_census",
]
