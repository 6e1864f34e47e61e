"""
Parser package for Changelog Hub.

This package contains the loader for canonical snapshot and changelog
documents (JSON or YAML).
"""

from changelog_hub.parser.snapshot_loader import SnapshotLoader, SnapshotLoaderError

__all__ = [
    "SnapshotLoader",
    "SnapshotLoaderError",
]
