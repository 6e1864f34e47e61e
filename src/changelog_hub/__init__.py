"""
Changelog Hub

A library and CLI that compares two versions of an API's public surface,
classifies every difference by severity, and scores the stability,
velocity and risk of an API across its version history.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("changelog-hub")
except PackageNotFoundError:
    __version__ = "0.1.0"

# Public API exports
__all__ = [
    "__version__",
]
