"""
Version information for pokthd.

Single source of truth for the package version, mirrored in pyproject.toml.
"""

from __future__ import annotations

__version__ = "0.4.0"


def get_version() -> str:
    """Return the current version string."""
    return __version__
