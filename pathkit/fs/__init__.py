"""Filesystem collaborators used by ``pathkit.Path``."""

from __future__ import annotations

from functools import lru_cache

from .case import FixedCaseSensitivity, VolumeCaseSensitivity
from .local import LocalFileSystem
from .options import DEFAULT_GLOB_FLAGS, EnumerationOptions, GlobFlags
from .protocol import CaseSensitivity, DirectoryCursor, FileSystem
from .walk import DirectoryWalker


@lru_cache(maxsize=None)
def get_filesystem() -> LocalFileSystem:
    """Return the shared host filesystem collaborator."""
    return LocalFileSystem()


__all__ = [
    "CaseSensitivity",
    "DirectoryCursor",
    "DirectoryWalker",
    "FileSystem",
    "FixedCaseSensitivity",
    "VolumeCaseSensitivity",
    "LocalFileSystem",
    "EnumerationOptions",
    "GlobFlags",
    "DEFAULT_GLOB_FLAGS",
    "get_filesystem",
]
