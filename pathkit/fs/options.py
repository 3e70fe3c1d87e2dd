"""Option sets for directory enumeration and glob expansion."""

from __future__ import annotations

from enum import Flag, auto


class EnumerationOptions(Flag):
    """Controls for a deep directory enumeration."""

    NONE = 0
    # Yield the immediate entries only; never descend.
    SKIPS_SUBDIRECTORY_DESCENDANTS = auto()
    # Yield bundle directories (``Foo.app`` etc.) without descending into them.
    SKIPS_PACKAGE_DESCENDANTS = auto()
    # Ignore entries whose name starts with a dot.
    SKIPS_HIDDEN_FILES = auto()


class GlobFlags(Flag):
    """Expansion behaviors applied by ``glob_expand``."""

    NONE = 0
    TILDE = auto()
    BRACE = auto()
    MARK = auto()


DEFAULT_GLOB_FLAGS = GlobFlags.TILDE | GlobFlags.BRACE | GlobFlags.MARK

# Directory extensions treated as opaque bundles by SKIPS_PACKAGE_DESCENDANTS.
PACKAGE_EXTENSIONS = (
    ".app",
    ".bundle",
    ".framework",
    ".plugin",
    ".kext",
    ".xcodeproj",
    ".xcworkspace",
    ".playground",
    ".pkg",
)


__all__ = ["EnumerationOptions", "GlobFlags", "DEFAULT_GLOB_FLAGS", "PACKAGE_EXTENSIONS"]
