"""Filesystem capability interfaces consumed by the path value."""

from __future__ import annotations

from typing import Iterator, List, Optional, Protocol, runtime_checkable

from .options import DEFAULT_GLOB_FLAGS, EnumerationOptions, GlobFlags


@runtime_checkable
class CaseSensitivity(Protocol):
    """Answers whether the volume backing a path compares names case-sensitively."""

    def is_case_sensitive(self, path: str) -> bool:
        """Query the volume for ``path``. Must not raise."""
        ...


@runtime_checkable
class DirectoryCursor(Protocol):
    """Lazy deep enumeration yielding paths relative to the enumerated root."""

    def __iter__(self) -> Iterator[str]: ...

    def __next__(self) -> str: ...

    def skip_descendants(self) -> None:
        """Do not descend into the directory yielded last."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Host filesystem operations.

    Query methods (``exists``, ``is_*``, ``volume_is_case_sensitive``) return
    False instead of raising. Every other method lets the underlying
    ``OSError`` propagate unchanged.
    """

    # Process state
    def current_working_directory(self) -> str: ...

    def set_current_working_directory(self, path: str) -> None: ...

    def home_directory_path(self, user: Optional[str] = None) -> Optional[str]: ...

    def temporary_directory_path(self) -> str: ...

    # Queries
    def exists(self, path: str) -> bool: ...

    def is_directory(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...

    def is_symlink(self, path: str) -> bool: ...

    def is_readable(self, path: str) -> bool: ...

    def is_writable(self, path: str) -> bool: ...

    def is_executable(self, path: str) -> bool: ...

    def is_deletable(self, path: str) -> bool: ...

    def volume_is_case_sensitive(self, path: str) -> bool: ...

    # Contents
    def read_file(self, path: str) -> bytes: ...

    def write_file(self, path: str, data: bytes, *, atomic: bool = True) -> None: ...

    # Manipulation
    def create_directory(self, path: str, *, create_intermediates: bool) -> None: ...

    def remove_item(self, path: str) -> None: ...

    def move_item(self, source: str, destination: str) -> None: ...

    def copy_item(self, source: str, destination: str) -> None: ...

    def create_hard_link(self, source: str, destination: str) -> None: ...

    def create_symlink(self, path: str, target: str) -> None: ...

    def read_symlink_target(self, path: str) -> str: ...

    # Traversal
    def list_directory_shallow(self, path: str) -> List[str]: ...

    def list_directory_recursive(self, path: str) -> List[str]: ...

    def enumerate_directory(
        self, path: str, options: EnumerationOptions = EnumerationOptions.NONE
    ) -> DirectoryCursor: ...

    # Patterns
    def glob_expand(self, pattern: str, flags: GlobFlags = DEFAULT_GLOB_FLAGS) -> List[str]: ...

    def fnmatch(self, pattern: str, path: str) -> bool: ...


__all__ = ["CaseSensitivity", "DirectoryCursor", "FileSystem"]
