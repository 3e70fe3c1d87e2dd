"""Directory enumeration cursors yielding ``Path`` values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pathkit.fs import DirectoryCursor, EnumerationOptions, FileSystem, get_filesystem

if TYPE_CHECKING:  # pragma: no cover
    from .path import Path


class DirectoryEnumerator:
    """Cursor over a deep enumeration of a directory.

    Yields ``path + relative_entry`` for every entry below ``path`` in
    depth-first pre-order. Call ``skip_descendants()`` right after a directory
    was produced to keep the cursor from descending into it.
    """

    def __init__(
        self,
        path: "Path",
        options: EnumerationOptions = EnumerationOptions.NONE,
        filesystem: Optional[FileSystem] = None,
    ) -> None:
        self.path = path
        fs = filesystem or get_filesystem()
        self._cursor: DirectoryCursor = fs.enumerate_directory(path.string, options)

    def __iter__(self) -> "DirectoryEnumerator":
        return self

    def __next__(self) -> "Path":
        return self.path + next(self._cursor)

    def skip_descendants(self) -> None:
        """Skip recursion into the most recently produced subdirectory."""
        self._cursor.skip_descendants()


class PathSequence:
    """Re-iterable view of a directory; each iteration starts a fresh walk."""

    def __init__(
        self,
        path: "Path",
        options: EnumerationOptions = EnumerationOptions.NONE,
        filesystem: Optional[FileSystem] = None,
    ) -> None:
        self.path = path
        self.options = options
        self._filesystem = filesystem

    def __iter__(self) -> DirectoryEnumerator:
        return DirectoryEnumerator(self.path, self.options, self._filesystem)


__all__ = ["DirectoryEnumerator", "PathSequence"]
