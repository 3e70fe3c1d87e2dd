"""Host filesystem collaborator backed by ``os``, ``shutil`` and ``glob``.

Error policy:
- Queries (existence, type, permissions, case sensitivity) never raise; an
  ``OSError`` or ``ValueError`` (e.g. an embedded NUL) is reported as False.
- Every other operation lets the ``OSError`` subclass raised by the OS
  propagate unchanged after logging it. There are no retries and no
  partial-success handling.
"""

from __future__ import annotations

import errno
import os
import shutil
import stat as _stat
import tempfile
from typing import Any, Callable, List, Optional, TypeVar

from pathkit.logging import StructuredLogger, create_logger

from . import globbing
from .atomic import write_atomic, write_direct
from .case import VolumeCaseSensitivity
from .options import DEFAULT_GLOB_FLAGS, EnumerationOptions, GlobFlags
from .protocol import CaseSensitivity
from .walk import DirectoryWalker

T = TypeVar("T")


def _raise(exc: OSError) -> None:
    raise exc


def _reject_existing(destination: str) -> None:
    if os.path.lexists(destination):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), destination)


class LocalFileSystem:
    """Filesystem operations against the local host.

    Args:
        case_sensitivity: Oracle answering ``volume_is_case_sensitive``
            (default: probe the volume on each call).
        logger: Structured logger for mutating operations (default: created
            from PK_* settings on first use).
    """

    def __init__(
        self,
        *,
        case_sensitivity: Optional[CaseSensitivity] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self._case_sensitivity = case_sensitivity or VolumeCaseSensitivity()
        self._logger = logger

    @property
    def logger(self) -> StructuredLogger:
        if self._logger is None:
            self._logger = create_logger("fs")
        return self._logger

    # ---------- Internals ----------
    @staticmethod
    def _query(check: Callable[..., Any], *args: Any) -> bool:
        try:
            return bool(check(*args))
        except (OSError, ValueError):
            return False

    def _perform(self, operation: str, func: Callable[..., T], *args: Any, **context: Any) -> T:
        try:
            result = func(*args)
        except OSError as exc:
            self.logger.warning(
                "filesystem operation failed",
                operation=operation,
                error=exc.strerror or str(exc),
                errno=exc.errno,
                **context,
            )
            raise
        self.logger.debug("filesystem operation", operation=operation, **context)
        return result

    # ---------- Process state ----------
    def current_working_directory(self) -> str:
        return os.getcwd()

    def set_current_working_directory(self, path: str) -> None:
        self._perform("chdir", os.chdir, path, path=path)

    def home_directory_path(self, user: Optional[str] = None) -> Optional[str]:
        """Return the home directory of ``user`` (default: the current user).

        Returns None when ``user`` is unknown to the user database.
        """
        marker = "~" + (user or "")
        expanded = os.path.expanduser(marker)
        if expanded == marker and user:
            return None
        return expanded

    def temporary_directory_path(self) -> str:
        return tempfile.gettempdir()

    # ---------- Queries ----------
    def exists(self, path: str) -> bool:
        return self._query(os.path.exists, path)

    def is_directory(self, path: str) -> bool:
        return self._query(os.path.isdir, path)

    def is_file(self, path: str) -> bool:
        # Anything that exists and is not a directory, after following links.
        return self.exists(path) and not self.is_directory(path)

    def is_symlink(self, path: str) -> bool:
        return self._query(os.path.islink, path)

    def is_readable(self, path: str) -> bool:
        return self._query(os.access, path, os.R_OK)

    def is_writable(self, path: str) -> bool:
        return self._query(os.access, path, os.W_OK)

    def is_executable(self, path: str) -> bool:
        return self._query(os.access, path, os.X_OK)

    def is_deletable(self, path: str) -> bool:
        """Return True if the entry exists and its parent directory permits removal."""
        if not self._query(os.path.lexists, path):
            return False
        parent = os.path.dirname(os.path.abspath(path))
        if not self._query(os.access, parent, os.W_OK | os.X_OK):
            return False
        try:
            parent_mode = os.stat(parent).st_mode
            if parent_mode & _stat.S_ISVTX:
                # Sticky directories only let owners (or root) remove entries.
                uid = os.geteuid()
                return uid == 0 or os.lstat(path).st_uid == uid or os.stat(parent).st_uid == uid
        except (OSError, ValueError, AttributeError):
            return False
        return True

    def volume_is_case_sensitive(self, path: str) -> bool:
        return self._case_sensitivity.is_case_sensitive(path)

    # ---------- Contents ----------
    def read_file(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write_file(self, path: str, data: bytes, *, atomic: bool = True) -> None:
        writer = write_atomic if atomic else write_direct
        self._perform("write", writer, path, data, path=path, size=len(data), atomic=atomic)

    # ---------- Manipulation ----------
    def create_directory(self, path: str, *, create_intermediates: bool) -> None:
        if create_intermediates:
            self._perform("mkpath", os.makedirs, path, 0o777, True, path=path)
        else:
            self._perform("mkdir", os.mkdir, path, path=path)

    def remove_item(self, path: str) -> None:
        """Remove a file, link or (recursively) a directory."""

        def remove(p: str) -> None:
            if os.path.isdir(p) and not os.path.islink(p):
                shutil.rmtree(p)
            else:
                os.unlink(p)

        self._perform("delete", remove, path, path=path)

    def move_item(self, source: str, destination: str) -> None:
        """Move ``source`` to exactly ``destination``, which must not exist."""

        def move(src: str, dst: str) -> None:
            _reject_existing(dst)
            shutil.move(src, dst)

        self._perform("move", move, source, destination, path=source, destination=destination)

    def copy_item(self, source: str, destination: str) -> None:
        """Copy a file or directory tree to ``destination``, which must not exist."""

        def copy(src: str, dst: str) -> None:
            _reject_existing(dst)
            if os.path.isdir(src) and not os.path.islink(src):
                shutil.copytree(src, dst, symlinks=True)
            else:
                shutil.copy2(src, dst, follow_symlinks=False)

        self._perform("copy", copy, source, destination, path=source, destination=destination)

    def create_hard_link(self, source: str, destination: str) -> None:
        self._perform("link", os.link, source, destination, path=source, destination=destination)

    def create_symlink(self, path: str, target: str) -> None:
        """Create a symbolic link at ``path`` pointing to ``target``."""
        self._perform("symlink", os.symlink, target, path, path=path, target=target)

    def read_symlink_target(self, path: str) -> str:
        return os.readlink(path)

    # ---------- Traversal ----------
    def list_directory_shallow(self, path: str) -> List[str]:
        return sorted(os.listdir(path or os.curdir))

    def list_directory_recursive(self, path: str) -> List[str]:
        """Return every entry below ``path`` as a path relative to it.

        Symbolic links to directories are listed but not followed.
        """
        root = path or os.curdir
        if not os.path.isdir(root):
            # Surface ENOENT/ENOTDIR the way a shallow listing would.
            os.listdir(root)
        found: List[str] = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            rel = os.path.relpath(dirpath, root)
            for name in dirnames + filenames:
                found.append(name if rel == os.curdir else f"{rel}/{name}")
        return sorted(found)

    def enumerate_directory(
        self, path: str, options: EnumerationOptions = EnumerationOptions.NONE
    ) -> DirectoryWalker:
        return DirectoryWalker(path, options)

    # ---------- Patterns ----------
    def glob_expand(self, pattern: str, flags: GlobFlags = DEFAULT_GLOB_FLAGS) -> List[str]:
        return globbing.expand(pattern, flags)

    def fnmatch(self, pattern: str, path: str) -> bool:
        return globbing.match(pattern, path)


__all__ = ["LocalFileSystem"]
