"""Lazy depth-first directory walking with per-entry descent control."""

from __future__ import annotations

import logging
import os
from typing import Iterator, List, Optional, Tuple

from .options import PACKAGE_EXTENSIONS, EnumerationOptions

logger = logging.getLogger(__name__)

_Entry = Tuple[str, bool]  # (path relative to the walk root, is a real directory)


class DirectoryWalker:
    """Pre-order walk of a directory tree, yielding paths relative to ``root``.

    Each directory is listed only when the walk is about to enter it, so the
    walk is lazy across directories. Entries within one directory are yielded
    in name order. Symbolic links to directories are yielded but never
    followed. A root that cannot be listed yields nothing.

    ``skip_descendants()`` cancels the descent into the directory yielded
    last; it has no effect once the next entry has been requested.
    """

    def __init__(self, root: str, options: EnumerationOptions = EnumerationOptions.NONE) -> None:
        self.root = root or os.curdir
        self.options = options
        self._stack: List[Iterator[_Entry]] = []
        self._pending: Optional[str] = None
        self._started = False

    def __iter__(self) -> "DirectoryWalker":
        return self

    def __next__(self) -> str:
        if not self._started:
            self._started = True
            self._enter("")
        if self._pending is not None:
            self._enter(self._pending)
            self._pending = None

        while self._stack:
            try:
                relative, is_dir = next(self._stack[-1])
            except StopIteration:
                self._stack.pop()
                continue
            if is_dir and self._descends_into(relative):
                self._pending = relative
            return relative
        raise StopIteration

    def skip_descendants(self) -> None:
        self._pending = None

    def _descends_into(self, relative: str) -> bool:
        if EnumerationOptions.SKIPS_SUBDIRECTORY_DESCENDANTS in self.options:
            return False
        if EnumerationOptions.SKIPS_PACKAGE_DESCENDANTS in self.options:
            if os.path.splitext(relative)[1].lower() in PACKAGE_EXTENSIONS:
                return False
        return True

    def _enter(self, relative: str) -> None:
        directory = os.path.join(self.root, relative) if relative else self.root
        skip_hidden = EnumerationOptions.SKIPS_HIDDEN_FILES in self.options
        entries: List[_Entry] = []
        try:
            with os.scandir(directory) as it:
                for e in it:
                    if skip_hidden and e.name.startswith("."):
                        continue
                    try:
                        is_dir = e.is_dir(follow_symlinks=False)
                    except OSError:
                        is_dir = False
                    name = f"{relative}/{e.name}" if relative else e.name
                    entries.append((name, is_dir))
        except OSError as exc:
            logger.debug("cannot enumerate %s: %s", directory, exc)
            return
        entries.sort()
        self._stack.append(iter(entries))


__all__ = ["DirectoryWalker"]
