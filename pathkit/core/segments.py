"""Pure segment algebra for pathkit path strings.

This module provides the side-effect-free string operations behind the
``Path`` value: decomposition into components, the join rule used by the
``+`` operator, lexical normalization, home/current-directory prefix
handling and extension extraction. No filesystem I/O is performed by any
function in this module; callers supply the working directory, home
directory and case-sensitivity answers explicitly.

Key functions:
- split_components / from_components: string <-> segment list
- join: append a fragment, collapsing ``.`` and leading ``..``
- normalize: lexical clean-up of ``.``, ``..`` and duplicate separators
- strip_prefix / abbreviate_home / abbreviate_current: anchored prefix removal

The separator is always ``/``. A leading ``/`` is the root marker and a
leading ``~`` is the home marker.
"""

from __future__ import annotations

import posixpath
from typing import Iterable, List, Optional

SEPARATOR = "/"
ROOT = SEPARATOR
HOME_MARKER = "~"
CURRENT = "."
PARENT = ".."


def is_absolute(path: str) -> bool:
    """Return True if ``path`` starts with the root marker."""
    return path.startswith(SEPARATOR)


def split_components(path: str) -> List[str]:
    """Split a path string into its ordered components.

    Absolute paths keep the root marker as their first component. Empty
    segments produced by duplicate separators are dropped, and a trailing
    separator after at least one named segment is reported as a final ``/``
    component so that the string can be rebuilt with ``from_components``.

    Examples:
        >>> split_components("/a//b/")
        ['/', 'a', 'b', '/']
        >>> split_components("~/a")
        ['~', 'a']
    """
    if not path:
        return []

    components: List[str] = []
    if is_absolute(path):
        components.append(ROOT)
    named = [segment for segment in path.split(SEPARATOR) if segment]
    components.extend(named)
    if named and path.endswith(SEPARATOR):
        components.append(SEPARATOR)
    return components


def _join_body(parts: List[str]) -> str:
    if len(parts) > 1 and parts[-1] == SEPARATOR:
        return SEPARATOR.join(parts[:-1]) + SEPARATOR
    return SEPARATOR.join(parts)


def from_components(components: Iterable[str]) -> str:
    """Rebuild a path string from components.

    Args:
        components: Ordered segments. A first segment equal to ``/`` followed by
            at least one more segment marks an absolute path.

    Returns:
        The joined path string; the empty string for no components.
    """
    parts = list(components)
    if not parts:
        return ""
    if parts[0] == ROOT and len(parts) > 1:
        return ROOT + _join_body(parts[1:])
    return _join_body(parts)


def _collapse(left: List[str], right: List[str]) -> None:
    # Cancels leading ".." of right against trailing segments of left, in place.
    # The root marker absorbs ".." and an unresolved ".." on the left stays put.
    while left and left[-1] != PARENT and right and right[0] == PARENT:
        if len(left) > 1 or left[0] != ROOT:
            left.pop()
        right.pop(0)


def join(lhs: str, rhs: str) -> str:
    """Append ``rhs`` to ``lhs`` the way the ``+`` operator does.

    An absolute ``rhs`` replaces ``lhs`` entirely. Otherwise ``.`` segments are
    dropped from both sides and leading ``..`` segments of ``rhs`` consume
    trailing segments of ``lhs``. Surplus ``..`` segments are kept.

    Examples:
        >>> join("a/b/c", "../d/e")
        'a/b/d/e'
        >>> join("/", "..")
        '/'
        >>> join("..", "..")
        '../..'
    """
    if is_absolute(rhs):
        return rhs

    left = split_components(lhs)
    right = split_components(rhs)

    if len(left) > 1 and left[-1] == SEPARATOR:
        left.pop()

    left = [segment for segment in left if segment != CURRENT]
    right = [segment for segment in right if segment != CURRENT]

    _collapse(left, right)
    # A bare trailing-separator marker is not a root; it only renders after a named segment.
    if right == [SEPARATOR] and (not left or left == [ROOT]):
        right = []
    return from_components(left + right)


def normalize(path: str) -> str:
    """Lexically normalize ``path`` without consulting the filesystem.

    Removes ``.`` segments, duplicate and trailing separators, and resolves
    ``..`` against the preceding segment. The root absorbs ``..`` and leading
    ``..`` segments of a relative path are preserved. Symbolic links are not
    resolved. A relative path that collapses completely becomes ``""``.
    """
    stack: List[str] = [ROOT] if is_absolute(path) else []
    for segment in path.split(SEPARATOR):
        if not segment or segment == CURRENT:
            continue
        pending = [segment]
        _collapse(stack, pending)
        stack.extend(pending)
    return from_components(stack)


def last_component(path: str) -> str:
    """Return the final named segment, ignoring trailing separators.

    The root path yields ``/`` and the empty path yields ``""``.
    """
    stripped = path.rstrip(SEPARATOR)
    if not stripped:
        return ROOT if path else ""
    return stripped.rsplit(SEPARATOR, 1)[-1]


def extension(path: str) -> Optional[str]:
    """Return the text after the last dot of the last component, or None."""
    suffix = posixpath.splitext(last_component(path))[1]
    return suffix[1:] or None


def last_component_without_extension(path: str) -> str:
    return posixpath.splitext(last_component(path))[0]


def tilde_user(path: str) -> Optional[str]:
    """Return the user named by a leading ``~`` marker.

    Returns ``""`` for the current user (``~`` or ``~/...``), the user name for
    ``~name/...`` and None when the path has no home marker.
    """
    if not path.startswith(HOME_MARKER):
        return None
    return path.partition(SEPARATOR)[0][len(HOME_MARKER):]


def expand_home(path: str, home: str) -> str:
    """Replace the leading ``~`` or ``~user`` component of ``path`` with ``home``."""
    if tilde_user(path) is None:
        return path
    _, sep, rest = path.partition(SEPARATOR)
    return home + sep + rest


def strip_prefix(path: str, leading: str, *, case_sensitive: bool = True) -> Optional[str]:
    """Remove ``leading`` from the start of ``path``.

    The match is anchored at position zero. When ``case_sensitive`` is False
    both strings are compared case-folded.

    Returns:
        The remainder of ``path``, or None if ``leading`` is empty or absent.
    """
    if not leading:
        return None
    if case_sensitive:
        return path[len(leading):] if path.startswith(leading) else None

    # Folding can change length (ß -> ss), so walk the path one character at a time.
    target = leading.casefold()
    folded = ""
    for i, ch in enumerate(path):
        if folded == target:
            return path[i:]
        folded += ch.casefold()
        if not target.startswith(folded):
            return None
    return "" if folded == target else None


def _strip_directory(path: str, directory: str, case_sensitive: bool) -> Optional[str]:
    # Returns "" or "/rest" when path lies at or under directory, else None.
    if not directory:
        return None
    trimmed = directory.rstrip(SEPARATOR)
    if not trimmed:
        rest: Optional[str] = path if is_absolute(path) else None
    else:
        rest = strip_prefix(path, trimmed, case_sensitive=case_sensitive)
    if rest is None:
        return None
    if rest in ("", SEPARATOR):
        return ""
    if rest.startswith(SEPARATOR):
        return rest
    return None


def abbreviate_home(path: str, home: str, *, case_sensitive: bool = True) -> Optional[str]:
    """Rewrite a path under ``home`` with a leading ``~``.

    Examples:
        >>> abbreviate_home("/home/kyle/", "/home/kyle")
        '~'
        >>> abbreviate_home("/home/kyle/a", "/home/kyle")
        '~/a'
        >>> abbreviate_home("/home/kylie", "/home/kyle") is None
        True
    """
    rest = _strip_directory(path, home, case_sensitive)
    if rest is None:
        return None
    return HOME_MARKER + rest


def abbreviate_current(path: str, current: str, *, case_sensitive: bool = True) -> Optional[str]:
    """Rewrite a path under ``current`` as ``./rest`` (``.`` for ``current`` itself)."""
    rest = _strip_directory(path, current, case_sensitive)
    if rest is None:
        return None
    return CURRENT + rest


def lexically_equal(lhs: str, rhs: str) -> bool:
    """Return True if the strings are equal as-is or after normalization."""
    return lhs == rhs or normalize(lhs) == normalize(rhs)


__all__ = [
    "SEPARATOR",
    "ROOT",
    "HOME_MARKER",
    "CURRENT",
    "PARENT",
    "is_absolute",
    "split_components",
    "from_components",
    "join",
    "normalize",
    "last_component",
    "extension",
    "last_component_without_extension",
    "tilde_user",
    "expand_home",
    "strip_prefix",
    "abbreviate_home",
    "abbreviate_current",
    "lexically_equal",
]
