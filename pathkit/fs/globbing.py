"""Glob expansion and shell-style matching.

``expand`` follows the behavior of the C library ``glob`` called with
``GLOB_TILDE | GLOB_BRACE | GLOB_MARK``:

- ``{a,b}`` alternatives are expanded first (nested groups allowed, ``{}``
  is literal, ``\\{`` escapes a brace) and each alternative is globbed and
  sorted on its own
- a leading ``~`` or ``~user`` is replaced with the matching home directory
- directories in the result carry a trailing ``/``

Patterns that match nothing produce an empty list.
"""

from __future__ import annotations

import fnmatch as _fnmatch
import glob as _glob
import os
from typing import List, Tuple

from .options import DEFAULT_GLOB_FLAGS, GlobFlags

_ESCAPE = "\\"


def _find_open_brace(pattern: str, start: int) -> int:
    i = start
    while i < len(pattern):
        ch = pattern[i]
        if ch == _ESCAPE:
            i += 2
            continue
        if ch == "{":
            return i
        i += 1
    return -1


def _split_group(pattern: str, start: int) -> Tuple[int, List[str]]:
    """Split the brace group opening at ``start``.

    Returns:
        (index of the closing brace, alternatives) or (-1, []) when unbalanced.
    """
    depth = 0
    alternatives: List[str] = []
    begin = start + 1
    i = begin
    while i < len(pattern):
        ch = pattern[i]
        if ch == _ESCAPE:
            i += 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                alternatives.append(pattern[begin:i])
                return i, alternatives
            depth -= 1
        elif ch == "," and depth == 0:
            alternatives.append(pattern[begin:i])
            begin = i + 1
        i += 1
    return -1, []


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternatives into separate patterns.

    Examples:
        >>> expand_braces("src/{a,b{1,2}}.py")
        ['src/a.py', 'src/b1.py', 'src/b2.py']
        >>> expand_braces("x{}y")
        ['x{}y']
    """
    start = _find_open_brace(pattern, 0)
    while start != -1:
        if pattern.startswith("{}", start):
            start = _find_open_brace(pattern, start + 2)
            continue
        end, alternatives = _split_group(pattern, start)
        if end == -1:
            start = _find_open_brace(pattern, start + 1)
            continue
        prefix, suffix = pattern[:start], pattern[end + 1:]
        expanded: List[str] = []
        for alternative in alternatives:
            expanded.extend(expand_braces(prefix + alternative + suffix))
        return expanded
    return [pattern]


def _unescape_braces(pattern: str) -> str:
    for ch in "{},":
        pattern = pattern.replace(_ESCAPE + ch, ch)
    return pattern


def expand(pattern: str, flags: GlobFlags = DEFAULT_GLOB_FLAGS) -> List[str]:
    """Expand ``pattern`` against the filesystem."""
    if GlobFlags.BRACE in flags:
        patterns = [_unescape_braces(p) for p in expand_braces(pattern)]
    else:
        patterns = [pattern]

    results: List[str] = []
    for p in patterns:
        if GlobFlags.TILDE in flags and p.startswith("~"):
            p = os.path.expanduser(p)
        matches = sorted(_glob.glob(p))
        if GlobFlags.MARK in flags:
            matches = [
                m + "/" if not m.endswith("/") and os.path.isdir(m) else m for m in matches
            ]
        results.extend(matches)
    return results


def match(pattern: str, path: str, *, case_sensitive: bool = True) -> bool:
    """Return True if ``path`` matches the shell-style ``pattern``.

    ``*`` and ``?`` also match ``/``. Matching is case-sensitive unless
    ``case_sensitive`` is False.
    """
    if case_sensitive:
        return _fnmatch.fnmatchcase(path, pattern)
    return _fnmatch.fnmatchcase(path.casefold(), pattern.casefold())


__all__ = ["expand", "expand_braces", "match"]
