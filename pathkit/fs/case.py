"""Case-sensitivity oracles.

``VolumeCaseSensitivity`` probes the live filesystem on every call; nothing
is cached because two paths may live on different volumes. The probe works
on the nearest existing ancestor of the queried path:

1. Where the platform exposes ``PC_CASE_SENSITIVE`` through ``pathconf``
   (macOS), that answer is used directly.
2. Otherwise the case of the last name containing letters is swapped; if the
   swapped spelling resolves to the same file, the volume folds case.
3. When nothing can be probed, the platform default applies: Darwin and
   Windows volumes are usually case-insensitive, everything else sensitive.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional


def _platform_default() -> bool:
    return not (sys.platform == "darwin" or sys.platform.startswith("win"))


def _existing_ancestor(path: str) -> Optional[str]:
    candidate = os.path.abspath(path or os.curdir)
    while True:
        if os.path.lexists(candidate):
            return candidate
        parent = os.path.dirname(candidate)
        if parent == candidate:
            return None
        candidate = parent


def _swapped_spelling(path: str) -> Optional[str]:
    # Walks up until a name with cased letters is found.
    candidate = path
    while True:
        head, name = os.path.split(candidate)
        swapped = name.swapcase()
        if swapped != name:
            return os.path.join(head, swapped) + path[len(candidate):]
        if not name or head == candidate:
            return None
        candidate = head


class VolumeCaseSensitivity:
    """Query the volume backing each path for case sensitivity."""

    def is_case_sensitive(self, path: str) -> bool:
        default = _platform_default()
        try:
            target = _existing_ancestor(path)
        except ValueError:
            return default
        if target is None:
            return default

        if "PC_CASE_SENSITIVE" in getattr(os, "pathconf_names", {}):
            try:
                return bool(os.pathconf(target, "PC_CASE_SENSITIVE"))
            except (OSError, ValueError):
                pass

        swapped = _swapped_spelling(target)
        if swapped is None:
            return default
        try:
            return not os.path.samefile(target, swapped)
        except FileNotFoundError:
            # The other spelling does not exist, so names are distinguished by case.
            return True
        except (OSError, ValueError):
            return default

    def __repr__(self) -> str:
        return "VolumeCaseSensitivity()"


@dataclass(frozen=True)
class FixedCaseSensitivity:
    """Oracle with a constant answer, for deterministic behavior in tests."""

    case_sensitive: bool = True

    def is_case_sensitive(self, path: str) -> bool:
        return self.case_sensitive


__all__ = ["VolumeCaseSensitivity", "FixedCaseSensitivity"]
