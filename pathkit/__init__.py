"""pathkit: an immutable POSIX path value with filesystem helpers.

Example:
    >>> from pathkit import Path
    >>> Path("/usr/lib") + "../bin"
    Path('/usr/bin')
"""

from .core import DirectoryEnumerator, Path, PathSequence, glob
from .fs import EnumerationOptions, FixedCaseSensitivity, GlobFlags, VolumeCaseSensitivity

__version__ = "0.1.0"

__all__ = [
    "Path",
    "glob",
    "DirectoryEnumerator",
    "PathSequence",
    "EnumerationOptions",
    "GlobFlags",
    "FixedCaseSensitivity",
    "VolumeCaseSensitivity",
]
