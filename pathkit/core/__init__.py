"""Path value type, segment algebra and directory enumeration."""

from .enumerator import DirectoryEnumerator, PathSequence
from .path import Path, PathLike, glob

__all__ = [
    "Path",
    "PathLike",
    "glob",
    "DirectoryEnumerator",
    "PathSequence",
]
