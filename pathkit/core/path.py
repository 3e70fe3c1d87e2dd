"""The ``Path`` value type.

A ``Path`` is an immutable wrapper around a path string plus the
case-sensitivity oracle used when comparing prefixes. The string is the
identity: equality, hashing and ordering look at the text only, so
``Path("foo.txt") != Path("./foo.txt")`` even though both name the same
file. Use ``normalize()``, ``absolute()`` or ``matches()`` to compare
differently spelled paths.

All string manipulation is delegated to ``pathkit.core.segments``; anything
that needs the real filesystem goes through ``pathkit.fs.get_filesystem()``.
"""

from __future__ import annotations

import os
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, List, Optional, Sequence, Union

from pathkit.config import load_settings
from pathkit.fs import (
    DEFAULT_GLOB_FLAGS,
    CaseSensitivity,
    EnumerationOptions,
    VolumeCaseSensitivity,
    get_filesystem,
)

from . import segments
from .enumerator import DirectoryEnumerator, PathSequence

PathLike = Union["Path", str, "os.PathLike[str]"]

_DEFAULT_CASE_SENSITIVITY = VolumeCaseSensitivity()

# Stable for the life of the process; names the process-unique temp directory.
_PROCESS_TOKEN = uuid.uuid4().hex[:12]


def _coerce(value: object) -> str:
    text = os.fspath(value)  # type: ignore[call-overload]
    if not isinstance(text, str):
        raise TypeError(f"path must be str or os.PathLike[str], got {type(value).__name__}")
    return text


@dataclass(frozen=True, slots=True, order=True)
class Path:
    """A filesystem path.

    Args:
        _path: Path string (or ``os.PathLike``), stored without normalization.
        case_sensitivity: Oracle consulted by ``abbreviate`` and
            ``relative_against``; defaults to probing the backing volume.
    """

    separator: ClassVar[str] = segments.SEPARATOR

    _path: str = ""
    case_sensitivity: CaseSensitivity = field(
        default=_DEFAULT_CASE_SENSITIVITY, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_path", _coerce(self._path))

    @classmethod
    def from_components(
        cls, components: Sequence[str], *, case_sensitivity: Optional[CaseSensitivity] = None
    ) -> "Path":
        """Create a Path by joining components; a leading ``/`` marks it absolute."""
        return cls(
            segments.from_components(components),
            case_sensitivity=case_sensitivity or _DEFAULT_CASE_SENSITIVITY,
        )

    def _derive(self, value: str) -> "Path":
        return Path(value, case_sensitivity=self.case_sensitivity)

    # ---------- Conversion ----------
    @property
    def string(self) -> str:
        return self._path

    def __str__(self) -> str:
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"Path({self._path!r})"

    # ---------- Joining ----------
    def __add__(self, other: object) -> "Path":
        if isinstance(other, Path):
            rhs = other._path
        elif isinstance(other, str):
            rhs = other
        else:
            return NotImplemented
        return self._derive(segments.join(self._path, rhs))

    def __radd__(self, other: object) -> "Path":
        if not isinstance(other, str):
            return NotImplemented
        return self._derive(segments.join(other, self._path))

    # ---------- Components ----------
    @property
    def is_absolute(self) -> bool:
        return segments.is_absolute(self._path)

    @property
    def is_relative(self) -> bool:
        return not self.is_absolute

    @property
    def components(self) -> List[str]:
        """All components; absolute paths keep ``/`` as the first one."""
        return segments.split_components(self._path)

    @property
    def last_component(self) -> str:
        return segments.last_component(self._path)

    @property
    def last_component_without_extension(self) -> str:
        return segments.last_component_without_extension(self._path)

    @property
    def extension(self) -> Optional[str]:
        """The text behind the last dot of the last component, or None."""
        return segments.extension(self._path)

    def parent(self) -> "Path":
        """Return ``self + ".."``; the parent of ``/`` is ``/``."""
        return self + segments.PARENT

    # ---------- Resolution ----------
    def normalize(self) -> "Path":
        """Remove ``.``, resolvable ``..`` and redundant separators lexically."""
        return self._derive(segments.normalize(self._path))

    def absolute(
        self, current: Optional[PathLike] = None, home: Optional[PathLike] = None
    ) -> "Path":
        """Return the normalized absolute form of this path.

        A leading ``~`` expands to ``home`` (``~user`` to that user's home) and
        remaining relative paths are joined to ``current``. When ``current``
        or ``home`` is omitted and needed, it is read from the filesystem.
        """
        if self.is_absolute:
            return self.normalize()

        value = self._path
        user = segments.tilde_user(value)
        if user is not None:
            if user or home is None:
                directory = get_filesystem().home_directory_path(user or None)
            else:
                directory = _coerce(home)
            if directory is not None:
                value = segments.expand_home(value, directory)

        if not segments.is_absolute(value):
            base = get_filesystem().current_working_directory() if current is None else _coerce(current)
            value = segments.join(base, value)
        return self._derive(segments.normalize(value))

    def relative_against(self, leading: PathLike) -> Optional["Path"]:
        """Strip ``leading`` from the front of this path.

        The match is anchored at the start and folds case when the volume
        backing this path is case-insensitive.

        Returns:
            The remainder as a Path, or None if this path does not start with
            ``leading``.
        """
        rest = segments.strip_prefix(
            self._path,
            _coerce(leading),
            case_sensitive=self.case_sensitivity.is_case_sensitive(self._path),
        )
        return None if rest is None else self._derive(rest)

    def abbreviate(
        self, home: Optional[PathLike] = None, current: Optional[PathLike] = None
    ) -> "Path":
        """Replace a home-directory prefix with ``~`` or a working-directory prefix with ``./``.

        Returns this path unchanged when neither prefix applies.
        """
        case_sensitive = self.case_sensitivity.is_case_sensitive(self._path)
        home_dir = get_filesystem().home_directory_path() if home is None else _coerce(home)
        if home_dir:
            abbreviated = segments.abbreviate_home(
                self._path, home_dir, case_sensitive=case_sensitive
            )
            if abbreviated is not None:
                return self._derive(abbreviated)

        current_dir = (
            get_filesystem().current_working_directory() if current is None else _coerce(current)
        )
        abbreviated = segments.abbreviate_current(
            self._path, current_dir, case_sensitive=case_sensitive
        )
        if abbreviated is not None:
            return self._derive(abbreviated)
        return self

    def matches(self, other: PathLike, *, strict: bool = True) -> bool:
        """Pattern-match two paths.

        True when the strings are equal, else when their normalized forms are
        equal, else (``strict`` only) when their absolute forms are equal. The
        strict tier reads the working and home directories.
        """
        other_path = other if isinstance(other, Path) else Path(_coerce(other))
        if segments.lexically_equal(self._path, other_path._path):
            return True
        if not strict:
            return False
        return self.absolute() == other_path.absolute()

    def symlink_destination(self) -> "Path":
        """Return the path a symbolic link points to.

        Relative link targets are interpreted against the directory holding
        the link.

        Raises:
            OSError: If this path is not a symbolic link or cannot be read.
        """
        destination = self._derive(get_filesystem().read_symlink_target(self._path))
        if destination.is_relative:
            return self + segments.PARENT + destination
        return destination

    # ---------- Process directories ----------
    @classmethod
    def current(cls) -> "Path":
        """The current working directory of the process."""
        return cls(get_filesystem().current_working_directory())

    @staticmethod
    def set_current(path: PathLike) -> None:
        get_filesystem().set_current_working_directory(_coerce(path))

    @contextmanager
    def chdir(self) -> Iterator["Path"]:
        """Make this path the working directory for the duration of a ``with`` block.

        The previous working directory is restored when the block exits,
        including when it raises.
        """
        fs = get_filesystem()
        previous = fs.current_working_directory()
        fs.set_current_working_directory(self._path)
        try:
            yield self
        finally:
            fs.set_current_working_directory(previous)

    @classmethod
    def home(cls) -> "Path":
        return cls(get_filesystem().home_directory_path() or "")

    @classmethod
    def temporary(cls) -> "Path":
        return cls(get_filesystem().temporary_directory_path())

    @classmethod
    def process_unique_temporary(cls) -> "Path":
        """A temporary directory shared by every call within this process, created on demand."""
        prefix = load_settings().temp_prefix
        path = cls.temporary() + f"{prefix}-{os.getpid()}-{_PROCESS_TOKEN}"
        if not path.exists():
            path.mkpath()
        return path

    @classmethod
    def unique_temporary(cls) -> "Path":
        """A new, empty temporary directory for each call."""
        path = cls.process_unique_temporary() + uuid.uuid4().hex
        path.mkdir()
        return path

    # ---------- File info ----------
    def exists(self) -> bool:
        return get_filesystem().exists(self._path)

    def is_directory(self) -> bool:
        """True for directories and links to directories."""
        return get_filesystem().is_directory(self.normalize()._path)

    def is_file(self) -> bool:
        """True for anything that exists and is not a directory (links followed)."""
        return get_filesystem().is_file(self.normalize()._path)

    def is_symlink(self) -> bool:
        return get_filesystem().is_symlink(self._path)

    def is_readable(self) -> bool:
        return get_filesystem().is_readable(self._path)

    def is_writable(self) -> bool:
        return get_filesystem().is_writable(self._path)

    def is_executable(self) -> bool:
        return get_filesystem().is_executable(self._path)

    def is_deletable(self) -> bool:
        return get_filesystem().is_deletable(self._path)

    # ---------- Contents ----------
    def read(self) -> bytes:
        return get_filesystem().read_file(self._path)

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.read().decode(encoding)

    def write(self, data: Union[bytes, str], encoding: str = "utf-8") -> None:
        """Write ``data`` atomically; ``str`` is encoded with ``encoding`` first."""
        if isinstance(data, str):
            data = data.encode(encoding)
        get_filesystem().write_file(self.normalize()._path, data, atomic=True)

    # ---------- Manipulation ----------
    def mkdir(self) -> None:
        """Create this directory; the parent must already exist."""
        get_filesystem().create_directory(self._path, create_intermediates=False)

    def mkpath(self) -> None:
        """Create this directory and any missing parents."""
        get_filesystem().create_directory(self._path, create_intermediates=True)

    def delete(self) -> None:
        """Delete the file or link, or the directory with all its contents."""
        get_filesystem().remove_item(self._path)

    def move(self, destination: PathLike) -> None:
        get_filesystem().move_item(self._path, _coerce(destination))

    def copy(self, destination: PathLike) -> None:
        get_filesystem().copy_item(self._path, _coerce(destination))

    def link(self, destination: PathLike) -> None:
        """Create a hard link to this file at ``destination``."""
        get_filesystem().create_hard_link(self._path, _coerce(destination))

    def symlink(self, destination: PathLike) -> None:
        """Create a symbolic link at this path pointing to ``destination``."""
        get_filesystem().create_symlink(self._path, _coerce(destination))

    # ---------- Traversal ----------
    def children(self) -> List["Path"]:
        """Entries directly inside this directory, hidden ones included."""
        return [self + name for name in get_filesystem().list_directory_shallow(self._path)]

    def recursive_children(self) -> List["Path"]:
        """Every entry below this directory."""
        return [self + name for name in get_filesystem().list_directory_recursive(self._path)]

    def __iter__(self) -> DirectoryEnumerator:
        return DirectoryEnumerator(self)

    def iterate_children(
        self, options: EnumerationOptions = EnumerationOptions.NONE
    ) -> PathSequence:
        return PathSequence(self, options)

    # ---------- Globbing ----------
    def glob(self, pattern: str) -> List["Path"]:
        """Expand ``pattern`` relative to this path."""
        return [self._derive(p) for p in _expand(segments.join(self._path, pattern))]

    def match(self, pattern: str) -> bool:
        """Shell-style match of the whole path string; ``*`` also matches ``/``."""
        return get_filesystem().fnmatch(pattern, self._path)


def _expand(pattern: str) -> List[str]:
    return get_filesystem().glob_expand(pattern, DEFAULT_GLOB_FLAGS)


def glob(pattern: str) -> List[Path]:
    """Expand a glob pattern (with ``~``, ``{a,b}`` and directory marking)."""
    return [Path(p) for p in _expand(pattern)]


__all__ = ["Path", "PathLike", "glob"]
