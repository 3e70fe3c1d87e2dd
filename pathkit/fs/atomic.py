from __future__ import annotations

import os
import uuid
from typing import Optional


def _staging_path(path: str, suffix: str) -> str:
    directory, name = os.path.split(path)
    staged = f".{name or 'pathkit'}.{uuid.uuid4().hex[:8]}{suffix}"
    return os.path.join(directory, staged) if directory else staged


def write_atomic(path: str, data: bytes, *, suffix: Optional[str] = None) -> None:
    """Write ``data`` to ``path`` through a staging file and an atomic rename.

    - Stages next to the destination so ``os.replace`` never crosses devices
    - Uses ``O_CREAT|O_EXCL`` with mode ``0o666`` (the umask applies)
    - Removes the staging file and re-raises on any failure
    """
    if suffix is None:
        from pathkit.config import load_settings

        suffix = load_settings().atomic_suffix
    tmp = _staging_path(path, suffix)
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_CLOEXEC", 0)
    fd = os.open(tmp, flags, 0o666)
    try:
        with os.fdopen(fd, "wb", closefd=True) as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise


def write_direct(path: str, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)


__all__ = ["write_atomic", "write_direct"]
