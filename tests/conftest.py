# tests/conftest.py
# Shared fixtures: an on-disk fixture tree and deterministic collaborators.

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

import pytest

from pathkit import Path


@dataclass
class RecordingCaseSensitivity:
    """Case oracle with a fixed answer that records every path it was asked about."""

    case_sensitive: bool = True
    queries: List[str] = field(default_factory=list)

    def is_case_sensitive(self, path: str) -> bool:
        self.queries.append(path)
        return self.case_sensitive


def _touch(path: str, contents: bytes = b"", mode: int | None = None) -> None:
    with open(path, "wb") as f:
        f.write(contents)
    if mode is not None:
        os.chmod(path, mode)


@pytest.fixture
def fixtures(tmp_path):
    """Build the standard fixture tree and return its root as a string.

    Layout::

        file, hello
        directory/{child,.hiddenFile,subdirectory/child}
        permissions/{deletable,executable,readable,writable,none}
        symlinks/{directory,same-dir,file,relative}
    """
    root = str(tmp_path / "fixtures")
    directory = f"{root}/directory"
    permissions = f"{root}/permissions"
    symlinks = f"{root}/symlinks"

    os.makedirs(f"{directory}/subdirectory")
    os.makedirs(permissions)
    os.makedirs(symlinks)

    _touch(f"{root}/file")
    _touch(f"{root}/hello", b"Hello World\n")
    _touch(f"{directory}/child")
    _touch(f"{directory}/.hiddenFile")
    _touch(f"{directory}/subdirectory/child")

    _touch(f"{permissions}/deletable", mode=0o222)
    _touch(f"{permissions}/executable", mode=0o111)
    _touch(f"{permissions}/readable", mode=0o444)
    _touch(f"{permissions}/writable", mode=0o222)
    _touch(f"{permissions}/none", mode=0o000)

    os.symlink(directory, f"{symlinks}/directory")
    os.symlink(symlinks, f"{symlinks}/same-dir")
    os.symlink(f"{root}/file", f"{symlinks}/file")
    os.symlink("../hello", f"{symlinks}/relative")

    yield root

    # Restore permissions so tmp_path cleanup can remove everything.
    for name in os.listdir(permissions):
        os.chmod(f"{permissions}/{name}", 0o644)


@pytest.fixture
def fixture_path(fixtures) -> Path:
    return Path(fixtures)


@pytest.fixture
def home(tmp_path, monkeypatch) -> str:
    """Point HOME at a fresh directory and return it."""
    home_dir = tmp_path / "home" / "kyle"
    home_dir.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home_dir))
    return str(home_dir)


@pytest.fixture
def restore_cwd():
    """Return to the original working directory after the test."""
    previous = os.getcwd()
    yield previous
    os.chdir(previous)


@pytest.fixture
def case_insensitive() -> RecordingCaseSensitivity:
    return RecordingCaseSensitivity(case_sensitive=False)
