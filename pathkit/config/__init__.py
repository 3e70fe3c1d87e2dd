"""pathkit centralized configuration for runtime settings.

Provides typed settings for logging and temporary-file naming. All settings
are backed by environment variables following the PK_* naming convention and
are read when a ``Settings`` instance is created.

Example:
    >>> from pathkit.config import load_settings
    >>> load_settings().temp_prefix
    'pathkit'

Environment Variables:
    PK_LOG_DIR: Directory for JSON-lines log files (default: unset, no file output)
    PK_LOG_CONSOLE: Echo log lines to stdout when truthy (default: 0)
    PK_LOG_LEVEL: Minimum level emitted: debug, info, warning, error, critical (default: warning)
    PK_TEMP_PREFIX: Name prefix of the process-unique temporary directory (default: pathkit)
    PK_ATOMIC_SUFFIX: Suffix of staging files used by atomic writes (default: .tmp)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

_LEVELS = ("debug", "info", "warning", "error", "critical")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _env(name: str, default: str) -> str:
    """Get environment variable with PK_* prefix validation."""
    if not name.startswith("PK_"):
        raise ValueError(f"Only PK_* env vars are allowed, got: {name}")
    return os.getenv(name, default)


def _env_bool(name: str, default: bool) -> bool:
    """Get environment variable as boolean."""
    raw = _env(name, "1" if default else "0").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


def _env_optional(name: str) -> Optional[str]:
    return _env(name, "").strip() or None


def _env_level(name: str, default: str) -> str:
    raw = _env(name, default).strip().lower()
    return raw if raw in _LEVELS else default


@dataclass(frozen=True)
class Settings:
    """Runtime settings for pathkit.

    Every field is read from the environment at construction time, so tests can
    ``monkeypatch.setenv`` and build a fresh instance. This dataclass is frozen
    to prevent accidental mutation at runtime.
    """

    log_dir: Optional[str] = field(default_factory=lambda: _env_optional("PK_LOG_DIR"))
    log_console: bool = field(default_factory=lambda: _env_bool("PK_LOG_CONSOLE", False))
    log_level: str = field(default_factory=lambda: _env_level("PK_LOG_LEVEL", "warning"))

    temp_prefix: str = field(default_factory=lambda: _env("PK_TEMP_PREFIX", "pathkit"))
    atomic_suffix: str = field(default_factory=lambda: _env("PK_ATOMIC_SUFFIX", ".tmp"))


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()


# Module-level instance reflecting the environment at import time
settings = load_settings()

__all__ = [
    "settings",
    "Settings",
    "load_settings",
]
