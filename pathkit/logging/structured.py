"""Structured logging with consistent format and path redaction."""

from __future__ import annotations

import json
import os
import sys
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from pathkit.config import Settings, load_settings

from .redaction import DataRedactor


class LogLevel(Enum):
    """Standard log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        try:
            return cls(name.lower())
        except ValueError:
            return cls.WARNING


_RANKS = {level: i for i, level in enumerate(LogLevel)}


class StructuredLogger:
    """JSON-lines logger with a component tag, session id and redaction."""

    def __init__(
        self,
        component: str,
        session_id: Optional[str] = None,
        output_file: Optional[Union[str, Path, TextIO]] = None,
        enable_console: bool = False,
        redactor: Optional[DataRedactor] = None,
        min_level: LogLevel = LogLevel.DEBUG,
    ) -> None:
        """Initialize structured logger.

        Args:
            component: Component identifier (e.g., 'fs', 'walk')
            session_id: Optional session ID for correlation
            output_file: Optional file path or handle for log output
            enable_console: Whether to output to stdout (default: False)
            redactor: Optional data redactor for sensitive information
            min_level: Entries below this level are dropped
        """
        self.component = component
        self.session_id = session_id or str(uuid.uuid4())[:8]
        self.start_time = time.time()
        self.redactor = redactor or DataRedactor()
        self.min_level = min_level

        self.console_enabled = enable_console
        self.log_file: Optional[TextIO] = None
        self._owns_file = False

        if output_file:
            if isinstance(output_file, (str, Path)):
                log_file_path = Path(output_file)
                log_file_path.parent.mkdir(parents=True, exist_ok=True)
                self.log_file = open(log_file_path, "a", encoding="utf-8")
                self._owns_file = True
            else:
                self.log_file = output_file

    def enabled_for(self, level: LogLevel) -> bool:
        return level.rank >= self.min_level.rank and (
            self.console_enabled or self.log_file is not None
        )

    def _format_log_entry(self, level: LogLevel, message: str, **context: Any) -> Dict[str, Any]:
        safe_context = self.redactor.redact_dict(context)
        return {
            "timestamp": time.time(),
            "iso_timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()) + "Z",
            "level": level.value,
            "component": self.component,
            "session_id": self.session_id,
            "session_time": time.time() - self.start_time,
            "message": message,
            **safe_context,
        }

    def _write_log(self, entry: Dict[str, Any]) -> None:
        json_line = json.dumps(entry, default=str, separators=(",", ":"))

        if self.console_enabled:
            print(json_line, file=sys.stdout, flush=True)

        if self.log_file:
            self.log_file.write(json_line + "\n")
            self.log_file.flush()

    def log(self, level: LogLevel, message: str, **context: Any) -> None:
        if not self.enabled_for(level):
            return
        self._write_log(self._format_log_entry(level, message, **context))

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message."""
        self.log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        """Log info message."""
        self.log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        """Log warning message."""
        self.log(LogLevel.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        """Log error message."""
        self.log(LogLevel.ERROR, message, **context)

    def critical(self, message: str, **context: Any) -> None:
        """Log critical message."""
        self.log(LogLevel.CRITICAL, message, **context)

    def close(self) -> None:
        """Close log file handle if this logger opened it."""
        if self.log_file and self._owns_file:
            self.log_file.close()
        self.log_file = None


def create_logger(
    component: str,
    session_id: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    settings: Optional[Settings] = None,
    **kwargs: Any,
) -> StructuredLogger:
    """Factory function to create structured logger from PK_* settings.

    Args:
        component: Component identifier
        session_id: Optional session ID for correlation
        log_dir: Optional directory for log files (uses PK_LOG_DIR if not provided)
        settings: Settings to use instead of reading the environment
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        Configured StructuredLogger instance
    """
    settings = settings or load_settings()

    if log_dir is None:
        log_dir = settings.log_dir

    kwargs.setdefault("enable_console", settings.log_console)
    kwargs.setdefault("min_level", LogLevel.parse(settings.log_level))

    output_file = None
    if log_dir:
        output_file = Path(os.fspath(log_dir)) / f"{component}_{session_id or 'default'}.jsonl"

    return StructuredLogger(
        component=component, session_id=session_id, output_file=output_file, **kwargs
    )
