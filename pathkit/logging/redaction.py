"""Sensitive data redaction for structured logging."""

from __future__ import annotations

import os
import re
from typing import Any, Dict, List, Optional, Pattern, Union

from pathkit.core.segments import abbreviate_home


class DataRedactor:
    """Redact sensitive information from log data.

    Paths under the user's home directory are rewritten with a leading ``~``
    so logs do not leak account names; credentials are replaced entirely.
    """

    def __init__(
        self,
        home: Optional[str] = None,
        custom_patterns: Optional[List[Pattern[str]]] = None,
    ) -> None:
        """Initialize redactor with standard and custom patterns.

        Args:
            home: Home directory to abbreviate (default: the current user's)
            custom_patterns: Additional regex patterns to redact
        """
        self.home = os.path.expanduser("~") if home is None else home
        self._home_re: Optional[Pattern[str]] = None
        trimmed = self.home.rstrip("/")
        if trimmed and trimmed != "~":
            self._home_re = re.compile(re.escape(trimmed) + r"(?=/|\s|$|['\"])")

        self.patterns = [
            # Tokens and API keys (common patterns)
            re.compile(
                r'(token|key|secret|password|api_key|credential)["\']?\s*[=:]\s*["\']?[a-zA-Z0-9_-]{8,}["\']?',
                re.IGNORECASE,
            ),
        ]
        if custom_patterns:
            self.patterns.extend(custom_patterns)

        # Sensitive field names to redact entirely
        self.sensitive_fields = {
            "password", "token", "secret", "key", "auth", "credential",
            "api_key", "access_token", "refresh_token", "auth_token",
        }

    def redact_string(self, text: str) -> str:
        """Redact home prefixes and credentials from a string."""
        result = text
        if self._home_re is not None:
            result = self._home_re.sub("~", result)
        for pattern in self.patterns:
            result = pattern.sub("[REDACTED]", result)
        return result

    def redact_path(self, path: Union[str, "os.PathLike[str]"]) -> str:
        """Abbreviate a path under the home directory, leaving others as-is."""
        path_str = os.fspath(path)
        return abbreviate_home(path_str, self.home) or path_str

    def redact_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively redact sensitive data from dictionary."""
        result: Dict[str, Any] = {}

        for key, value in data.items():
            if key.lower() in self.sensitive_fields:
                result[key] = "[REDACTED]"
                continue

            if isinstance(value, dict):
                result[key] = self.redact_dict(value)
            elif isinstance(value, list):
                result[key] = [
                    self.redact_dict(item) if isinstance(item, dict)
                    else self.redact_string(item) if isinstance(item, str)
                    else item
                    for item in value
                ]
            elif isinstance(value, str):
                result[key] = self.redact_string(value)
            elif isinstance(value, os.PathLike):
                result[key] = self.redact_path(value)
            else:
                result[key] = value

        return result

    def add_pattern(self, pattern: Union[str, Pattern[str]]) -> None:
        """Add custom redaction pattern."""
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self.patterns.append(pattern)

    def add_sensitive_field(self, field_name: str) -> None:
        self.sensitive_fields.add(field_name.lower())
