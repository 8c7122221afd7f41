"""
Log Sanitization

Provides filters and utilities for redacting credentials from logs.

The availability API takes its key as a query parameter, so any logged
request URL (httpx logs every request at INFO) carries a live credential.
"""

from __future__ import annotations

import logging
import re
from re import Pattern

# Patterns for sensitive data that should be redacted
SENSITIVE_PATTERNS: list[tuple[str, Pattern[str]]] = [
    # data4library style query parameter: ...?authKey=<hex>&libCode=...
    ("AUTH_KEY", re.compile(r"auth[_-]?key\s*[=:]\s*['\"]?[\w\-]{8,}['\"]?", re.IGNORECASE)),
    # API keys (various formats)
    (
        "API_KEY",
        re.compile(r"(api[_-]?key|apikey)\s*[=:]\s*['\"]?[\w\-]{16,}['\"]?", re.IGNORECASE),
    ),
    (
        "AUTH_TOKEN",
        re.compile(r"(auth[_-]?token|bearer)\s*[=:]\s*['\"]?[\w\-\.]{20,}['\"]?", re.IGNORECASE),
    ),
    (
        "SECRET",
        re.compile(
            r"(secret|password|passwd|pwd)\s*[=:]\s*['\"]?[^\s'\"&]{8,}['\"]?", re.IGNORECASE
        ),
    ),
    # Bearer tokens in headers
    ("BEARER", re.compile(r"Bearer\s+[a-zA-Z0-9\-_\.]+", re.IGNORECASE)),
]

# Placeholder for redacted content
REDACTION_PLACEHOLDER = "[REDACTED]"


class SanitizingFilter(logging.Filter):
    """
    A logging filter that redacts credentials from log messages.

    The record is rendered with its arguments first and the rendered text is
    sanitized, so secrets passed as non-string arguments (``httpx.URL``
    objects, for example) are caught as well.

    Usage:
        handler.addFilter(SanitizingFilter())
    """

    def __init__(
        self,
        name: str = "",
        additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
        redaction_placeholder: str = REDACTION_PLACEHOLDER,
    ):
        super().__init__(name)
        self._patterns = list(SENSITIVE_PATTERNS)
        if additional_patterns:
            self._patterns.extend(additional_patterns)
        self._placeholder = redaction_placeholder

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place. Always lets the record through."""
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Mismatched format args; sanitize the raw template instead
            message = str(record.msg)

        record.msg = self.sanitize(message)
        record.args = ()
        return True

    def sanitize(self, text: str) -> str:
        """Redact every sensitive pattern found in ``text``."""
        result = text
        for pattern_name, pattern in self._patterns:
            result = pattern.sub(f"{pattern_name}={self._placeholder}", result)
        return result


def configure_sanitized_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
    additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
) -> None:
    """
    Configure the root logger with sanitization enabled.

    Filters attached to a logger do not see records propagated from child
    loggers, so the filter is attached to every root handler as well.

    Args:
        level: Logging level (number or name)
        format_string: Log format string (uses default if not specified)
        additional_patterns: Extra patterns to redact
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=level, format=format_string)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    sanitizing_filter = SanitizingFilter(additional_patterns=additional_patterns)

    if not any(isinstance(f, SanitizingFilter) for f in root_logger.filters):
        root_logger.addFilter(sanitizing_filter)

    for handler in root_logger.handlers:
        if not any(isinstance(f, SanitizingFilter) for f in handler.filters):
            handler.addFilter(sanitizing_filter)
