"""
Request logger for the DNS domain client.

Records one entry per API request (method, path, status, timing) and one per
transport failure. Entries are written as JSON lines, text lines or both, and
credential-like keys are masked before anything is written.
"""

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from .enums import LogLevel

OUTPUT_FORMATS = ("json", "text", "both")


@dataclass
class LogEntry:
    """A single emitted log record."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "component": self.component,
            "message": self.message,
            "data": self.data,
        }


class AuditLogger:
    """
    Structured request logger.

    Entries below ``level`` are dropped. Emitted entries are kept in memory
    only when ``keep_entries`` is set, so a long-lived client does not
    accumulate one record per request.
    """

    # Substrings that mark a key as carrying a credential
    SENSITIVE_KEYS = frozenset({
        'token', 'secret', 'password', 'api_key', 'auth',
        'authorization', 'credential', 'credentials', 'cookie',
    })

    MASK_VALUE = "***MASKED***"

    def __init__(
        self,
        output_format: str = "text",
        output_stream: Optional[TextIO] = None,
        level: LogLevel = LogLevel.INFO,
        keep_entries: bool = False,
    ):
        """
        Initialize the logger.

        Args:
            output_format: 'json', 'text' or 'both'
            output_stream: Where lines are written (defaults to sys.stderr)
            level: Minimum level that is emitted
            keep_entries: Retain emitted entries for inspection via `entries`
        """
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid output_format: {output_format}")

        self._output_format = output_format
        self._output_stream = output_stream or sys.stderr
        self._level = level
        self._keep_entries = keep_entries
        self._entries: list[LogEntry] = []

    @property
    def output_format(self) -> str:
        return self._output_format

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def entries(self) -> list[LogEntry]:
        """Retained entries; always empty unless keep_entries was set."""
        return list(self._entries)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.rank >= self._level.rank

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Emit an entry in the configured format(s).

        Returns:
            The emitted LogEntry, or None when filtered out by level
        """
        if not self.is_enabled_for(level):
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=self.mask_sensitive_data(data or {}),
        )

        if self._keep_entries:
            self._entries.append(entry)
        self._write(entry)

        return entry

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        elapsed_ms: float,
    ) -> Optional[LogEntry]:
        """Record a completed request at debug level."""
        return self.log(
            LogLevel.DEBUG,
            "api_client",
            f"{method} {path} -> {status_code}",
            {
                "method": method,
                "path": path,
                "status_code": status_code,
                "elapsed_ms": round(elapsed_ms, 3),
            },
        )

    def log_transport_error(
        self,
        method: str,
        path: str,
        error: Exception,
        elapsed_ms: float,
        request_url: Optional[str] = None,
    ) -> Optional[LogEntry]:
        """Record a request that never produced a response."""
        return self.log(
            LogLevel.ERROR,
            "api_client",
            f"{method} {path} failed",
            {
                "method": method,
                "path": path,
                "request_url": request_url,
                "error_type": type(error).__name__,
                "error_message": str(error),
                "elapsed_ms": round(elapsed_ms, 3),
            },
        )

    def is_sensitive(self, key: str) -> bool:
        key_lower = key.lower()
        return any(pattern in key_lower for pattern in self.SENSITIVE_KEYS)

    def mask_sensitive_data(self, data: Any) -> Any:
        """Copy ``data`` with credential-like keys masked, at any depth."""
        if isinstance(data, dict):
            return {
                key: self.MASK_VALUE if self.is_sensitive(str(key)) else self.mask_sensitive_data(value)
                for key, value in data.items()
            }
        if isinstance(data, (list, tuple)):
            return [self.mask_sensitive_data(item) for item in data]
        return data

    def _write(self, entry: LogEntry) -> None:
        lines = []
        if self._output_format in ("json", "both"):
            lines.append(json.dumps(entry.to_dict(), ensure_ascii=False))
        if self._output_format in ("text", "both"):
            lines.append(self.format_text(entry))

        for line in lines:
            self._output_stream.write(line + "\n")
        self._output_stream.flush()

    @staticmethod
    def format_text(entry: LogEntry) -> str:
        # [TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data}
        text = f"[{entry.timestamp}] {entry.level.value.upper()} [{entry.component}] {entry.message}"
        if entry.data:
            text += " " + json.dumps(entry.data, ensure_ascii=False)
        return text
