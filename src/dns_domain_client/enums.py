"""
Enumeration types for the DNS domain client.

These enums provide type-safe constants for error codes and logging
levels throughout the package.
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes carried by every client exception."""

    TRANSPORT_ERROR = "transport_error"
    NOT_FOUND = "not_found"
    API_ERROR = "api_error"
    UNEXPECTED_STATUS = "unexpected_status"
    INVALID_RESPONSE = "invalid_response"
    VALIDATION_ERROR = "validation_error"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        """Numeric severity, higher is more severe."""
        return _LEVEL_RANKS[self]


_LEVEL_RANKS = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
}
