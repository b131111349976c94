"""
Exception classes for the DNS domain client.

All exceptions inherit from DomainClientError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional

from .enums import ErrorCode


class DomainClientError(Exception):
    """Base exception for all domain client errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class TransportError(DomainClientError):
    """Raised when the HTTP request itself fails (DNS, connect, timeout)."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(ErrorCode.TRANSPORT_ERROR.value, message, details)


class NotFoundError(DomainClientError):
    """Raised when the server answers 404 for a lookup that defines it."""

    def __init__(self) -> None:
        super().__init__(ErrorCode.NOT_FOUND.value, "Not Found")


class _StatusError(DomainClientError):
    """Shared shape for errors carrying the raw status code and body text."""

    def __init__(self, code: str, label: str, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text
        super().__init__(
            code,
            f"{label} {status_code}: {text}" if text else f"{label} {status_code}",
            {"status_code": status_code, "text": text},
        )


class ApiError(_StatusError):
    """Raised when the server rejects client-supplied data (HTTP 400)."""

    def __init__(self, status_code: int, text: str) -> None:
        super().__init__(ErrorCode.API_ERROR.value, "API error", status_code, text)


class UnexpectedStatusError(_StatusError):
    """Raised for any status code the operation does not recognize."""

    def __init__(self, status_code: int, text: str) -> None:
        super().__init__(
            ErrorCode.UNEXPECTED_STATUS.value,
            "Unexpected HTTP status",
            status_code,
            text,
        )


class InvalidResponseError(DomainClientError):
    """Raised when a success response body cannot be decoded."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_RESPONSE.value, message)


class ValidationError(DomainClientError):
    """Raised when user input or configuration is invalid."""

    pass
