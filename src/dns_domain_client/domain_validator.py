"""
Domain name normalization for user input.

Converts names typed on the command line into the canonical form the API
expects (lowercase, IDNA-encoded, no trailing dot). The domain client
itself passes names through verbatim.
"""

import re

import idna

from .enums import ErrorCode
from .exceptions import ValidationError


# Control characters, whitespace and symbols never valid in a domain name.
# "_" and "*" stay allowed since record names (qnames) may carry them.
FORBIDDEN_CHARS_PATTERN = re.compile(
    r'[\x00-\x1f\x7f'
    r'\s'
    r'!@#$%^&()+=\[\]{}|\\:;"\'<>,?/`~]'
)


class DomainNameValidator:
    """Validates and normalizes domain and record names."""

    def normalize(self, raw_name: str) -> str:
        """
        Convert a name to canonical form.

        Args:
            raw_name: Name as entered by the user

        Returns:
            Lowercase, IDNA-encoded name without a trailing dot

        Raises:
            ValidationError: If the name is empty, contains forbidden
                characters, or cannot be IDNA-encoded
        """
        name = (raw_name or "").strip()
        if name.endswith("."):
            name = name[:-1]

        if not name:
            raise ValidationError(
                code=ErrorCode.VALIDATION_ERROR.value,
                message="Domain name is empty",
                details={"raw_input": raw_name},
            )

        forbidden = FORBIDDEN_CHARS_PATTERN.findall(name)
        if forbidden:
            raise ValidationError(
                code=ErrorCode.VALIDATION_ERROR.value,
                message="Domain name contains forbidden characters",
                details={"raw_input": raw_name, "forbidden_chars": forbidden},
            )

        name = name.lower()
        if name.isascii():
            return name

        try:
            return idna.encode(name, uts46=True).decode("ascii")
        except idna.IDNAError as e:
            raise ValidationError(
                code=ErrorCode.VALIDATION_ERROR.value,
                message=f"IDNA encoding failed: {e}",
                details={"raw_input": raw_name, "idna_error": str(e)},
            )
