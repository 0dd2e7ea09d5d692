"""Long URL validation.

Checks run in a fixed order and the first failing rule decides the
error kind reported to the caller.
"""

import re
from urllib.parse import urlsplit

from url_service.services.exceptions import URLValidationError, ValidationErrorKind

MAX_URL_LENGTH = 2048
ALLOWED_SCHEMES = ("http", "https")

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def validate_url(candidate: str, max_length: int = MAX_URL_LENGTH) -> None:
    """
    Validate a long URL before it is shortened.

    Args:
        candidate: The URL to check
        max_length: Maximum accepted length in characters

    Raises:
        URLValidationError: With the kind of the first rule that failed
    """
    if candidate == "":
        raise URLValidationError(ValidationErrorKind.EMPTY, "URL cannot be empty")

    try:
        parts = urlsplit(candidate)
        # Accessing the port validates it
        parts.port
    except ValueError:
        raise URLValidationError(ValidationErrorKind.MALFORMED, "invalid URL format")

    if (
        not parts.scheme
        or candidate[0].isspace()
        or _CONTROL_CHARS.search(candidate)
        or any(ch.isspace() for ch in parts.netloc)
    ):
        raise URLValidationError(ValidationErrorKind.MALFORMED, "invalid URL format")

    # urlsplit lower-cases the scheme, so compare against the text as given
    scheme = candidate[:len(parts.scheme)]
    if scheme not in ALLOWED_SCHEMES:
        raise URLValidationError(
            ValidationErrorKind.UNSUPPORTED_SCHEME, "URL must use http or https scheme"
        )

    if not parts.hostname:
        raise URLValidationError(ValidationErrorKind.MISSING_HOST, "URL must have a valid host")

    if len(candidate) > max_length:
        raise URLValidationError(
            ValidationErrorKind.TOO_LONG,
            f"URL exceeds maximum length of {max_length} characters",
        )

    # Scheme-only input such as "https://" already fails the host check above
    remainder = candidate
    for prefix in ("https://", "http://"):
        if remainder.startswith(prefix):
            remainder = remainder[len(prefix):]
    if not remainder.strip():
        raise URLValidationError(
            ValidationErrorKind.SCHEME_ONLY, "URL must contain more than just the scheme"
        )
