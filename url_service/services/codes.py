"""Short code generation.

Codes are derived from the long URL itself, so the same URL always maps
to the same code without consulting storage.
"""

import base64
import hashlib

SHORT_CODE_LENGTH = 10


def generate_short_code(long_url: str, length: int = SHORT_CODE_LENGTH) -> str:
    """
    Generate a deterministic short code for a URL.

    The SHA-256 digest of the UTF-8 encoded URL is encoded with the URL-safe
    base64 alphabet, padding removed, and truncated to ``length`` characters.
    The encoded digest is 43 characters long, so any length up to that is
    always filled.

    Args:
        long_url: The URL to derive the code from
        length: Number of characters to keep

    Returns:
        str: The short code
    """
    digest = hashlib.sha256(long_url.encode("utf-8")).digest()
    encoded = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return encoded[:length]
