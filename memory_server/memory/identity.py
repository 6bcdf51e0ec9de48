"""
Identity and storage key helpers.

The caller identity is an opaque token (usually an email address) taken verbatim
from a request header. Each identity owns exactly one storage key.
"""

from typing import Mapping, Optional

DEFAULT_IDENTITY_HEADER = "x-user-email"
DEFAULT_NAMESPACE = "memory"
KEY_SEPARATOR = ":"


def resolve_identity(
    headers: Optional[Mapping[str, str]], header_name: str = DEFAULT_IDENTITY_HEADER
) -> Optional[str]:
    """
    Extract the caller identity from request headers.

    Returns the header value as-is when present and non-empty, otherwise None
    (a guest caller). No validation of the token is performed.
    """
    if not headers:
        return None

    value = headers.get(header_name)
    if value is None:
        # Plain dicts are case-sensitive, HTTP header names are not
        wanted = header_name.lower()
        for name, candidate in headers.items():
            if name.lower() == wanted:
                value = candidate
                break

    return value or None


def derive_key(identity: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Map an identity to its storage key, e.g. ``memory:alice@example.com``."""
    return f"{namespace}{KEY_SEPARATOR}{identity}"
