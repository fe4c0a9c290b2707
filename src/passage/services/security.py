"""CSRF state utilities for OAuth 2.0 flows.

Provides cryptographically secure ``state`` generation and the constant-time
check callers run against the value echoed back on the redirect.
"""

from __future__ import annotations

import base64
import secrets

from passage.models.errors import StateValidationError
from passage.models.values import CsrfToken

DEFAULT_STATE_BYTES = 16


def generate_state(num_bytes: int = DEFAULT_STATE_BYTES) -> CsrfToken:
    """Generate a cryptographically secure state parameter.

    No registry of issued values is kept: uniqueness is statistical (128 bits
    of entropy by default).

    Args:
        num_bytes: Number of random bytes to encode

    Returns:
        Base64url-encoded random state without padding
    """
    random_bytes = secrets.token_bytes(num_bytes)
    return CsrfToken(base64.urlsafe_b64encode(random_bytes).decode("ascii").rstrip("="))


def validate_state(expected: CsrfToken, actual: str | CsrfToken | None) -> None:
    """Validate state parameter matches expected value.

    Args:
        expected: State parameter from original authorization request
        actual: State parameter from callback URL

    Raises:
        StateValidationError: If state is missing or doesn't match
    """
    if actual is None:
        raise StateValidationError(
            "Authorization server callback missing required state parameter"
        )

    if isinstance(actual, CsrfToken):
        actual = actual.secret()

    if not secrets.compare_digest(
        expected.secret().encode("utf-8"), actual.encode("utf-8")
    ):
        raise StateValidationError("State parameter mismatch - possible CSRF attack")
