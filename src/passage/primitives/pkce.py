"""PKCE (Proof Key for Code Exchange) primitives.

Implements RFC 7636 code verifier generation and S256 code challenge
derivation to prevent authorization code interception attacks.
"""

from __future__ import annotations

import base64
import hashlib
import secrets

from passage.models.values import (
    PkceCodeChallenge,
    PkceCodeChallengeMethod,
    PkceCodeVerifier,
)

MIN_VERIFIER_BYTES = 32
MAX_VERIFIER_BYTES = 96
S256 = "S256"


def _urlsafe_b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def generate_code_verifier(num_bytes: int = MIN_VERIFIER_BYTES) -> PkceCodeVerifier:
    """Generate a cryptographically secure code verifier.

    RFC 7636 Section 4.1: the verifier must be 43-128 characters long. That
    corresponds to 32-96 random bytes once base64url-encoded without padding.

    Args:
        num_bytes: Number of random bytes to encode, in [32, 96]

    Returns:
        A new random code verifier

    Raises:
        ValueError: If num_bytes is outside [32, 96]
    """
    if not MIN_VERIFIER_BYTES <= num_bytes <= MAX_VERIFIER_BYTES:
        raise ValueError(
            f"num_bytes must be between {MIN_VERIFIER_BYTES} and "
            f"{MAX_VERIFIER_BYTES}, got {num_bytes}"
        )

    code = _urlsafe_b64encode(secrets.token_bytes(num_bytes))
    assert 43 <= len(code) <= 128
    return PkceCodeVerifier(code)


def code_challenge(verifier: PkceCodeVerifier) -> PkceCodeChallenge:
    """Derive the code challenge from a verifier using the S256 method.

    RFC 7636 Section 4.2: BASE64URL-ENCODE(SHA256(ASCII(code_verifier)))
    """
    digest = hashlib.sha256(verifier.secret().encode("utf-8")).digest()
    return PkceCodeChallenge(_urlsafe_b64encode(digest))


def code_challenge_method() -> PkceCodeChallengeMethod:
    return PkceCodeChallengeMethod(S256)


def authorize_url_params(verifier: PkceCodeVerifier) -> list[tuple[str, str]]:
    """Query parameters to merge into the authorization URL."""
    return [
        ("code_challenge_method", code_challenge_method()),
        ("code_challenge", code_challenge(verifier)),
    ]
