"""Authorization flow models for OAuth 2.0.

Contains the parsed redirect callback from the authorization endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass

from passage.models.values import AuthorizationCode


@dataclass(frozen=True)
class AuthorizationResponse:
    """Parameters delivered to the redirect URL (RFC 6749 Section 4.1.2)."""

    code: AuthorizationCode | None = None
    state: str | None = None
    error: str | None = None
    error_description: str | None = None
    error_uri: str | None = None

    def is_success(self) -> bool:
        return self.error is None and self.code is not None

    def is_error(self) -> bool:
        return self.error is not None
