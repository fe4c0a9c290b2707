"""Exception hierarchy and error response models for OAuth 2.0 clients.

Token endpoint failures are reported as one of four ``RequestTokenError``
kinds so callers can branch on what went wrong:

- ``ServerResponseError``: the server answered with an RFC 6749 Section 5.2 error
- ``ClientError``: the HTTP transport failed
- ``ParseError``: a response body could not be deserialized
- ``OtherError``: anything else (no token endpoint, empty body)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import httpx
from pydantic import BaseModel, ConfigDict, field_serializer, field_validator


class ErrorCode(str, Enum):
    """Error codes defined by RFC 6749 Section 5.2."""

    INVALID_REQUEST = "invalid_request"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_SCOPE = "invalid_scope"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OtherErrorCode:
    """Server-specific error code outside the RFC 6749 set."""

    value: str

    def __str__(self) -> str:
        return self.value


ErrorField = Union[ErrorCode, OtherErrorCode]


def parse_error_field(value: str) -> ErrorField:
    """Map a wire error code to its typed form.

    Matching is case-sensitive: ``INVALID_GRANT`` is not ``invalid_grant``.
    """
    try:
        return ErrorCode(value)
    except ValueError:
        return OtherErrorCode(value)


class ErrorResponse(BaseModel):
    """Token endpoint error response (RFC 6749 Section 5.2)."""

    model_config = ConfigDict(frozen=True)

    error: ErrorField
    error_description: str | None = None
    error_uri: str | None = None

    @field_validator("error", mode="plain")
    @classmethod
    def validate_error(cls, v: Any) -> ErrorField:
        if isinstance(v, (ErrorCode, OtherErrorCode)):
            return v
        if not isinstance(v, str):
            raise ValueError("error must be a string")
        return parse_error_field(v)

    @field_serializer("error")
    def serialize_error(self, error: ErrorField) -> str:
        return str(error)

    def __str__(self) -> str:
        formatted = str(self.error)

        if self.error_description is not None:
            formatted += f": {self.error_description}"

        if self.error_uri is not None:
            formatted += f" / See {self.error_uri}"

        return formatted


class OAuth2Error(Exception):
    """Base exception for all OAuth 2.0 related errors."""

    pass


class RequestTokenError(OAuth2Error):
    """Raised when a token endpoint exchange fails."""

    pass


class ServerResponseError(RequestTokenError):
    """The authorization server returned a structured error response."""

    def __init__(self, error_response: ErrorResponse):
        super().__init__(f"Server returned error response `{error_response}`")
        self.error_response = error_response


class ClientError(RequestTokenError):
    """The HTTP transport failed before a response was received."""

    def __init__(self, error: httpx.HTTPError):
        super().__init__(f"Client error: {error}")
        self.error = error


class ParseError(RequestTokenError):
    """A response body failed to deserialize.

    The raw body is kept to help diagnose non-conforming servers.
    """

    def __init__(self, error: Exception, body: bytes):
        super().__init__("Failed to parse server response")
        self.error = error
        self.body = body


class OtherError(RequestTokenError):
    """Any other token exchange failure."""

    def __init__(self, message: str):
        super().__init__(f"Other error: {message}")
        self.message = message


class AuthorizationCallbackError(OAuth2Error):
    """Raised when authorization server callback data is malformed or invalid.

    This indicates the authorization server sent an invalid callback URL,
    not that our callback handling code failed.
    """

    pass


class StateValidationError(AuthorizationCallbackError):
    """Raised when OAuth state parameter validation fails.

    This indicates either a missing state parameter or a state mismatch,
    which could indicate a CSRF attack or authorization server issue.
    """

    pass
