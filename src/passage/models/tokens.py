"""Token response models for OAuth 2.0 (RFC 6749 Section 5.1).

``TokenResponse`` is the capability interface the token request builder
parses into. ``StandardTokenResponse`` is the RFC-shaped implementation;
server-specific shapes can be swapped in without touching the builder.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from passage.helpers import join_space_delimited, split_space_delimited
from passage.models.values import AccessToken, RefreshToken, Scope


class TokenType(str, Enum):
    """Access token types (RFC 6749 Section 7.1)."""

    BEARER = "bearer"
    MAC = "mac"


@runtime_checkable
class TokenResponse(Protocol):
    """Common view of a successful token endpoint response."""

    @property
    def access_token(self) -> AccessToken: ...

    @property
    def token_type(self) -> TokenType: ...

    @property
    def expires_in(self) -> timedelta | None: ...

    @property
    def refresh_token(self) -> RefreshToken | None: ...

    @property
    def scopes(self) -> list[Scope] | None: ...


class StandardTokenResponse(BaseModel):
    """Successful token response as defined by RFC 6749 Section 5.1.

    ``token_type`` is matched case-insensitively. ``scope`` arrives as a
    space-delimited string and is exposed as ``scopes``; ``None`` means the
    server did not report scopes at all.
    """

    model_config = ConfigDict(frozen=True)

    access_token: AccessToken
    token_type: TokenType
    expires_in: timedelta | None = None
    refresh_token: RefreshToken | None = None
    scopes: list[Scope] | None = Field(
        default=None, validation_alias="scope", serialization_alias="scope"
    )

    @field_validator("token_type", mode="before")
    @classmethod
    def normalize_token_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("expires_in", mode="before")
    @classmethod
    def seconds_to_timedelta(cls, v: Any) -> Any:
        if v is None or isinstance(v, timedelta):
            return v
        if isinstance(v, bool) or not isinstance(v, int) or v < 0:
            raise ValueError("expires_in must be a non-negative number of seconds")
        try:
            return timedelta(seconds=v)
        except OverflowError as e:
            raise ValueError(f"expires_in out of range: {v}") from e

    @field_validator("scopes", mode="before")
    @classmethod
    def split_scopes(cls, v: Any) -> Any:
        if isinstance(v, str):
            return split_space_delimited(v)
        return v

    @field_serializer("expires_in")
    def serialize_expires_in(self, expires_in: timedelta | None) -> int | None:
        if expires_in is None:
            return None
        return int(expires_in.total_seconds())

    @field_serializer("scopes")
    def serialize_scopes(self, scopes: list[Scope] | None) -> str | None:
        if scopes is None:
            return None
        return join_space_delimited(scopes)

    def to_wire(self) -> dict[str, Any]:
        """Dump in the RFC 6749 wire shape. Secrets stay redacted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
