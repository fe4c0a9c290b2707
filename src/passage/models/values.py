"""Typed wrappers for OAuth 2.0 protocol values.

Identifiers (client ids, scopes, endpoint URLs) are plain ``str`` subclasses
and can be used anywhere a string is expected. Secrets (client secrets,
tokens, codes, CSRF state, PKCE verifiers) build on pydantic's ``SecretStr``
and only give up their raw value through ``secret()``.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import GetCoreSchemaHandler, SecretStr
from pydantic_core import core_schema

REDACTED = "[redacted]"


class Identifier(str):
    """Non-secret protocol string with transparent access.

    Construction never validates; subclasses that wrap URLs are the exception.
    """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.to_string_ser_schema(),
        )


class ClientId(Identifier):
    """Client identifier issued during registration (RFC 6749 Section 2.2)."""


class Scope(Identifier):
    """A single access token scope (RFC 6749 Section 3.3)."""


class ResponseType(Identifier):
    """Authorization endpoint response type, e.g. ``code`` or ``token``."""


class ResourceOwnerUsername(Identifier):
    pass


class PkceCodeChallenge(Identifier):
    """Derived PKCE code challenge (RFC 7636 Section 4.2)."""


class PkceCodeChallengeMethod(Identifier):
    pass


class EndpointUrl(Identifier):
    """Absolute URL kept verbatim, without normalization."""

    def __new__(cls, value: str) -> EndpointUrl:
        try:
            is_absolute = httpx.URL(value).is_absolute_url
        except httpx.InvalidURL as e:
            raise ValueError(f"{cls.__name__} is not a valid URL: {e}") from e

        if not is_absolute:
            raise ValueError(f"{cls.__name__} must be an absolute URL: {value!r}")

        return super().__new__(cls, value)


class AuthUrl(EndpointUrl):
    """Authorization endpoint URL."""


class TokenUrl(EndpointUrl):
    """Token endpoint URL."""


class RedirectUrl(EndpointUrl):
    """Redirection endpoint the authorization server sends the user back to."""


class SecretValue(SecretStr):
    """Sensitive string that never renders its value.

    ``repr()`` and ``str()`` always produce ``TypeName([redacted])``, and JSON
    serialization through pydantic yields the same marker. Use ``secret()``
    to read the raw value.
    """

    def secret(self) -> str:
        """Return the raw secret value."""
        return self.get_secret_value()

    def _display(self) -> str:
        return REDACTED

    def __repr__(self) -> str:
        return f"{type(self).__name__}({REDACTED})"

    def __str__(self) -> str:
        return self.__repr__()

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_str = core_schema.no_info_after_validator_function(
            cls, core_schema.str_schema()
        )
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_str]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )


class ClientSecret(SecretValue):
    """Client password issued during registration (RFC 6749 Section 2.3.1)."""


class AccessToken(SecretValue):
    pass


class RefreshToken(SecretValue):
    pass


class AuthorizationCode(SecretValue):
    """Authorization code received on the redirect URL."""


class CsrfToken(SecretValue):
    """Opaque ``state`` value round-tripped through the authorization server."""


class PkceCodeVerifier(SecretValue):
    """PKCE code verifier (RFC 7636 Section 4.1)."""


class ResourceOwnerPassword(SecretValue):
    pass
