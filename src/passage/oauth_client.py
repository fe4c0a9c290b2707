"""OAuth 2.0 client configuration and grant entry points.

``OAuth2Client`` holds a client registration (identity, endpoints, scopes,
redirect URL, authentication method) and produces authorization URLs and
token requests for every RFC 6749 grant. It is immutable: builder methods
return updated copies, so one instance can be shared across concurrent
exchanges.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any

import httpx
from pydantic import SecretStr

from passage.helpers import join_space_delimited
from passage.models.flow import AuthorizationResponse
from passage.models.tokens import StandardTokenResponse
from passage.models.values import (
    AuthorizationCode,
    AuthUrl,
    ClientId,
    ClientSecret,
    CsrfToken,
    RedirectUrl,
    RefreshToken,
    ResourceOwnerPassword,
    ResourceOwnerUsername,
    Scope,
    TokenUrl,
)
from passage.services.flow import (
    RESPONSE_TYPE_CODE,
    RESPONSE_TYPE_TOKEN,
    build_authorization_url,
    parse_authorization_callback,
)
from passage.services.security import generate_state, validate_state
from passage.services.tokens import AuthType, TokenRequest

logger = logging.getLogger(__name__)


def _coerce(value: Any, wrapper: type) -> Any:
    if value is None or isinstance(value, wrapper):
        return value
    if isinstance(value, SecretStr):
        value = value.get_secret_value()
    return wrapper(value)


@dataclass(frozen=True)
class OAuth2Client:
    """Immutable OAuth 2.0 client configuration.

    Plain strings passed to the constructor are wrapped in the matching
    identifier or secret type. A missing ``token_url`` is allowed here and
    only fails once a token request is executed.
    """

    client_id: ClientId
    client_secret: ClientSecret | None
    auth_url: AuthUrl
    token_url: TokenUrl | None = None
    auth_type: AuthType = AuthType.BASIC_AUTH
    scopes: tuple[Scope, ...] = ()
    redirect_url: RedirectUrl | None = None
    token_response_type: type = StandardTokenResponse
    http_client: httpx.AsyncClient | None = field(
        default=None, compare=False, repr=False
    )
    timeout: float = 30.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "client_id", _coerce(self.client_id, ClientId))
        object.__setattr__(
            self, "client_secret", _coerce(self.client_secret, ClientSecret)
        )
        object.__setattr__(self, "auth_url", _coerce(self.auth_url, AuthUrl))
        object.__setattr__(self, "token_url", _coerce(self.token_url, TokenUrl))
        object.__setattr__(
            self, "redirect_url", _coerce(self.redirect_url, RedirectUrl)
        )
        object.__setattr__(
            self, "scopes", tuple(_coerce(scope, Scope) for scope in self.scopes)
        )

    def add_scope(self, scope: Scope | str) -> OAuth2Client:
        """Return a copy that also requests ``scope``."""
        return replace(self, scopes=(*self.scopes, Scope(scope)))

    def set_auth_type(self, auth_type: AuthType) -> OAuth2Client:
        return replace(self, auth_type=auth_type)

    def set_redirect_url(self, redirect_url: RedirectUrl | str) -> OAuth2Client:
        return replace(self, redirect_url=redirect_url)

    def set_http_client(self, http_client: httpx.AsyncClient) -> OAuth2Client:
        """Use a caller-owned HTTP client for token requests.

        The caller keeps responsibility for closing it.
        """
        return replace(self, http_client=http_client)

    def set_token_response_type(self, token_response_type: type) -> OAuth2Client:
        """Parse successful token responses into a different model."""
        return replace(self, token_response_type=token_response_type)

    def authorize_url(
        self,
        state_fn: Callable[[], CsrfToken] = generate_state,
        extra_params: Iterable[tuple[str, str]] = (),
    ) -> tuple[str, CsrfToken]:
        """Build an authorization code grant URL (RFC 6749 Section 4.1.1).

        Args:
            state_fn: Produces the CSRF state; random by default
            extra_params: Extension parameters, e.g. the PKCE pair

        Returns:
            Tuple of (authorization_url, csrf_state). Keep the state and
            compare it with the one returned on the redirect.
        """
        state = state_fn()
        url = build_authorization_url(self, RESPONSE_TYPE_CODE, state, extra_params)
        return url, state

    def authorize_url_implicit(
        self,
        state_fn: Callable[[], CsrfToken] = generate_state,
        extra_params: Iterable[tuple[str, str]] = (),
    ) -> tuple[str, CsrfToken]:
        """Build an implicit grant URL (RFC 6749 Section 4.2.1)."""
        state = state_fn()
        url = build_authorization_url(self, RESPONSE_TYPE_TOKEN, state, extra_params)
        return url, state

    def handle_authorization_callback(
        self, callback_url: str, expected_state: CsrfToken
    ) -> AuthorizationResponse:
        """Parse the redirect back from the authorization server.

        Args:
            callback_url: Full callback URL received from authorization server
            expected_state: State returned by ``authorize_url``

        Returns:
            AuthorizationResponse: Parsed callback response

        Raises:
            AuthorizationCallbackError: If callback URL is malformed
            StateValidationError: If state parameter is missing or doesn't match
        """
        auth_response = parse_authorization_callback(callback_url)
        validate_state(expected_state, auth_response.state)

        if auth_response.is_success():
            logger.info(
                "Authorization callback successful - received authorization code"
            )
        elif auth_response.is_error():
            logger.warning(
                f"Authorization callback contained error: {auth_response.error} - "
                f"{auth_response.error_description}"
            )
        else:
            logger.warning("Authorization callback missing both code and error")

        return auth_response

    def exchange_code(self, code: AuthorizationCode) -> TokenRequest:
        """Exchange an authorization code for a token (RFC 6749 Section 4.1.3)."""
        return (
            self._request_token()
            .param("grant_type", "authorization_code")
            .param("code", code.secret())
        )

    def exchange_password(
        self,
        username: ResourceOwnerUsername | str,
        password: ResourceOwnerPassword,
        scope_key: str = "scope",
    ) -> TokenRequest:
        """Resource owner password credentials grant (RFC 6749 Section 4.3.2)."""
        request = (
            self._request_token()
            .param("grant_type", "password")
            .param("username", username)
            .param("password", password.secret())
        )
        return self._with_scopes(request, scope_key)

    def exchange_client_credentials(self, scope_key: str = "scope") -> TokenRequest:
        """Client credentials grant (RFC 6749 Section 4.4.2).

        Args:
            scope_key: Form field carrying the scopes. Some servers expect
                ``scopes`` here instead of the RFC's ``scope``.
        """
        request = self._request_token().param("grant_type", "client_credentials")
        return self._with_scopes(request, scope_key)

    def exchange_refresh_token(self, refresh_token: RefreshToken) -> TokenRequest:
        """Refresh an access token (RFC 6749 Section 6)."""
        return (
            self._request_token()
            .param("grant_type", "refresh_token")
            .param("refresh_token", refresh_token.secret())
        )

    def _with_scopes(self, request: TokenRequest, scope_key: str) -> TokenRequest:
        if self.scopes:
            request.param(scope_key, join_space_delimited(self.scopes))
        return request

    def _request_token(self) -> TokenRequest:
        return TokenRequest(
            token_url=self.token_url,
            auth_type=self.auth_type,
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_url=self.redirect_url,
            response_type=self.token_response_type,
            http_client=self.http_client,
            timeout=self.timeout,
        )
