"""OAuth 2.0 token endpoint requests.

Implements RFC 6749 token endpoint interactions: client authentication
(Section 2.3.1), the grant-specific access token requests (Sections 4.1.3,
4.3.2, 4.4.2 and 6) and response handling (Section 5).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Generic, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from passage.helpers import form_urlencode, url_encode
from passage.models.errors import (
    ClientError,
    ErrorResponse,
    OtherError,
    ParseError,
    ServerResponseError,
)
from passage.models.tokens import StandardTokenResponse
from passage.models.values import (
    ClientId,
    ClientSecret,
    PkceCodeVerifier,
    RedirectUrl,
    TokenUrl,
)

logger = logging.getLogger(__name__)

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

T = TypeVar("T")


class AuthType(Enum):
    """How the client authenticates to the token endpoint.

    Defaults to BASIC_AUTH, following RFC 6749 Section 2.3.1.
    """

    REQUEST_BODY = "request_body"
    BASIC_AUTH = "basic_auth"


class TokenRequest(Generic[T]):
    """A single pending token endpoint exchange.

    Created by the ``exchange_*`` methods of ``OAuth2Client``. Extra
    parameters may be added with ``param()`` until ``execute()`` is awaited;
    a request can only be executed once.
    """

    def __init__(
        self,
        *,
        token_url: TokenUrl | None,
        auth_type: AuthType,
        client_id: ClientId,
        client_secret: ClientSecret | None,
        redirect_url: RedirectUrl | None,
        response_type: type[T] = StandardTokenResponse,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.token_url = token_url
        self.auth_type = auth_type
        self.client_id = client_id
        self.redirect_url = redirect_url
        self.response_type = response_type
        self.timeout = timeout
        self.params: list[tuple[str, str]] = []
        self._client_secret = client_secret
        self._http_client = http_client
        self._executed = False

    def param(self, key: str, value: str) -> TokenRequest[T]:
        """Append a form parameter to the request body."""
        if self._executed:
            raise RuntimeError("Token request has already been executed")
        self.params.append((key, value))
        return self

    def set_pkce_verifier(self, verifier: PkceCodeVerifier) -> TokenRequest[T]:
        """Send the PKCE ``code_verifier`` (RFC 7636 Section 4.5)."""
        return self.param("code_verifier", verifier.secret())

    @property
    def grant_type(self) -> str | None:
        for key, value in self.params:
            if key == "grant_type":
                return value
        return None

    def build_request(self) -> tuple[httpx.Request, httpx.BasicAuth | None]:
        """Assemble the HTTP request without sending it.

        Returns:
            Tuple of (request, auth) where auth is set for BASIC_AUTH

        Raises:
            OtherError: If no token endpoint is configured
        """
        if self.token_url is None:
            raise OtherError("token_url must not be `None`")

        form: list[tuple[str, str]] = []
        auth: httpx.BasicAuth | None = None

        if self.auth_type is AuthType.REQUEST_BODY:
            form.append(("client_id", self.client_id))
            if self._client_secret is not None:
                form.append(("client_secret", self._client_secret.secret()))
        else:
            # RFC 6749 Section 2.3.1 requires form-urlencoding the id and secret
            # before they become the Basic username and password.
            username = url_encode(self.client_id)
            password = (
                url_encode(self._client_secret.secret())
                if self._client_secret is not None
                else ""
            )
            auth = httpx.BasicAuth(username, password)

        form.extend(self.params)

        if self.redirect_url is not None:
            form.append(("redirect_uri", self.redirect_url))

        # Always ask for JSON (RFC 6749 Section 5.1).
        headers = {
            "Accept": CONTENT_TYPE_JSON,
            "Content-Type": CONTENT_TYPE_FORM,
        }

        request = httpx.Request(
            "POST",
            self.token_url,
            headers=headers,
            content=form_urlencode(form).encode("ascii"),
        )
        return request, auth

    async def execute(self) -> T:
        """Send the request and parse the token response.

        Returns:
            The parsed token response

        Raises:
            OtherError: If no token endpoint is configured or the body is empty
            ClientError: If the HTTP transport fails
            ServerResponseError: If the server returns an RFC 6749 error
            ParseError: If the response body cannot be parsed
            RuntimeError: If the request was already executed
        """
        if self._executed:
            raise RuntimeError("Token request has already been executed")
        self._executed = True

        request, auth = self.build_request()

        logger.debug(
            f"Requesting token at {self.token_url}: grant_type={self.grant_type}, "
            f"client_id={self.client_id}, auth_type={self.auth_type.value}"
        )

        try:
            response = await self._send(request, auth)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error during token request: {e}")
            raise ClientError(e) from e

        return self._parse_response(response)

    async def _send(
        self, request: httpx.Request, auth: httpx.BasicAuth | None
    ) -> httpx.Response:
        # Token endpoint redirects are never followed.
        if self._http_client is not None:
            return await self._http_client.send(
                request, auth=auth, follow_redirects=False
            )

        async with httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=False
        ) as http_client:
            return await http_client.send(request, auth=auth, follow_redirects=False)

    def _parse_response(self, response: httpx.Response) -> T:
        body = response.content

        if not response.is_success:
            if not body:
                logger.warning(
                    f"Token request failed with {response.status_code} "
                    "and an empty body"
                )
                raise OtherError("Server returned empty error response")

            try:
                error_response = ErrorResponse.model_validate_json(body)
            except ValidationError as e:
                logger.error(
                    f"Unparseable error response from token endpoint "
                    f"({response.status_code})"
                )
                raise ParseError(e, body) from e

            logger.warning(
                f"Token request failed with {response.status_code}: {error_response}"
            )
            raise ServerResponseError(error_response)

        if not body:
            raise OtherError("Server returned empty response body")

        try:
            token_response = TypeAdapter(self.response_type).validate_json(body)
        except ValidationError as e:
            logger.error("Unparseable token response from token endpoint")
            raise ParseError(e, body) from e

        logger.info(f"Token request successful (grant_type={self.grant_type})")
        return token_response
