"""Authorization request construction and callback parsing.

Builds authorization endpoint URLs for the authorization code and implicit
grants (RFC 6749 Sections 4.1.1 and 4.2.1) and parses the redirect that
comes back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, urlsplit, urlunsplit

from passage.helpers import form_urlencode, join_space_delimited
from passage.models.errors import AuthorizationCallbackError
from passage.models.flow import AuthorizationResponse
from passage.models.values import AuthorizationCode, CsrfToken, ResponseType

if TYPE_CHECKING:
    from passage.oauth_client import OAuth2Client

logger = logging.getLogger(__name__)

RESPONSE_TYPE_CODE = ResponseType("code")
RESPONSE_TYPE_TOKEN = ResponseType("token")


def build_authorization_url(
    client: OAuth2Client,
    response_type: ResponseType,
    state: CsrfToken | None = None,
    extra_params: Iterable[tuple[str, str]] = (),
) -> str:
    """Build the authorization endpoint URL for a client.

    Parameters are appended in a fixed order: ``response_type``,
    ``client_id``, ``redirect_uri``, ``scope``, ``state``, then
    ``extra_params`` as given. Query parameters already present on the
    endpoint are kept in front.

    Args:
        client: Client configuration supplying endpoint and identity
        response_type: ``code`` or ``token``
        state: CSRF state to round-trip, or None to omit it
        extra_params: Extension parameters such as the PKCE pair

    Returns:
        The complete authorization URL
    """
    params: list[tuple[str, str]] = [
        ("response_type", response_type),
        ("client_id", client.client_id),
    ]

    if client.redirect_url is not None:
        params.append(("redirect_uri", client.redirect_url))

    if client.scopes:
        params.append(("scope", join_space_delimited(client.scopes)))

    if state is not None:
        params.append(("state", state.secret()))

    params.extend(extra_params)

    parts = urlsplit(client.auth_url)
    query = form_urlencode(params)
    if parts.query:
        query = f"{parts.query}&{query}"

    logger.debug(
        f"Built authorization URL for client {client.client_id} "
        f"(response_type={response_type}, state={state is not None})"
    )

    return urlunsplit(parts._replace(query=query))


def parse_authorization_callback(callback_url: str) -> AuthorizationResponse:
    """Parse OAuth callback URL into AuthorizationResponse.

    Args:
        callback_url: Full callback URL from authorization server

    Returns:
        AuthorizationResponse: Parsed callback parameters

    Raises:
        AuthorizationCallbackError: If URL is malformed
    """
    try:
        parsed = urlsplit(callback_url)
        query_params = parse_qs(parsed.query)
    except ValueError as e:
        raise AuthorizationCallbackError(f"Failed to parse callback URL: {e}") from e

    def get_single_param(key: str) -> str | None:
        values = query_params.get(key, [])
        return values[0] if values else None

    code = get_single_param("code")

    return AuthorizationResponse(
        code=AuthorizationCode(code) if code is not None else None,
        state=get_single_param("state"),
        error=get_single_param("error"),
        error_description=get_single_param("error_description"),
        error_uri=get_single_param("error_uri"),
    )
