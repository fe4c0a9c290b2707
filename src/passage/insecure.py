"""Authorization URLs without CSRF protection.

These omit the ``state`` parameter, leaving the redirect open to cross-site
request forgery. They live in a separate module so that using them is an
explicit, visible choice at the import site.
"""

from __future__ import annotations

from collections.abc import Iterable

from passage.oauth_client import OAuth2Client
from passage.services.flow import (
    RESPONSE_TYPE_CODE,
    RESPONSE_TYPE_TOKEN,
    build_authorization_url,
)


def authorize_url(
    client: OAuth2Client, extra_params: Iterable[tuple[str, str]] = ()
) -> str:
    """Authorization code grant URL with no ``state`` parameter."""
    return build_authorization_url(client, RESPONSE_TYPE_CODE, None, extra_params)


def authorize_url_implicit(
    client: OAuth2Client, extra_params: Iterable[tuple[str, str]] = ()
) -> str:
    """Implicit grant URL with no ``state`` parameter."""
    return build_authorization_url(client, RESPONSE_TYPE_TOKEN, None, extra_params)
