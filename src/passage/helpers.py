"""Encoding helpers shared by the authorization and token request builders."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote_plus

# application/x-www-form-urlencoded leaves only these bytes unescaped
# besides ASCII alphanumerics. urllib also keeps "~", so it is escaped here.
_FORM_SAFE = "*-._"


def url_encode(value: str) -> str:
    """Percent-encode a single value with form-urlencoded rules.

    Spaces become ``+`` and every byte outside ``A-Za-z0-9*-._`` is escaped.
    """
    return quote_plus(value, safe=_FORM_SAFE).replace("~", "%7E")


def form_urlencode(pairs: Iterable[tuple[str, str]]) -> str:
    """Serialize ordered key/value pairs as a form-urlencoded string."""
    return "&".join(f"{url_encode(key)}={url_encode(value)}" for key, value in pairs)


def join_space_delimited(values: Iterable[str]) -> str:
    return " ".join(values)


def split_space_delimited(value: str | None) -> list[str] | None:
    """Split a space-delimited wire value (e.g. ``scope``) into its entries.

    ``None`` stays ``None`` so an absent field is distinguishable from an
    empty one.
    """
    if value is None:
        return None
    return value.split(" ")
