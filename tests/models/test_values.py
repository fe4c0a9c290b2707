import pytest

from passage.models.values import (
    AccessToken,
    AuthorizationCode,
    AuthUrl,
    ClientId,
    ClientSecret,
    CsrfToken,
    PkceCodeVerifier,
    RedirectUrl,
    RefreshToken,
    ResourceOwnerPassword,
    Scope,
    TokenUrl,
)
from passage.oauth_client import OAuth2Client

SECRET_TYPES = [
    ClientSecret,
    AccessToken,
    RefreshToken,
    AuthorizationCode,
    CsrfToken,
    PkceCodeVerifier,
    ResourceOwnerPassword,
]


class TestSecretValues:
    @pytest.mark.parametrize("secret_type", SECRET_TYPES)
    @pytest.mark.parametrize("raw", ["hunter2", "", "[redacted]", "a'b\"c"])
    def test_repr_and_str_are_redacted(self, secret_type, raw) -> None:
        # Arrange
        secret = secret_type(raw)
        expected = f"{secret_type.__name__}([redacted])"

        # Act & Assert
        assert repr(secret) == expected
        assert str(secret) == expected
        assert f"{secret}" == expected
        assert f"{secret!r}" == expected

    def test_secret_accessor_returns_raw_value(self) -> None:
        # Act & Assert
        assert ClientSecret("hunter2").secret() == "hunter2"

    def test_equality_is_structural(self) -> None:
        # Act & Assert
        assert AccessToken("abc") == AccessToken("abc")
        assert AccessToken("abc") != AccessToken("abd")
        assert AccessToken("abc") != RefreshToken("abc")

    def test_client_repr_does_not_leak_secret(self) -> None:
        # Arrange
        client = OAuth2Client(
            client_id="cid",
            client_secret="hunter2",
            auth_url="http://authorize",
        )

        # Act
        rendered = repr(client)

        # Assert
        assert "hunter2" not in rendered
        assert "ClientSecret([redacted])" in rendered


class TestIdentifiers:
    def test_transparent_access(self) -> None:
        # Arrange
        client_id = ClientId("cid")

        # Act & Assert
        assert client_id == "cid"
        assert str(client_id) == "cid"
        assert client_id.upper() == "CID"
        assert repr(client_id) == "ClientId('cid')"

    def test_equality_is_structural(self) -> None:
        # Act & Assert
        assert Scope("read") == Scope("read")
        assert Scope("read") != Scope("write")

    @pytest.mark.parametrize("url_type", [AuthUrl, TokenUrl, RedirectUrl])
    def test_urls_are_kept_verbatim(self, url_type) -> None:
        # Act
        url = url_type("http://authorize")

        # Assert - no trailing slash added
        assert url == "http://authorize"

    @pytest.mark.parametrize("url_type", [AuthUrl, TokenUrl, RedirectUrl])
    @pytest.mark.parametrize("raw", ["/relative/path", "not a url", ""])
    def test_urls_must_be_absolute(self, url_type, raw) -> None:
        # Act & Assert
        with pytest.raises(ValueError):
            url_type(raw)
