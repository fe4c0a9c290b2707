"""Tests for token response parsing (RFC 6749 Section 5.1)."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from passage.models.tokens import StandardTokenResponse, TokenResponse, TokenType
from passage.models.values import AccessToken, RefreshToken, Scope


class TestStandardTokenResponse:
    def test_minimal_response(self):
        # Act
        token = StandardTokenResponse.model_validate_json(
            '{"access_token":"abc","token_type":"bearer"}'
        )

        # Assert
        assert isinstance(token, TokenResponse)
        assert token.access_token == AccessToken("abc")
        assert token.token_type == TokenType.BEARER
        assert token.expires_in is None
        assert token.refresh_token is None
        assert token.scopes is None

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("bearer", TokenType.BEARER),
            ("Bearer", TokenType.BEARER),
            ("BEARER", TokenType.BEARER),
            ("mac", TokenType.MAC),
            ("MAC", TokenType.MAC),
        ],
    )
    def test_token_type_is_case_insensitive(self, raw, expected):
        # Act
        token = StandardTokenResponse.model_validate(
            {"access_token": "abc", "token_type": raw}
        )

        # Assert
        assert token.token_type == expected

    def test_unknown_token_type_is_rejected(self):
        # Act & Assert
        with pytest.raises(ValidationError):
            StandardTokenResponse.model_validate(
                {"access_token": "abc", "token_type": "pop"}
            )

    @pytest.mark.parametrize(
        "payload",
        [
            {"token_type": "bearer"},
            {"access_token": "abc"},
            {"access_token": None, "token_type": "bearer"},
        ],
    )
    def test_required_fields(self, payload):
        # Act & Assert
        with pytest.raises(ValidationError):
            StandardTokenResponse.model_validate(payload)

    def test_full_response(self):
        # Act
        token = StandardTokenResponse.model_validate_json(
            '{"access_token":"abc","token_type":"Bearer","expires_in":3600,'
            '"refresh_token":"rrr","scope":"read write"}'
        )

        # Assert
        assert token.expires_in == timedelta(seconds=3600)
        assert token.refresh_token == RefreshToken("rrr")
        assert token.scopes == [Scope("read"), Scope("write")]
        assert all(isinstance(scope, Scope) for scope in token.scopes)

    def test_null_scope_means_not_reported(self):
        # Act
        token = StandardTokenResponse.model_validate_json(
            '{"access_token":"abc","token_type":"bearer","scope":null}'
        )

        # Assert
        assert token.scopes is None

    @pytest.mark.parametrize("expires_in", ['"3600"', "-1", "1.5", "true"])
    def test_expires_in_must_be_integer_seconds(self, expires_in):
        # Act & Assert
        with pytest.raises(ValidationError):
            StandardTokenResponse.model_validate_json(
                '{"access_token":"abc","token_type":"bearer",'
                f'"expires_in":{expires_in}}}'
            )

    def test_expires_in_beyond_timedelta_range_is_rejected(self):
        # Act & Assert
        with pytest.raises(ValidationError):
            StandardTokenResponse.model_validate_json(
                '{"access_token":"abc","token_type":"bearer",'
                '"expires_in":100000000000000}'
            )

    @pytest.mark.parametrize("value", ['"x y"', "42"])
    def test_extension_scopes_key_is_ignored(self, value):
        # Act
        token = StandardTokenResponse.model_validate_json(
            f'{{"access_token":"abc","token_type":"bearer","scopes":{value}}}'
        )

        # Assert
        assert token.scopes is None

    def test_wire_dump_redacts_secrets(self):
        # Arrange
        token = StandardTokenResponse.model_validate(
            {
                "access_token": "abc",
                "token_type": "bearer",
                "expires_in": 60,
                "refresh_token": "rrr",
                "scope": "read write",
            }
        )

        # Act
        wire = token.to_wire()

        # Assert
        assert wire == {
            "access_token": "AccessToken([redacted])",
            "token_type": "bearer",
            "expires_in": 60,
            "refresh_token": "RefreshToken([redacted])",
            "scope": "read write",
        }

    def test_repr_does_not_leak_tokens(self):
        # Arrange
        token = StandardTokenResponse.model_validate(
            {
                "access_token": "sekrit-access",
                "token_type": "bearer",
                "refresh_token": "sekrit-refresh",
            }
        )

        # Act
        rendered = repr(token)

        # Assert
        assert "sekrit" not in rendered
