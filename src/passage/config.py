"""Client configuration loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from passage.oauth_client import OAuth2Client
from passage.services.tokens import AuthType


class OAuth2Settings(BaseSettings):
    """OAuth 2.0 client settings read from ``OAUTH2_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTH2_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    client_id: str = Field(..., description="OAuth client ID")
    client_secret: SecretStr | None = Field(None, description="OAuth client secret")
    auth_url: str = Field(..., description="Authorization endpoint URL")
    token_url: str | None = Field(None, description="Token endpoint URL")
    redirect_url: str | None = Field(None, description="Redirection endpoint URL")
    scopes: str = Field(
        default="", description="Space or comma separated list of scopes to request"
    )
    auth_type: Literal["basic_auth", "request_body"] = Field(
        default="basic_auth", description="Token endpoint client authentication"
    )
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds", gt=0)

    @property
    def scope_list(self) -> list[str]:
        return [s for s in self.scopes.replace(",", " ").split() if s]

    def build_client(self) -> OAuth2Client:
        """Build an ``OAuth2Client`` from these settings."""
        return OAuth2Client(
            client_id=self.client_id,
            client_secret=self.client_secret,
            auth_url=self.auth_url,
            token_url=self.token_url,
            auth_type=AuthType(self.auth_type),
            scopes=tuple(self.scope_list),
            redirect_url=self.redirect_url,
            timeout=self.timeout,
        )
