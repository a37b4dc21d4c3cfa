"""Configuration for the GAS Proxy Service.

Uses Pydantic settings for environment-based configuration. Variable names
match the deployment environment of the proxy (no prefix).
"""

from __future__ import annotations

from pathlib import Path

from proxy_service_libs.config_enums import Environment
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProxySettings(BaseSettings):
    """Configuration settings for the GAS Proxy Service.

    Built once at startup and never mutated afterwards.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Service identity
    SERVICE_NAME: str = "gas-proxy-service"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(default=3000, description="HTTP server port")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Upstream action endpoint
    GAS_URL: str = Field(description="Apps Script web app URL receiving every action")

    # Asset host (GitHub contents API)
    GITHUB_API_TOKEN: SecretStr | None = Field(
        default=None, description="Token used for image uploads"
    )
    GITHUB_OWNER: str | None = Field(default=None, description="Owner of the asset repository")
    GITHUB_REPO: str | None = Field(default=None, description="Asset repository name")
    GITHUB_API_URL: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )
    GITHUB_UPLOAD_DIR: str = Field(
        default="images", description="Repository directory receiving uploads"
    )
    GITHUB_BRANCH: str | None = Field(
        default=None, description="Target branch for uploads (repository default if unset)"
    )

    # Static file serving
    STATIC_DIR: Path = Field(
        default=Path("."),
        description="Directory containing index.html, tools.json and generator.json",
    )

    # Media resolution on /api/{action} responses
    RESOLVE_MEDIA_IN_API_RESPONSES: bool = Field(
        default=True,
        description="Inline PhotoURL images as data URIs in successful action responses",
    )
    MEDIA_FETCH_CONCURRENCY: int = Field(
        default=1, ge=1, le=16, description="Maximum image fetches in flight per payload"
    )
    MEDIA_FETCH_TIMEOUT_SECONDS: float = Field(
        default=15.0, gt=0, description="Timeout for a single image fetch"
    )

    # HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="HTTP client request timeout in seconds",
    )
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="HTTP client connection timeout in seconds",
    )

    # CORS is only enabled when origins are configured
    CORS_ORIGINS: list[str] = Field(default_factory=list, description="Allowed CORS origins")

    @property
    def upload_configured(self) -> bool:
        """True when every GitHub upload setting is present."""
        if self.GITHUB_API_TOKEN is None:
            return False
        token = self.GITHUB_API_TOKEN.get_secret_value()
        return bool(token and self.GITHUB_OWNER and self.GITHUB_REPO)

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT


def load_settings() -> ProxySettings:
    """Read settings from the environment.

    Raises:
        pydantic.ValidationError: When GAS_URL is missing or a value is invalid
    """
    return ProxySettings()  # type: ignore[call-arg]
