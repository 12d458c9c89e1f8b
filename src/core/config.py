"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Sadaora API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    api_prefix: str = Field(default="/api")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/sadaora",
        description="PostgreSQL connection URL with asyncpg driver",
    )
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)

    # Identity provider
    identity_jwks_url: str = Field(
        default="",
        description="JWKS endpoint used to verify RS256/ES256 session tokens",
    )
    identity_api_url: str = Field(
        default="https://api.clerk.com/v1",
        description="Backend user API of the identity provider",
    )
    identity_secret_key: str = Field(
        default="",
        description="Secret key for the identity provider backend API (server-side only)",
    )
    identity_timeout_seconds: float = Field(default=10.0)

    # JWT Authentication (HS256 for local tokens and tests)
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key for HS256 token signing",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30)

    # Avatar storage (S3)
    aws_region: str = Field(default="us-east-1")
    aws_access_key_id: str = Field(default="")
    aws_secret_access_key: str = Field(default="")
    aws_s3_bucket_name: str = Field(default="")
    avatar_key_prefix: str = Field(default="profile-images")

    # Feed
    default_page_size: int = Field(default=10)
    max_page_size: int = Field(default=100)
    notification_list_limit: int = Field(default=50)

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )
    trust_forwarded_for: bool = Field(
        default=False,
        description="Key rate limits on the first X-Forwarded-For hop (behind a trusted proxy)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed origins",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console", description="'json' or 'console'")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosted Postgres providers hand out a plain ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
