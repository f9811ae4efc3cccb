"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App settings
    app_name: str = "Simple Blog"
    debug: bool = False
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )
    secret_key: str = Field(validation_alias=AliasChoices("SECRET_KEY", "JWTSECRET"))

    # Database
    database_url: str = "sqlite+aiosqlite:///./simple_blog.db"

    # Session token
    jwt_algorithm: str = "HS256"
    session_ttl_seconds: int = 60 * 60 * 24
    session_cookie_name: str = "ourSimpleApp"

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is secure."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug:
            if len(v) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production mode")
            if v in ("change-me-in-production", "secret", "password", "changeme"):
                raise ValueError("SECRET_KEY must not be a common weak value")

        return v

    @field_validator("session_ttl_seconds")
    @classmethod
    def validate_session_ttl(cls, v: int) -> int:
        """Validate the session lifetime is positive."""
        if v <= 0:
            raise ValueError("SESSION_TTL_SECONDS must be positive")
        return v

    @property
    def is_production(self) -> bool:
        """Whether the app runs in a production environment."""
        return self.environment.strip().lower() == "production"

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        if self.is_production and self.database_url.startswith("sqlite"):
            warnings.append("DATABASE_URL points at SQLite in production")

        if not self.is_production:
            warnings.append(
                f"ENVIRONMENT is '{self.environment}' - session cookie is sent without Secure flag"
            )

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
