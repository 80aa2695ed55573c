"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with PRESSROOM_ prefix.
No config files; the environment is the single source (12-factor style).
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All app configuration. Set via PRESSROOM_* env vars."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./pressroom.db"

    # Redis (optional, backs rate limiting)
    redis_url: str = "redis://localhost:6379/0"

    # Server
    environment: str = "development"
    debug: bool = False
    port: int = 8000
    api_prefix: str = "/api"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Auth
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    password_min_length: int = Field(default=8, ge=1)

    # Rate limiting
    rate_limit_rpm: int = 100  # requests per minute per IP
    rate_limit_auth_rpm: int = 10  # stricter limit for login/register

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {"env_prefix": "PRESSROOM_"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Refuse development-only defaults outside development/test."""
        if self.environment in ("development", "test"):
            return self
        if self.database_url.startswith("sqlite"):
            raise ValueError(
                "PRESSROOM_DATABASE_URL must point at a server database "
                f"(got SQLite) when PRESSROOM_ENVIRONMENT={self.environment!r}."
            )
        if self.bcrypt_rounds < 10:
            raise ValueError(
                "PRESSROOM_BCRYPT_ROUNDS must be at least 10 outside "
                "development and test environments."
            )
        return self


# Singleton, import this everywhere
settings = Settings()
