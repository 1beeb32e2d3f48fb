"""
IMF Gadget API Configuration Module
Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "IMF Gadget API"
    debug: bool = False

    # Authentication
    jwt_secret: str = Field(..., alias="JWT_SECRET", min_length=32)  # Required, no default
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 1 day
    bcrypt_rounds: int = 10

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "100/15minutes"  # Per client IP

    # CORS
    cors_allow_origins: str = "*"

    # Database
    database_url: str = Field(..., alias="DATABASE_URL")

    # Logging
    log_dir: str = "logs"  # Empty for console-only logging
    log_level: str = "INFO"

    @field_validator("jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Validate that the signing secret is secure."""
        if not v or len(v) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters long")

        # Check for common insecure values, including the legacy fallback
        insecure_values = [
            "my_jwt_secret",
            "change-me",
            "changeme",
            "secret",
            "password",
            "default",
        ]
        lowered = v.lower()
        if any(bad in lowered for bad in insecure_values):
            raise ValueError(
                "JWT_SECRET appears to be insecure. Generate a secure key with: "
                "python -c 'import secrets; print(secrets.token_hex(32))'"
            )

        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience alias
settings = get_settings()
