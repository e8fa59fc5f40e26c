"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="PetMeal", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="sqlite:///./petmeal.db",
        description="SQLAlchemy URL, e.g. postgresql+psycopg2://user@localhost:5432/petmeal",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(default="PetMeal API", description="API documentation title")
    api_description: str = Field(
        default="Pet food catalog and meal log",
        description="API documentation description",
    )

    # Error reporting
    expose_error_details: Optional[bool] = Field(
        default=None,
        description="Include error details in responses (defaults to on outside production)",
    )

    # Listing / pagination
    default_page_size: int = Field(default=100, ge=1, description="Default list limit")
    max_page_size: int = Field(default=500, ge=1, description="Maximum list limit")
    list_cache_control: str = Field(
        default="private, max-age=30, stale-while-revalidate=60",
        description="Cache-Control header sent with list responses",
    )
    meal_counts_follow_archived_filter: bool = Field(
        default=False,
        description="Restrict meal counts to meals of foods matching the archived filter",
    )

    # Validation
    min_meal_date: date = Field(
        default=date(2020, 1, 1), description="Earliest accepted meal date"
    )
    amount_unit_required: bool = Field(
        default=True, description="Require a unit suffix on meal amounts"
    )

    # Authentication
    session_cookie_name: str = Field(
        default="petmeal.session_token", description="Session cookie name"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    def should_expose_error_details(self) -> bool:
        if self.expose_error_details is not None:
            return self.expose_error_details
        return not self.is_production()


# Global settings instance
settings = Settings()
