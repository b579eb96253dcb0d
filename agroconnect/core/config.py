"""
Core configuration module using Pydantic Settings.
Supports environment variables and .env files.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )

    # Application
    app_name: str = Field(default="AgroConnect", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Storage
    storage_backend: str = Field(default="sql", alias="STORAGE_BACKEND")  # "sql" or "memory"
    database_url: str = Field(
        default="sqlite:///./data/agroconnect.db",
        alias="DATABASE_URL"
    )
    db_echo: bool = Field(default=False, alias="DB_ECHO")

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="your-secret-key-change-this-in-production",
        alias="JWT_SECRET_KEY"
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_access_token_expire_minutes: int = Field(default=24 * 60, alias="JWT_ACCESS_TOKEN_EXPIRE_MINUTES")

    # Security
    bcrypt_rounds: int = Field(default=12, alias="BCRYPT_ROUNDS")
    cors_origins: list[str] = Field(
        default=["http://localhost:5000", "http://localhost:5173"],
        alias="CORS_ORIGINS"
    )

    # Catalog
    product_categories: list[str] = Field(
        default=["crops", "tools", "medications"],
        alias="PRODUCT_CATEGORIES"
    )
    default_latest_limit: int = Field(default=6, alias="DEFAULT_LATEST_LIMIT")
    default_trusted_sellers_limit: int = Field(default=6, alias="DEFAULT_TRUSTED_SELLERS_LIMIT")

    # Weather (OpenWeatherMap)
    openweather_api_key: str = Field(default="demo_key", alias="OPENWEATHER_API_KEY")
    openweather_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        alias="OPENWEATHER_URL"
    )
    weather_default_location: str = Field(default="Accra", alias="WEATHER_DEFAULT_LOCATION")
    weather_country_code: str = Field(default="GH", alias="WEATHER_COUNTRY_CODE")
    weather_timeout_seconds: float = Field(default=5.0, alias="WEATHER_TIMEOUT_SECONDS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    # Rate Limiting
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    auth_rate_limit: str = Field(default="20/minute", alias="AUTH_RATE_LIMIT")

    # Sample data
    seed_sample_data: bool = Field(default=False, alias="SEED_SAMPLE_DATA")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Settings used when no explicit instance is handed to the app factory."""
    return settings
