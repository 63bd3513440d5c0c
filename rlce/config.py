"""
Configuration management using pydantic-settings.
Loads environment variables from .env file.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI Configuration (only needed for /api/extract)
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"

    # Application Settings
    app_name: str = "RLCE"
    app_version: str = "0.1.0"
    debug: bool = False

    # Source documents
    source_encoding: str = "utf-8"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
