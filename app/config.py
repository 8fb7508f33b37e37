# app/config.py
"""
Application settings, read from environment variables (or a local .env file).
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_title: str = "Companies & Invoices API"
    app_version: str = "0.1.0"

    database_url: str = Field(
        default="sqlite:///db.sqlite",
        description="SQLAlchemy URL; the default is a file in the project root",
    )
    db_echo: bool = False

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log_level '{v}'")
        return upper


@lru_cache
def get_settings() -> Settings:
    return Settings()
