"""Middleware configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="APIERROR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_name: str = "api-error-middleware"
    debug: bool = False
    log_level: str = "INFO"

    # Error responses
    default_status: int = 400
    fallback_message: str = "An unknown error occurred"
    not_found_identifier: str = "modelNotFound"

    @field_validator("default_status")
    @classmethod
    def check_status(cls, v: int) -> int:
        if not 100 <= v <= 599:
            raise ValueError("default_status must be a valid HTTP status code")
        return v

    @field_validator("fallback_message")
    @classmethod
    def check_fallback(cls, v: str) -> str:
        if not v:
            raise ValueError("fallback_message must not be empty")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
