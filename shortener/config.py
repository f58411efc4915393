"""Configuration for the URL shortener service.

Values come from environment variables or a local ``.env`` file and are read
once through ``get_settings()``.

``BASE_URL`` is the prefix of every short URL handed out, so it is trimmed
and always ends with ``/``; a blank value falls back to the default::

    BASE_URL="  https://sho.rt  "   ->  "https://sho.rt/"
    BASE_URL="https://sho.rt/s/"   ->  "https://sho.rt/s/"
    BASE_URL="   "               ->  "http://localhost:8080/"
"""

__all__ = ["DEFAULT_BASE_URL", "DEFAULT_PORT", "Settings", "get_settings"]

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 8080
DEFAULT_BASE_URL = f"http://localhost:{DEFAULT_PORT}/"


class Settings(BaseSettings):
    APP_NAME: str = "url-shortener"
    APP_ENV: str = "development"

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = DEFAULT_PORT

    # Prefix for every short URL handed out by POST /shorten
    BASE_URL: str = DEFAULT_BASE_URL

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    @field_validator("BASE_URL")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            return DEFAULT_BASE_URL
        if not v.endswith("/"):
            v += "/"
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
