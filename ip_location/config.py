import os
from logging import getLevelName

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Runtime settings for the IP location service.

    Listening address and upstream endpoint are fixed defaults that callers
    may override in code; only LOG_LEVEL is read from the environment.
    """

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=0, le=65535)
    ip_api_base_url: str = "http://ip-api.com"
    lookup_timeout_seconds: float = Field(default=5.0, gt=0)
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        """Normalize to an upper-case stdlib level name (DEBUG, INFO, WARNING, ...)."""
        level = str(value).strip().upper()
        if not isinstance(getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level


def get_settings() -> Settings:
    """Build Settings, taking the log level from LOG_LEVEL when it is set."""
    log_level = os.getenv("LOG_LEVEL")
    if log_level is None:
        return Settings()
    return Settings(log_level=log_level)
