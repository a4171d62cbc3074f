"""restspine configuration.

Library settings loaded from environment variables with RESTSPINE_ prefix.

Example:
    >>> from restspine.core.config import get_settings
    >>> settings = get_settings(log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.max_attempts
    5
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings.

    Loads from environment variables with RESTSPINE_ prefix.

    Example:
        >>> from restspine.core.config import Settings
        >>> s = Settings(request_timeout=10.0)
        >>> s.request_timeout
        10.0
        >>> s.min_retry_delay, s.max_retry_delay
        (0.5, 5.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Enable debug-only plugins")

    # Transport
    request_timeout: float = Field(default=30.0, gt=0.0, description="Default httpx timeout")
    user_agent: str = Field(default="restspine/0.1", description="User-Agent of the default transport")

    # 429 retry policy
    max_attempts: int = Field(default=5, ge=1, description="Total attempts including the first")
    min_retry_delay: float = Field(default=0.5, ge=0.0)
    max_retry_delay: float = Field(default=5.0, ge=0.0)

    @model_validator(mode="after")
    def _check_delay_bounds(self) -> Settings:
        if self.min_retry_delay > self.max_retry_delay:
            raise ValueError("min_retry_delay must not exceed max_retry_delay")
        return self


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from restspine.core.config import get_settings
        >>> get_settings(debug=True).debug
        True
    """
    return Settings(**overrides)


__all__ = [
    "Settings",
    "get_settings",
]
