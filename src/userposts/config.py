"""
config.py — pydantic-settings Settings class.

All environment variables for userposts are declared here, prefixed with
USERPOSTS_. Import the `settings` singleton rather than instantiating.

Usage:
    from userposts.config import settings
    print(settings.api_base_url)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_dotenv() -> Path | None:
    """Walk up from CWD to find the nearest .env file."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        candidate = parent / ".env"
        if candidate.is_file():
            return candidate
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="USERPOSTS_",
        env_file=_find_dotenv() or ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Remote API
    # -------------------------------------------------------------------------
    api_base_url: str = Field(default="https://jsonplaceholder.typicode.com")
    users_path: str = Field(default="/users")
    posts_path: str = Field(default="/posts")

    # -------------------------------------------------------------------------
    # HTTP behaviour
    # -------------------------------------------------------------------------
    max_attempts: int = Field(default=3, ge=1)
    http_timeout: float = Field(default=30.0, gt=0)

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "console"] = Field(default="console")

    @field_validator("api_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v

    def resource_url(self, path: str, base_url: str | None = None) -> str:
        base = (base_url or self.api_base_url).rstrip("/")
        return f"{base}/{path.lstrip('/')}"


# ---------------------------------------------------------------------------
# Module-level singleton — import this everywhere
# ---------------------------------------------------------------------------
settings = Settings()
