"""Client configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from ``JUPITER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JUPITER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_path: str = Field(
        default="https://quote-api.jup.ag/v6",
        description="Base URL of the swap API; paths are appended to it",
    )
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    api_key: Optional[str] = Field(default=None, description="Sent as x-api-key when set")
    debug: bool = Field(default=False, description="Enable debug logging in the CLI")

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "base_path": self.base_path,
            "timeout": self.timeout,
            "api_key": "***" if self.api_key else "(not set)",
            "debug": self.debug,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
