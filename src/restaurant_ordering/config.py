"""Application configuration via pydantic-settings.

Reads from environment variables and a .env file in the working directory.
Every setting has a default, so the CLI runs with no environment at all.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Menu ---
    menu_json_path: str = str(PACKAGE_DIR / "menus" / "swads_delight.json")

    # --- Session ---
    intro_pause_seconds: float = Field(default=1.0, ge=0.0)
    recursion_limit: int = Field(default=10_000, ge=25)

    # --- Logging ---
    log_level: str = "WARNING"
    log_file: str | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance (created once)."""
    return Settings()
