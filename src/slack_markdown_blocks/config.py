"""Library defaults via pydantic-settings.

Values are read from ``SLACK_BLOCKS_*`` environment variables or a ``.env``
file. The conversion and splitting entry points use fixed defaults unless the
caller builds options with ``from_settings()``.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="SLACK_BLOCKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Conversion
    detect_colors: bool = True
    prefer_section_blocks: bool = True

    # Splitting (Slack message limits)
    max_blocks: int = 40
    max_characters: int = 12000
    max_section_characters: int = 3000
    max_header_characters: int = 150


@lru_cache
def get_settings() -> Settings:
    """Return cached settings. Lazy initialization to avoid import-time errors."""
    return Settings()
