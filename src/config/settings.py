"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.planner.schema import MAX_STEPS, MIN_STEPS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")
    database_url: str = Field(alias="DATABASE_URL")
    channel_slug: str = Field(alias="CHANNEL_SLUG", min_length=1)

    planner_max_steps: int = Field(default=5, alias="PLANNER_MAX_STEPS")
    max_instruction_length: int = Field(default=1000, alias="MAX_INSTRUCTION_LENGTH", gt=0)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("planner_max_steps")
    @classmethod
    def validate_planner_max_steps(cls, value: int) -> int:
        """Validate the default step ceiling lies in the range the planner supports."""

        if not MIN_STEPS <= value <= MAX_STEPS:
            raise ValueError(f"PLANNER_MAX_STEPS must be between {MIN_STEPS} and {MAX_STEPS}")
        return value


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
