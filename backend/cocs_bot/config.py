"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REPO_OWNER = "TLC-Community-Survey"
DEFAULT_REPO_NAME = "Survey"


class Settings(BaseSettings):
    """Environment-driven settings."""

    service_name: str = "cocs-bot"
    api_host: str = "0.0.0.0"
    api_port: int = 8787

    discord_bot_token: str | None = None
    discord_channel_id: str | None = None
    discord_api_base: str = "https://discord.com/api/v10"
    discord_timeout_seconds: float = 10.0

    webhook_secret: str | None = None
    github_repo_owner: str | None = None
    github_repo_name: str | None = None
    default_project_name: str = "tlc-survey"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def missing_required(self) -> list[str]:
        """Names of required settings that are unset or empty."""

        missing = []
        if not self.discord_bot_token:
            missing.append("DISCORD_BOT_TOKEN")
        if not self.discord_channel_id:
            missing.append("DISCORD_CHANNEL_ID")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Cached settings accessor."""

    return Settings()
