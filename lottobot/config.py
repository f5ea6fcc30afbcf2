"""Application settings loaded from environment variables."""

import os
from pathlib import Path

from apscheduler.triggers.cron import CronTrigger
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class ConfigurationError(Exception):
    """Required startup configuration is missing."""


class Settings(BaseSettings):
    """Bot configuration. All values come from environment variables."""

    # Telegram
    telegram_bot_token: str = Field(default="")

    # Ingestion
    use_webhook: bool = Field(default=False)
    webhook_url: str = Field(default="")
    port: int = Field(default=3000)

    # Reminders
    reminder_cron: str = Field(default="0 9 * * *")
    reminder_tz: str = Field(default="")

    # Lottery backend / web app
    backend_base: str = Field(default="https://kiya-lotteryv1-5.onrender.com")
    frontend_base: str = Field(default="https://kiya-lottery-v1-phcv.vercel.app")

    # Storage
    users_file: Path = Field(default=Path("data/users.json"))

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @field_validator("use_webhook", mode="before")
    @classmethod
    def _parse_use_webhook(cls, value):
        # Only an explicit "true" turns webhook mode on; blank or unknown means polling.
        if isinstance(value, str):
            return value.strip().lower() in {"true", "1", "yes", "on"}
        return value

    @field_validator("port", mode="before")
    @classmethod
    def _blank_port_is_default(cls, value):
        if isinstance(value, str) and not value.strip():
            return cls.model_fields["port"].default
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    def check_required(self) -> None:
        """Raise ConfigurationError if the bot cannot start safely."""
        if not self.telegram_bot_token.strip():
            raise ConfigurationError("TELEGRAM_BOT_TOKEN is required")
        if self.use_webhook and not self.webhook_url.strip():
            raise ConfigurationError("USE_WEBHOOK=true but WEBHOOK_URL is not set")
        try:
            CronTrigger.from_crontab(self.reminder_cron, timezone=self.reminder_tz or None)
        except (ValueError, KeyError) as exc:
            raise ConfigurationError(
                f"Invalid reminder schedule (REMINDER_CRON='{self.reminder_cron}', "
                f"REMINDER_TZ='{self.reminder_tz}'): {exc}"
            ) from exc

    @property
    def webhook_path(self) -> str:
        """Secret-bearing path Telegram posts updates to."""
        return f"/bot{self.telegram_bot_token}"

    @property
    def mode(self) -> str:
        return "webhook" if self.use_webhook else "polling"


def load_settings(**overrides) -> Settings:
    """Build Settings, turning validation errors into ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


# An invalid environment must not break imports; main() reports settings_error and exits.
settings_error: ConfigurationError | None = None
try:
    settings = load_settings()
except ConfigurationError as exc:
    settings = Settings.model_construct()
    settings_error = exc
