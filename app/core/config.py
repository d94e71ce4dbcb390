"""Service settings, read from the environment and an optional .env file."""

from datetime import timedelta
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # HTTP server (used by `offer-normalizer-serve`)
    HOST: str = "0.0.0.0"
    PORT: int = Field(default=8080, ge=1, le=65535)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_STREAM: Literal["stdout", "stderr"] = "stdout"
    LOG_SERIALIZE: bool = False  # one JSON object per line
    LOG_FILE_ENABLED: bool = True
    LOG_DIR: str = "logs"
    SLACK_WEBHOOK_URL: str | None = None

    # Dedupe retention: offers live for the TTL, swept once per interval
    DEDUPE_TTL_SECONDS: int = Field(default=10 * 60, gt=0)
    DEDUPE_SWEEP_INTERVAL_SECONDS: float = Field(default=60, gt=0)
    DEDUPE_JANITOR_ENABLED: bool = True

    # None = docs follow ENV
    DOCS_ENABLED: bool | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        return self.ENV == "dev"

    @property
    def debug_enabled(self) -> bool:
        """Debug mode is only enabled in development."""
        return self.is_development

    @property
    def effective_log_level(self) -> str:
        """Production never logs below INFO."""
        if self.is_production and self.LOG_LEVEL in {"TRACE", "DEBUG"}:
            return "INFO"
        return self.LOG_LEVEL

    @property
    def docs_enabled(self) -> bool:
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development

    @property
    def dedupe_ttl(self) -> timedelta:
        return timedelta(seconds=self.DEDUPE_TTL_SECONDS)


settings = Settings()
