"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.intent.llm_parser import DEFAULT_API_BASE, DEFAULT_MODEL, LLMConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")

    llm_enabled: bool = Field(default=False, alias="LLM_ENABLED")
    llm_api_key: str | None = Field(default=None, alias="LLM_API_KEY")
    llm_model: str = Field(default=DEFAULT_MODEL, alias="LLM_MODEL")
    llm_api_base: str = Field(default=DEFAULT_API_BASE, alias="LLM_API_BASE")
    llm_timeout_s: float | None = Field(default=None, alias="LLM_TIMEOUT_S")

    sensitive_guard: bool = Field(default=True, alias="SENSITIVE_GUARD")
    log_level: str | None = Field(default=None, alias="LOG_LEVEL")
    max_sessions: int = Field(default=10_000, ge=1, alias="MAX_SESSIONS")

    @field_validator("llm_timeout_s")
    @classmethod
    def validate_timeout(cls, value: float | None) -> float | None:
        """Reject non-positive timeouts; leave unset for no timeout."""

        if value is not None and value <= 0:
            raise ValueError("LLM_TIMEOUT_S must be positive")
        return value

    @model_validator(mode="after")
    def validate_llm_config(self) -> Settings:
        """Validate the optional remote parser configuration.

        If remote parsing is enabled, an API key must be provided.
        """

        if self.llm_enabled and not self.llm_api_key:
            raise ValueError("LLM_API_KEY is required when LLM_ENABLED=true")
        return self

    def llm_config(self) -> LLMConfig | None:
        """Remote parser config, or `None` when remote parsing is disabled."""

        if not self.llm_enabled or not self.llm_api_key:
            return None
        return LLMConfig(
            api_key=self.llm_api_key,
            model=self.llm_model,
            api_base=self.llm_api_base,
            timeout_s=self.llm_timeout_s,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        # Raising here is fine: caller can decide how to handle startup errors.
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
