"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from .utils import setup_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class OpenAISettings:
    """Configuration for the chat-completions backend used by the assistant."""

    api_key: Optional[str] = None
    base_url: str = "https://api.openai.com/v1"
    model_name: str = "gpt-4o-mini"
    max_tokens: int = 500
    temperature: float = 0.7
    timeout_seconds: int = 60

    @classmethod
    def from_env(cls) -> "OpenAISettings":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY"),
            base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
            model_name=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            max_tokens=int(os.getenv("OPENAI_MAX_TOKENS", "500")),
            temperature=float(os.getenv("OPENAI_TEMPERATURE", "0.7")),
            timeout_seconds=int(os.getenv("OPENAI_TIMEOUT_SECONDS", "60")),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass
class StorageSettings:
    """Configuration for the local health data store.

    Layout under ``local_root``:

        history_items.json      scored history lines
        metrics_snapshots.json  raw HealthMetrics snapshots
        assistant_replies.json  cached assistant replies
        consent.json            user consent flag
    """

    local_root: str = "data"
    history_retention_days: int = 30
    max_cached_replies: int = 100

    @classmethod
    def from_env(cls) -> "StorageSettings":
        return cls(
            local_root=os.getenv("VITALITY_STORAGE_ROOT", "data"),
            history_retention_days=int(os.getenv("VITALITY_HISTORY_RETENTION_DAYS", "30")),
            max_cached_replies=int(os.getenv("VITALITY_MAX_CACHED_REPLIES", "100")),
        )


@dataclass
class AppSettings:
    """General behaviour switches."""

    assistant_cache_hours: int = 24
    use_fallback_assistant: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppSettings":
        return cls(
            assistant_cache_hours=int(os.getenv("VITALITY_ASSISTANT_CACHE_HOURS", "24")),
            use_fallback_assistant=os.getenv("VITALITY_USE_FALLBACK_ASSISTANT", "true").lower() == "true",
            log_level=os.getenv("VITALITY_LOG_LEVEL", "INFO").upper(),
        )


@dataclass
class Settings:
    openai: OpenAISettings = field(default_factory=OpenAISettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    app: AppSettings = field(default_factory=AppSettings)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Load settings from the process environment and an optional .env file.

    Values already present in the environment win over the .env file.
    ``VITALITY_LOG_LEVEL`` is applied to the package logger when valid.
    """
    load_dotenv(env_file, override=False)
    settings = Settings(
        openai=OpenAISettings.from_env(),
        storage=StorageSettings.from_env(),
        app=AppSettings.from_env(),
    )
    if settings.app.log_level in LOG_LEVELS:
        setup_logging(settings.app.log_level)
    return settings


def validate_settings(settings: Settings) -> List[str]:
    """Return a list of configuration problems. Empty means usable."""
    errors: List[str] = []

    if not settings.openai.is_configured and not settings.app.use_fallback_assistant:
        errors.append(
            "OPENAI_API_KEY is not set and the rule-based fallback assistant is disabled."
        )
    if settings.openai.max_tokens <= 0:
        errors.append("OPENAI_MAX_TOKENS must be positive.")
    if not 0.0 <= settings.openai.temperature <= 2.0:
        errors.append("OPENAI_TEMPERATURE must be between 0 and 2.")
    if settings.storage.history_retention_days <= 0:
        errors.append("VITALITY_HISTORY_RETENTION_DAYS must be positive.")
    if settings.storage.max_cached_replies <= 0:
        errors.append("VITALITY_MAX_CACHED_REPLIES must be positive.")
    if settings.app.assistant_cache_hours < 0:
        errors.append("VITALITY_ASSISTANT_CACHE_HOURS must not be negative.")
    if settings.app.log_level not in LOG_LEVELS:
        errors.append(f"VITALITY_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}.")

    return errors
