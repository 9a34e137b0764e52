"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod

Only the composition roots (the API dependency and the CLI) read `settings`.
The LLM client and the explainer receive their configuration explicitly.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `PLAINLY_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    openai_api_key : Optional[str]
        Credential for the completion provider. Maps from `OPENAI_API_KEY`.
        When absent, every explain call fails with `ConfigurationError`.
    openai_base_url : str
        Base URL of the OpenAI-compatible endpoint; maps from `OPENAI_BASE_URL`.
    model_alias : str
        Registry alias or concrete model ID; maps from `PLAINLY_MODEL`.
    temperature : Optional[float]
        Sampling temperature override; maps from `PLAINLY_TEMPERATURE`.
        When unset, the model alias's own temperature is used.
    timeout_seconds : float
        Socket timeout of the outbound call; maps from `PLAINLY_TIMEOUT_SECONDS`.
    clarification_enabled : bool
        Whether the model may ask clarifying questions; maps from
        `PLAINLY_CLARIFICATION`.
    """

    environment: EnvName = Field(default="dev", alias="PLAINLY_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    model_alias: str = Field(default="explainer", alias="PLAINLY_MODEL")
    temperature: float | None = Field(default=None, ge=0.0, le=2.0, alias="PLAINLY_TEMPERATURE")
    timeout_seconds: float = Field(default=60.0, gt=0.0, alias="PLAINLY_TIMEOUT_SECONDS")
    clarification_enabled: bool = Field(default=True, alias="PLAINLY_CLARIFICATION")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("PLAINLY_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "plainly") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
