"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod
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
        Runtime environment flag; maps from `CARDHARVEST_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    default_title : str
        Set title used when a document carries no recoverable title.
        Maps from `CARDHARVEST_DEFAULT_TITLE`.
    html_parser : str
        BeautifulSoup tree builder name ("html.parser", "lxml", ...).
        Maps from `CARDHARVEST_HTML_PARSER`.
    """

    environment: EnvName = Field(default="dev", alias="CARDHARVEST_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    default_title: str = Field(default="Imported Set", alias="CARDHARVEST_DEFAULT_TITLE")
    html_parser: str = Field(default="html.parser", alias="CARDHARVEST_HTML_PARSER")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`. Extractors call this at use time rather than holding on to
    the module-level singleton, so a cleared cache is picked up immediately.
    """
    os.environ.setdefault("CARDHARVEST_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "cardharvest") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
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
