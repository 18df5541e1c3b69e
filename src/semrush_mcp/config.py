"""Environment-backed settings, read once at startup.

A .env file in the working directory is honoured, but never overrides
variables already set in the real environment.
"""

from __future__ import annotations

import logging
import os
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .core.clients.semrush import API_BASE
from .core.errors import ConfigError

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Server settings."""

    api_key: str = Field(min_length=1, description="Semrush API key")
    api_base: str = API_BASE
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read instead of os.environ. When given, no .env
            file is loaded.

    Raises:
        ConfigError: SEMRUSH_API_KEY is missing or blank.
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    api_key = environ.get("SEMRUSH_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("SEMRUSH_API_KEY environment variable is required")

    try:
        settings = Settings(
            api_key=api_key,
            api_base=environ.get("SEMRUSH_API_BASE") or API_BASE,
            log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc

    logger.debug("Loaded settings, API base %s", settings.api_base)
    return settings
