"""Configuration management using Pydantic models."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import DEFAULT_BASE_URL, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT_SECONDS
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("data/config.yaml")
CONFIG_PATH_ENV = "MAL_LIST_CONFIG"

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


class MALConfig(BaseModel):
    """MyAnimeList account configuration."""
    username: Optional[str] = None
    password: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL


class HTTPConfig(BaseModel):
    """Transport settings."""
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)


class Settings(BaseModel):
    """Root configuration model."""
    mal: MALConfig = Field(default_factory=MALConfig)
    http: HTTPConfig = Field(default_factory=HTTPConfig)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        """Normalise and validate the log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return level


def get_config_path(path: Union[str, Path, None] = None) -> Path:
    """Resolve the config file path from the argument, environment, or default."""
    if path:
        return Path(path)
    if os.environ.get(CONFIG_PATH_ENV):
        return Path(os.environ[CONFIG_PATH_ENV])
    return DEFAULT_CONFIG_PATH


def load_settings(path: Union[str, Path, None] = None) -> Settings:
    """Load configuration from YAML, applying MAL_USERNAME / MAL_PASSWORD overrides."""
    config_path = get_config_path(path)
    raw_config: dict = {}

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                raw_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"❌ Failed to read config {config_path}: {e}")
            raise ConfigError(f"failed to read {config_path}: {e}") from e
        if not isinstance(raw_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping at the top level")
        logger.debug(f"Loaded configuration from {config_path}")
    else:
        logger.debug(f"No config file at {config_path}, using defaults")

    mal_section = dict(raw_config.get("mal") or {})
    if os.environ.get("MAL_USERNAME"):
        mal_section["username"] = os.environ["MAL_USERNAME"]
    if os.environ.get("MAL_PASSWORD"):
        mal_section["password"] = os.environ["MAL_PASSWORD"]
    raw_config["mal"] = mal_section

    try:
        return Settings(**raw_config)
    except ValidationError as e:
        logger.error(f"❌ Invalid configuration in {config_path}: {e}")
        raise ConfigError(f"invalid configuration in {config_path}: {e}") from e
