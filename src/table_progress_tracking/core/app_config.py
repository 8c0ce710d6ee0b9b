"""Central application configuration loaded from YAML.

The YAML file may reference environment variables as ``${VAR}`` (required)
or ``${VAR:-default}``.
"""

import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from table_progress_tracking.core.config import get_settings
from table_progress_tracking.tables.limits import (
    DEFAULT_MAX_ARTICLE_SIZE_KB,
    ProcessingLimits,
    default_max_html_size,
)

logger = logging.getLogger(__name__)

# Pattern matches ${VAR} and ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def interpolate_env_vars(value: Any) -> Any:
    """Recursively substitute environment variables in parsed YAML values.

    Raises:
        ValueError: If a required environment variable is not set.
    """
    if isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    def replace_var(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        env_value = os.environ.get(name)
        if env_value is not None:
            return env_value
        if default is not None:
            return default
        raise ValueError(f"Environment variable '{name}' is not set and no default provided")

    return ENV_VAR_PATTERN.sub(replace_var, value)


def read_yaml_config(config_path: Path) -> dict[str, Any]:
    """Read a YAML mapping with environment variables interpolated."""
    with open(config_path) as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        logger.warning(f"Configuration file {config_path} is empty")
        return {}
    if not isinstance(raw_config, dict):
        raise ValueError(f"Expected mapping in {config_path}, got {type(raw_config).__name__}")
    return interpolate_env_vars(raw_config)


class ProcessingLimitsConfig(BaseModel):
    """``table_progress_tracking`` section of the YAML configuration."""

    max_rows: int = Field(default=1000, gt=0)
    max_columns: int = Field(default=50, gt=0)
    # Unset: 25% of the article size limit.
    max_html_size: int | None = Field(default=None, gt=0)
    max_processing_seconds: float = Field(default=5.0, gt=0)
    max_input_size: int = Field(default=50 * 1024, gt=0)
    max_article_size_kb: int = Field(default=DEFAULT_MAX_ARTICLE_SIZE_KB, gt=0)

    model_config = {"frozen": True}

    def to_limits(self) -> ProcessingLimits:
        """Resolve the effective limits for one processor invocation."""
        return ProcessingLimits(
            max_rows=self.max_rows,
            max_columns=self.max_columns,
            max_html_size=self.max_html_size or default_max_html_size(self.max_article_size_kb),
            max_processing_seconds=self.max_processing_seconds,
            max_input_size=self.max_input_size,
        )


class AppConfig(BaseModel):
    """Central application configuration loaded from YAML."""

    table_progress_tracking: ProcessingLimitsConfig = Field(default_factory=ProcessingLimitsConfig)

    model_config = {"frozen": True}

    def processing_limits(self) -> ProcessingLimits:
        return self.table_progress_tracking.to_limits()


@lru_cache(maxsize=1)
def load_app_config(config_path: Path | None = None) -> AppConfig:
    """Load application configuration from YAML file.

    Falls back to the defaults when the file does not exist, so the service
    runs without explicit configuration in development.
    """
    if config_path is None:
        config_path = Path(get_settings().app_config_path)

    if not config_path.exists():
        logger.info(f"Config file not found at {config_path}, using default configuration")
        return AppConfig()

    try:
        config = AppConfig.model_validate(read_yaml_config(config_path))
        logger.info(f"Loaded configuration from {config_path}")
        return config
    except Exception as e:
        logger.error(f"Failed to load configuration from {config_path}: {e}")
        raise


def get_app_config() -> AppConfig:
    """Get the cached application configuration."""
    return load_app_config()


def get_processing_limits() -> ProcessingLimits:
    """FastAPI dependency returning the configured processing limits."""
    return get_app_config().processing_limits()


def clear_config_cache() -> None:
    """Clear the configuration cache (useful for testing and hot reload)."""
    load_app_config.cache_clear()
