"""
Analyzer settings.

Each setting is resolved from multiple sources in priority order:
1. Direct argument (if not None)
2. Environment variables
3. YAML settings file
4. Default value
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "COMPONENT_ANALYZER_LOG_LEVEL"
ENV_MAX_CONCURRENCY = "COMPONENT_ANALYZER_MAX_CONCURRENCY"
ENV_OUTPUT_FORMAT = "COMPONENT_ANALYZER_OUTPUT_FORMAT"
ENV_CONFIG_FILE = "COMPONENT_ANALYZER_CONFIG"

DEFAULT_IGNORE_DIRS = [
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    "test-resources",
    "__pycache__",
]

OutputFormat = Literal["table", "json", "yaml"]


class AnalyzerSettings(BaseModel):
    """Settings for batch analysis from the command line."""
    log_level: str = Field(default="WARNING", description="Logging level name")
    max_concurrency: int = Field(default=8, ge=1, description="Components analyzed at once")
    output_format: OutputFormat = Field(default="table", description="table, json or yaml")
    ignore_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown log level: {v}")
        return level


def _resolve(arg: Any, env_key: str, file_config: Dict[str, Any], key: str, default: Any) -> Any:
    if arg is not None:
        return arg
    val = os.getenv(env_key)
    if val is not None:
        return val
    return file_config.get(key, default)


def load_settings_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read the YAML settings file; an empty file yields no settings."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"YAML parsing error in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    # settings may live below a "component_analyzer" key of a shared file
    section = data.get("component_analyzer", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'component_analyzer' in {path} must be a mapping")
    return section


def load_settings(
    config_file: Optional[Union[str, Path]] = None,
    log_level: Optional[str] = None,
    max_concurrency: Optional[int] = None,
    output_format: Optional[str] = None,
) -> AnalyzerSettings:
    config_file = config_file or os.getenv(ENV_CONFIG_FILE)
    file_config: Dict[str, Any] = load_settings_file(config_file) if config_file else {}
    defaults = AnalyzerSettings()

    values = {
        "log_level": _resolve(log_level, ENV_LOG_LEVEL, file_config, "log_level", defaults.log_level),
        # env values are strings; pydantic coerces and range-checks them
        "max_concurrency": _resolve(
            max_concurrency, ENV_MAX_CONCURRENCY, file_config, "max_concurrency", defaults.max_concurrency
        ),
        "output_format": _resolve(
            output_format, ENV_OUTPUT_FORMAT, file_config, "output_format", defaults.output_format
        ),
        "ignore_dirs": file_config.get("ignore_dirs", defaults.ignore_dirs),
    }
    try:
        settings = AnalyzerSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid analyzer settings: {e}") from e

    logger.debug(f"Resolved analyzer settings: {settings.model_dump()}")
    return settings


def configure_logging(level: str = "WARNING") -> None:
    """Set up root logging for command line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
