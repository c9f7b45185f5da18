"""Configuration loading for the resource adapters."""
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from aws_resource_adapters.config.env_expansion import expand_config_env_vars
from aws_resource_adapters.config.schemas import AppConfig
from aws_resource_adapters.infrastructure.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "AWS_REGION": ("aws", "region"),
    "AWS_PROFILE": ("aws", "profile"),
    "LOG_LEVEL": ("logging", "level"),
}


def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load a JSON or YAML configuration file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(file_path, "r") as f:
            if file_path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return data


def apply_environment_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay the supported environment variables onto a raw configuration dictionary."""
    result = dict(config)
    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            result[section] = dict(result.get(section) or {})
            result[section][key] = value
    return result


def validate_config(data: Dict[str, Any]) -> AppConfig:
    """
    Build the typed configuration.

    Raises:
        ConfigurationError: If any section fails validation
    """
    try:
        return AppConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


class ConfigurationManager:
    """
    Loads the application configuration once, lazily.

    Sources are applied in order: configuration file, environment variable
    expansion, environment overrides, explicit ``overrides``.
    """

    def __init__(self, config_file: Optional[str] = None,
                 overrides: Optional[Dict[str, Dict[str, Any]]] = None):
        self._config_file = config_file
        self._overrides = overrides or {}
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        config_data: Dict[str, Any] = {}
        if self._config_file:
            config_data = load_config_file(self._config_file)
            logger.debug("Loaded configuration from %s", self._config_file)

        config_data = expand_config_env_vars(config_data)
        config_data = apply_environment_overrides(config_data)

        for section, values in self._overrides.items():
            values = {k: v for k, v in values.items() if v is not None}
            if values:
                config_data[section] = {**(config_data.get(section) or {}), **values}

        return validate_config(config_data)

    def reload(self) -> None:
        with self._lock:
            self._app_config = None
