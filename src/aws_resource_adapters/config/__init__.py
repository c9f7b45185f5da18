"""Configuration package."""
from aws_resource_adapters.config.env_expansion import expand_config_env_vars, expand_env_vars
from aws_resource_adapters.config.manager import ConfigurationManager, validate_config
from aws_resource_adapters.config.schemas import (
    AppConfig,
    AWSConfig,
    LoggingConfig,
    OperationTimeouts,
    SweepConfig,
    TagsConfig,
    TimeoutsConfig,
)

__all__ = [
    'AppConfig',
    'AWSConfig',
    'ConfigurationManager',
    'LoggingConfig',
    'OperationTimeouts',
    'SweepConfig',
    'TagsConfig',
    'TimeoutsConfig',
    'expand_config_env_vars',
    'expand_env_vars',
    'validate_config',
]
