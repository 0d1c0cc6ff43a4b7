"""Configuration management module for the code cleaner."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AppConfig,
    CleanupConfig,
    GitConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
)

__all__ = [
    "load_config",
    "load_environment_config",
    "AppConfig",
    "GitConfig",
    "CleanupConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "LogLevel",
    "LogFormat",
    "ConfigurationError",
]
