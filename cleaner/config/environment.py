"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        base_branch: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.log_level = log_level
        self.base_branch = base_branch
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - CLEANER_LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - CLEANER_BASE_BRANCH: Branch tried before the configured base branches
    - ENVIRONMENT: Environment label attached to every log record (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    log_level = os.getenv("CLEANER_LOG_LEVEL")
    base_branch = os.getenv("CLEANER_BASE_BRANCH")
    environment = os.getenv("ENVIRONMENT")

    if log_level:
        log_level = log_level.strip().upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid CLEANER_LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    if base_branch is not None:
        base_branch = base_branch.strip()
        if not base_branch:
            errors.append("CLEANER_BASE_BRANCH is set but empty")
        elif " " in base_branch:
            errors.append(f"Invalid CLEANER_BASE_BRANCH: '{base_branch}'. Branch names cannot contain spaces.")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check your .env file or shell exports",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level or None,
        base_branch=base_branch or None,
        environment=environment,
    )
