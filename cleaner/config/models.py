"""Configuration schema models using Pydantic."""

import codecs
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class GitConfig(BaseModel):
    """How the base branch and changed files are resolved."""

    base_branches: List[str] = Field(
        default_factory=lambda: ["main", "master"],
        min_length=1,
        description="Candidate base branches, tried in order",
    )
    git_executable: str = Field("git", min_length=1, description="git binary to invoke")

    @field_validator("base_branches")
    @classmethod
    def normalize_branches(cls, v: List[str]) -> List[str]:
        """Strip branch names, drop empties and duplicates while keeping order."""
        branches: List[str] = []
        for branch in v:
            stripped = branch.strip()
            if stripped and stripped not in branches:
                branches.append(stripped)
        if not branches:
            raise ValueError("base_branches must contain at least one non-empty branch name")
        return branches


class CleanupConfig(BaseModel):
    """File cleanup behavior."""

    dry_run: bool = Field(False, description="Report what would change without writing files")
    encoding: str = Field("utf-8", min_length=1, description="Encoding used to read and write files")
    exclude_patterns: List[str] = Field(
        default_factory=list,
        description="Glob patterns of changed files that are never cleaned",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject encodings Python does not know."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v

    @field_validator("exclude_patterns")
    @classmethod
    def strip_patterns(cls, v: List[str]) -> List[str]:
        return [pattern.strip() for pattern in v if pattern.strip()]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the code cleaner."""

    git: GitConfig = Field(default_factory=GitConfig, description="Git settings")
    cleanup: CleanupConfig = Field(default_factory=CleanupConfig, description="Cleanup settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
