"""
Converter configuration.

Centralized configuration management with environment variables
(prefix ``VBA2JS_``), an optional ``.env`` file, or a YAML file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Converter settings"""

    model_config = SettingsConfigDict(
        env_prefix="VBA2JS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Output
    INDENT_UNIT: str = "  "
    EMPTY_ARGUMENT: str = "undefined"
    POW_FUNCTION: str = "Math.pow"

    # Parsing
    MAX_LOOKAHEAD: int = Field(default=1000, gt=0)

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: Literal["text", "json"] = "text"
    LOG_FILE: Optional[str] = None

    @field_validator("INDENT_UNIT")
    @classmethod
    def indent_is_whitespace(cls, value: str) -> str:
        if value.strip():
            raise ValueError("INDENT_UNIT must contain only whitespace")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """
        Load settings from a YAML file.

        Keys are case-insensitive (``indent_unit`` and ``INDENT_UNIT`` are the
        same setting). Values not given in the file fall back to the
        environment and then to the defaults.

        Args:
            path: Path to YAML configuration file

        Returns:
            Settings instance
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")

        return cls(**{str(key).upper(): value for key, value in data.items()})


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
