# src/errorlog/config.py
"""Configuration schema and loading for errorlog.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.

The reserved field names and the default ERROR level are fixed and cannot
be configured, so every event in a codebase shares one schema.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ErrorLogSettings(BaseModel):
    """Logging settings for applications using errorlog.

    Example YAML:
        json_output: true
        log_level: WARNING
        error_key: exc
        max_source_depth: 16
    """

    model_config = {"frozen": True}

    json_output: bool = Field(
        default=False,
        description="Render JSON lines instead of the console format",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root stdlib logging threshold",
    )
    error_key: str = Field(
        default="error",
        min_length=1,
        description="Event dict key expanded into error fields by the processor",
    )
    max_source_depth: int = Field(
        default=32,
        gt=0,
        description="Maximum number of causes recorded in error.source_chain",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept level names in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


def load_settings(config_path: Path) -> ErrorLogSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (ERRORLOG_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated ErrorLogSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="ERRORLOG",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
    )

    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k.lower() in ErrorLogSettings.model_fields}

    return ErrorLogSettings(**raw_config)
