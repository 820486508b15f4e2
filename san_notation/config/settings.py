# san_notation/config/settings.py
"""
Configuration settings for san-notation, powered by Pydantic.

Settings are read from environment variables with the prefix
`SAN_NOTATION_`. Nested models use a double underscore delimiter, e.g.
`SAN_NOTATION_OUTPUT__FORMAT=json`.
"""
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class OutputSettings(BaseModel):
    """Controls how the command-line front end prints parsed notations."""
    format: Literal["text", "json"] = Field("text", description="Print one text line or one JSON object per notation.")
    include_unset: bool = Field(True, description="Whether fields that are unset (None/False) are printed.")


class Settings(BaseSettings):
    """
    Main configuration class for the package.

    Only the command-line front end and logging read these settings; the
    grammar itself is not configurable.
    """
    model_config = SettingsConfigDict(env_prefix='SAN_NOTATION_', env_nested_delimiter='__')

    log_level: str = Field("WARNING", description="Root log level.")
    log_json: bool = Field(False, description="Render console logs as JSON lines.")
    log_file: Optional[Path] = Field(None, description="Append JSON logs to this file.")
    output: OutputSettings = Field(default_factory=OutputSettings)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalises the level name and rejects names the logging module does not know."""
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Configuration error: unknown log level {value!r}.")
        return level


# A singleton instance of the settings, accessible throughout the package.
settings = Settings()
