"""Converter configuration: display, color and logging settings"""

import json
from pathlib import Path
from typing import Optional, Dict, Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError

ENV_PREFIX = "UNIT_CONVERT_"


class ConverterConfiguration(BaseSettings):
    """
    Runtime settings for the command line converter

    Fields are read from UNIT_CONVERT_* environment variables on
    construction; a JSON file and explicit overrides can be layered on
    top with ``update_from_file`` and ``update``.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra='forbid',
        validate_assignment=True,
    )

    precision: int = Field(
        default=6,
        ge=1,
        le=17,
        description="Significant digits in printed results"
    )
    color: bool = Field(
        default=True,
        description="Colored terminal output"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Session log path"
    )
    verbose: bool = Field(
        default=False,
        description="Echo log records to stderr"
    )

    @field_validator('log_file', mode='before')
    @classmethod
    def _empty_log_file(cls, value):
        return value or None

    @classmethod
    def from_env(cls) -> 'ConverterConfiguration':
        """Defaults overridden by UNIT_CONVERT_* environment variables"""
        try:
            return cls()
        except ValidationError as e:
            raise _configuration_error(e) from e

    @classmethod
    def from_file(cls, path: str) -> 'ConverterConfiguration':
        """Load configuration from a JSON file over defaults and environment"""
        return cls.from_env().update_from_file(path)

    def update_from_file(self, path: str) -> 'ConverterConfiguration':
        """
        Apply settings from a JSON file

        Args:
            path: Path to JSON file holding a flat object of settings

        Raises:
            ConfigurationError: If the file cannot be read or has bad settings
        """
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}", 'file', path) from e

        if not isinstance(raw, dict):
            raise ConfigurationError("Configuration file must contain a JSON object", 'file', path)

        return self.update(raw)

    def update(self, overrides: Dict[str, Any]) -> 'ConverterConfiguration':
        """Apply overrides in place; None values are skipped"""
        for name, value in overrides.items():
            if name not in type(self).model_fields:
                raise ConfigurationError("Unknown configuration parameter", name)
            if value is None:
                continue
            try:
                setattr(self, name, value)
            except ValidationError as e:
                raise _configuration_error(e) from e
        return self

    def validate(self) -> None:
        """
        Re-check all settings together

        Raises:
            ConfigurationError: If any setting is invalid
        """
        try:
            type(self).model_validate(self.model_dump())
        except ValidationError as e:
            raise _configuration_error(e) from e

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def _configuration_error(error: ValidationError) -> ConfigurationError:
    first = error.errors()[0]
    parameter = ".".join(str(part) for part in first['loc'])
    return ConfigurationError(f"Invalid configuration: {first['msg']}", parameter, first.get('input'))
