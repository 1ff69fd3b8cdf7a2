"""Load and validate depoverride settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator


class OverrideSettings(BaseModel):
    """Settings controlling how override properties are recognised and reported."""

    property_prefix: str = Field(default="version", min_length=1)
    separator: str = Field(default=":", min_length=1, max_length=1)
    log_level: str = "INFO"
    structured_logs: bool = False
    output_format: Literal["pom", "json"] = "pom"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def prefix(self) -> str:
        """Full property prefix, e.g. ``version:``."""
        return f"{self.property_prefix}{self.separator}"

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)


def load_config(path: Path) -> OverrideSettings:
    """Load settings from YAML, falling back to defaults when the file is absent.

    Args:
        path: Path to the settings file (e.g. ``depoverride.yml``).

    Returns:
        Validated settings.

    Raises:
        pydantic.ValidationError: a setting has an invalid value.
    """
    if not path.exists():
        return OverrideSettings()

    with open(path) as f:
        data = yaml.safe_load(f)

    return OverrideSettings(**(data or {}))
