"""Renderer configuration.

Settings can be built directly or loaded from the ``[renderer]`` table
of a toml file::

    [renderer]
    separator = ", "
    always_escape_names = true
    logging_level = "DEBUG"
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

import toml
from pydantic import BaseModel, ConfigDict, Field

from cypherdsl.logger import LOGGER


class LoggingLevelEnum(str, Enum):
    """Enum for the logging level to use for the package logger."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class RendererConfig(BaseModel):
    """Options consumed by the rendering visitor.

    Attributes:
        separator: Text placed between the elements of a typed subtree.
        always_escape_names: Quote every label and relationship type with
            backticks. When false, only names that are not valid bare
            identifiers are quoted.
        logging_level: Level applied to the package logger.
    """

    model_config = ConfigDict(frozen=True)

    separator: str = Field(default=", ")
    always_escape_names: bool = Field(default=True)
    logging_level: LoggingLevelEnum = Field(default=LoggingLevelEnum.WARNING)

    def apply_logging(self) -> None:
        """Set the package logger to the configured level."""
        LOGGER.setLevel(getattr(logging, self.logging_level.value))


def load_config(path: str | Path) -> RendererConfig:
    """Load a :class:`RendererConfig` from a toml file.

    Args:
        path: Location of the toml file.

    Returns:
        The configuration found in the ``[renderer]`` table, or the
        defaults when the file has no such table.
    """
    with open(path, "r", encoding="utf8") as f:
        raw: dict[str, Any] = toml.load(f)
    section: dict[str, Any] = raw.get("renderer", {})
    LOGGER.debug(msg=f"Loaded renderer configuration from {path}: {section}")
    return RendererConfig(**section)
