"""Package-wide logger.

The logger writes through Rich for readable console output. The level
defaults to WARNING and is changed through
:meth:`cypherdsl.config.RendererConfig.apply_logging`.

Attributes:
    LOGGING_LEVEL: Default logging level as string.
    LOGGER: Configured logger instance with Rich formatting.
"""

import logging

from rich.logging import RichHandler

LOGGING_LEVEL = "WARNING"
LOGGER = logging.getLogger("cypherdsl")
LOGGER.setLevel(getattr(logging, LOGGING_LEVEL))
LOGGER.addHandler(RichHandler())
