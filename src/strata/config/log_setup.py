"""Apply a LoggingConfig to the ``strata`` logger hierarchy."""

from __future__ import annotations

import logging
from typing import Optional

from .schema import LoggingConfig

PACKAGE_LOGGER = "strata"


def configure_logging(
    config: LoggingConfig, level_override: Optional[str] = None
) -> logging.Logger:
    """Attach handlers to the package logger according to ``config``.

    Handlers installed by an earlier call are replaced, so the CLI can call
    this once per invocation.

    Args:
        config: Logging section of the configuration
        level_override: Level to use instead of ``config.level`` (e.g. from -v)

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    level = (level_override or config.level).upper()
    package_logger.setLevel(getattr(logging, level, logging.INFO))
    formatter = logging.Formatter(config.format)

    if config.console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        package_logger.addHandler(console)

    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())

    return package_logger
