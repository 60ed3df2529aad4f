"""Logging setup for the pren command line."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingSettings, get_settings
from .exceptions import ConfigurationError

LOGGER_NAME = "pren"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    settings: Optional[LoggingSettings] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Attach a handler to the package logger.

    Args:
        settings: Logging settings (defaults to the global settings)
        console: Console for the rich handler (defaults to stderr)

    Returns:
        The configured package logger
    """
    settings = settings or get_settings().logging

    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {settings.level}",
            config_key="PREN_LOG_LEVEL"
        )

    if settings.format == "rich":
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    elif settings.format == "plain":
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    else:
        raise ConfigurationError(
            f"Unknown log format: {settings.format}",
            config_key="PREN_LOG_FORMAT"
        )

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
