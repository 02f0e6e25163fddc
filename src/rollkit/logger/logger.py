"""Package-wide logger for rollkit."""

import logging
import sys

from rollkit.core.config import LogLevel, Settings, settings

__all__ = ["logger", "setup_logger"]


def setup_logger(
    name: str = "rollkit",
    level: LogLevel | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name, children such as ``rollkit.rolling`` share its handler.
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to
            ``settings.LOG_LEVEL``, case-insensitive.
        format_string: Custom format string

    Returns:
        Configured logger instance

    Raises:
        pydantic.ValidationError: If ``level`` is not a known level name.
    """
    # Explicit levels go through the same validation as the settings
    level = Settings(LOG_LEVEL=level).LOG_LEVEL if level else settings.LOG_LEVEL
    format_string = format_string or (
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger = logging.getLogger(name)

    # Handlers are attached once per logger name
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False

    return logger


logger = setup_logger()
