"""Logging setup."""

import logging
import sys
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from turnstile.config.settings import TurnstileSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure logging."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def setup_logging_from_settings(settings: "TurnstileSettings") -> None:
    """Configure logging from settings; ``debug`` overrides ``log_level``."""
    setup_logging(logging.DEBUG if settings.debug else settings.log_level)
