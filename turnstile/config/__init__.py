"""Configuration management for Turnstile."""

from turnstile.config.log import setup_logging, setup_logging_from_settings
from turnstile.config.settings import (
    HistoryConfig,
    TurnstileSettings,
    YamlConfigSource,
)

__all__ = [
    "TurnstileSettings",
    "HistoryConfig",
    "YamlConfigSource",
    "setup_logging",
    "setup_logging_from_settings",
]
