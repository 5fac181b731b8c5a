"""
Turnstile configuration management using Pydantic Settings.

Settings come from, highest priority first:
1. Keyword arguments
2. The turnstile.yaml config file
3. TURNSTILE_* env vars (nested settings use a double underscore)
4. A .env file

The turnstile.yaml format:
    log_level: DEBUG
    history_limit: 20
    definition: ./vehicle.yaml
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Type

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from turnstile.machine.history import DEFAULT_HISTORY_LIMIT

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TURNSTILE_CONFIG"
CONFIG_FILENAMES = ("turnstile.yaml", "turnstile.yml")


class HistoryConfig(BaseModel):
    """Undo/redo history configuration."""

    # Maximum number of records kept; the oldest is evicted first
    limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=1)


def find_config_file(config_path: Optional[str] = None) -> Optional[Path]:
    """
    Locate the config file.

    An explicit path, or else $TURNSTILE_CONFIG, is used as given and never
    falls back to the working directory. Otherwise turnstile.yaml and
    turnstile.yml are tried in the working directory.
    """
    named = config_path or os.environ.get(CONFIG_ENV_VAR)
    if named:
        path = Path(named)
        return path if path.is_file() else None

    for name in CONFIG_FILENAMES:
        if Path(name).is_file():
            return Path(name)
    return None


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read a YAML config file. Unreadable files are skipped with a warning."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring config file {path}: {e}")
        return {}

    logger.debug(f"Loaded config from {path}")
    return data if isinstance(data, dict) else {}


def map_config(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map flat config keys onto the nested TurnstileSettings fields."""
    result: Dict[str, Any] = {
        key: data[key] for key in ("debug", "log_level") if key in data
    }

    history: Dict[str, Any] = {}
    if "history_limit" in data:
        history["limit"] = data["history_limit"]
    if isinstance(data.get("history"), dict):
        history.update(data["history"])
    if history:
        result["history"] = history

    definition = data.get("definition", data.get("definition_path"))
    if definition is not None:
        result["definition_path"] = definition

    return result


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source backed by turnstile.yaml (see find_config_file)."""

    def __init__(
        self, settings_cls: Type[BaseSettings], config_path: Optional[str] = None
    ):
        super().__init__(settings_cls)
        path = find_config_file(config_path)
        self._values = map_config(read_config_file(path)) if path else {}

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        value = self._values.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> Dict[str, Any]:
        return dict(self._values)


class TurnstileSettings(BaseSettings):
    """
    Main Turnstile configuration.

    Environment variables use the TURNSTILE_ prefix, with a double
    underscore for nesting: TURNSTILE_HISTORY__LIMIT=10. Pass _config_path
    to read a specific config file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TURNSTILE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Read by settings_customise_sources; not a settings field
    _config_path: Optional[str] = None

    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    history: HistoryConfig = Field(default_factory=HistoryConfig)

    # Machine definition file (YAML or JSON) used by load_machine()
    definition_path: Optional[str] = None

    def __init__(self, _config_path: Optional[str] = None, **kwargs: Any):
        self.__class__._config_path = _config_path
        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Secrets directories are not used
        return (
            init_settings,
            YamlConfigSource(settings_cls, config_path=cls._config_path),
            env_settings,
            dotenv_settings,
        )
