import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import yaml

from shell_preamble.config import PreambleConfig, parse_config
from shell_preamble.constants import (
    APP_NAME,
    CONFIG_JSON_FILENAME,
    CONFIG_PATH_ENV,
    CONFIG_YAML_FILENAMES,
    DISABLE_ENV,
)
from shell_preamble.errors import InvalidConfigFormatError
from shell_preamble.utils import backup_file, read_json, read_yaml, write_json, write_yaml

_YAML_SUFFIXES = (".yaml", ".yml")
_TRUTHY = ("1", "true", "yes", "on")


class IConfigRepository(ABC):
    @property
    @abstractmethod
    def config_path(self) -> Path:
        raise NotImplementedError

    @abstractmethod
    def load(self) -> PreambleConfig:
        raise NotImplementedError

    @abstractmethod
    def save(self, config: PreambleConfig) -> None:
        raise NotImplementedError


def default_root() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_NAME


def disabled_by_env() -> bool:
    return os.environ.get(DISABLE_ENV, "").strip().lower() in _TRUTHY


def effective_config(config: PreambleConfig) -> PreambleConfig:
    """Apply environment overrides that are never written back to disk."""
    if config.enabled and disabled_by_env():
        return config.with_enabled(False)
    return config


class ConfigRepository(IConfigRepository):
    def __init__(
        self, root: Optional[Path] = None, config_path: Optional[Path] = None
    ) -> None:
        self._root = root or default_root()
        self._config_path = config_path

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config_path(self) -> Path:
        if self._config_path is not None:
            return self._config_path.expanduser()
        from_env = os.environ.get(CONFIG_PATH_ENV)
        if from_env:
            return Path(from_env).expanduser()
        for name in CONFIG_YAML_FILENAMES:
            candidate = self.root / name
            if candidate.exists():
                return candidate
        return self.root / CONFIG_JSON_FILENAME

    @property
    def is_yaml(self) -> bool:
        return self.config_path.suffix.lower() in _YAML_SUFFIXES

    def load_payload(self) -> Any:
        path = self.config_path
        if not path.exists() or path.stat().st_size == 0:
            return {}
        try:
            if self.is_yaml:
                return read_yaml(path)
            return read_json(path)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
            raise InvalidConfigFormatError(path, str(exc)) from exc

    def load(self) -> PreambleConfig:
        return parse_config(self.load_payload(), self.config_path)

    def save(self, config: PreambleConfig) -> None:
        path = self.config_path
        if path.exists():
            backup_file(path)
        if self.is_yaml:
            write_yaml(path, config.as_dict())
        else:
            write_json(path, config.as_dict())


class InMemoryConfigRepository(IConfigRepository):
    def __init__(
        self,
        config: Optional[PreambleConfig] = None,
        config_path: Path = Path("<memory>"),
    ) -> None:
        self._config = config or PreambleConfig()
        self._path = config_path

    @property
    def config_path(self) -> Path:
        return self._path

    def load(self) -> PreambleConfig:
        return self._config

    def save(self, config: PreambleConfig) -> None:
        self._config = config
