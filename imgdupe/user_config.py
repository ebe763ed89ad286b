"""
User configuration management for imgdupe.

Each setting is resolved from the first source that provides a usable value:
1. Environment variable (IMGDUPE_WORKERS, IMGDUPE_CACHE_DIR, IMGDUPE_MAX_PIXELS)
2. User config file (~/.imgdupe/config.json, or $IMGDUPE_CONFIG_DIR/config.json)
3. Built-in default from config.py

Only the CLI layer reads this; the scanning core receives plain values.

Example config.json:
{
    "workers": 8,
    "cache_dir": "~/.cache/imgdupe",
    "max_image_pixels": 500000000
}
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, NamedTuple, Optional
import logging

from .config import (
    DEFAULT_WORKERS,
    MAX_IMAGE_PIXELS,
    WORKERS_ENV_VAR,
    CACHE_DIR_ENV_VAR,
    CONFIG_DIR_ENV_VAR,
    MAX_PIXELS_ENV_VAR,
)

logger = logging.getLogger(__name__)


def _positive_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError("expected a positive integer")
    return value


def _optional_directory(value: Any) -> Optional[Path]:
    if value in (None, ''):
        return None
    if not isinstance(value, str):
        raise ValueError("expected a directory path")
    return Path(value).expanduser()


class Setting(NamedTuple):
    """One user-tunable setting."""
    key: str
    env_var: str
    default: Any
    parse: Callable[[Any], Any]
    help: str
    env_is_json: bool = True


SETTINGS = {
    setting.key: setting for setting in (
        Setting('workers', WORKERS_ENV_VAR, DEFAULT_WORKERS, _positive_int,
                "Number of parallel hashing threads"),
        Setting('cache_dir', CACHE_DIR_ENV_VAR, None, _optional_directory,
                "Directory holding hash caches (null keeps them in the scanned directory)",
                env_is_json=False),
        Setting('max_image_pixels', MAX_PIXELS_ENV_VAR, MAX_IMAGE_PIXELS, _positive_int,
                "Decompression bomb limit in pixels"),
    )
}


class ResolvedSetting(NamedTuple):
    """A setting's effective value and where it came from."""
    key: str
    value: Any
    source: str


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    The config file is read lazily and cached until reload().
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Directory holding config.json."""
        env_dir = os.getenv(CONFIG_DIR_ENV_VAR)
        if env_dir:
            return Path(env_dir)
        return Path.home() / '.imgdupe'

    @property
    def config_file_path(self) -> Path:
        return self.config_dir / 'config.json'

    def _read_config_file(self) -> dict:
        path = self.config_file_path
        if not path.exists():
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {path}: top level is not a JSON object")
            return {}

        unknown = sorted(k for k in data if k not in SETTINGS and not k.startswith('_'))
        if unknown:
            logger.warning(f"Unknown settings in {path}: {', '.join(unknown)}")

        logger.debug(f"Loaded configuration from {path}")
        return data

    @property
    def file_values(self) -> dict:
        """Raw values from the config file (read once, then cached)."""
        if self._config_data is None:
            self._config_data = self._read_config_file()
        return self._config_data

    def reload(self):
        """Forget cached file contents so the next lookup re-reads them."""
        self._config_data = None

    def _candidates(self, setting: Setting):
        """Yield (raw value, source) pairs in priority order."""
        env_value = os.getenv(setting.env_var)
        if env_value is not None:
            source = f"${setting.env_var}"
            if not setting.env_is_json:
                # Paths are taken verbatim, so a directory named "2024" stays a string
                yield env_value, source
            else:
                # Numeric settings are JSON where possible, so "8" becomes 8
                try:
                    yield json.loads(env_value), source
                except json.JSONDecodeError:
                    yield env_value, source

        if setting.key in self.file_values:
            yield self.file_values[setting.key], str(self.config_file_path)

    def resolve(self, key: str) -> ResolvedSetting:
        """
        Resolve one setting.

        Invalid values are logged and skipped, so a bad environment variable
        falls back to the config file and a bad file entry to the default.

        Raises:
            KeyError: If ``key`` is not a known setting
        """
        setting = SETTINGS[key]
        for raw, source in self._candidates(setting):
            try:
                return ResolvedSetting(key, setting.parse(raw), source)
            except ValueError as e:
                logger.warning(f"Ignoring {key}={raw!r} from {source}: {e}")
        return ResolvedSetting(key, setting.default, 'default')

    def describe(self) -> list[ResolvedSetting]:
        """Every setting with its effective value and source."""
        return [self.resolve(key) for key in SETTINGS]

    @property
    def workers(self) -> int:
        """Number of parallel hashing workers (default: number of CPUs)."""
        return self.resolve('workers').value

    @property
    def cache_dir(self) -> Optional[Path]:
        """Dedicated directory for hash caches, or None to keep them in the scanned directory."""
        return self.resolve('cache_dir').value

    @property
    def max_image_pixels(self) -> int:
        """Maximum image size in pixels (decompression bomb limit)."""
        return self.resolve('max_image_pixels').value

    def create_example_config(self) -> bool:
        """Write a config file listing every setting at its default."""
        example_config = {"_comment": "imgdupe user configuration"}
        for setting in SETTINGS.values():
            example_config[f"_{setting.key}"] = setting.help
            example_config[setting.key] = setting.default

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False

        self.reload()
        logger.info(f"Created example config file at {self.config_file_path}")
        return True


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
