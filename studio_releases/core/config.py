"""
Application settings.

Settings are merged from built-in defaults, an optional YAML file and
STUDIO_RELEASES_* environment variables, in that order of precedence.
"""
import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from studio_releases import __version__
from studio_releases.core.errors import ConfigError
from studio_releases.crawler.selectors import RELEASES_TABLE_SELECTOR

logger = logging.getLogger(__name__)

# Webpage listing new software releases.
ANDROID_STUDIO_RELEASES_LIST = "https://plugins.jetbrains.com/docs/intellij/android-studio-releases-list.html"

# User agent for network requests.
APP_USER_AGENT = f"android-studio-releases/{__version__}"

ENV_PREFIX = "STUDIO_RELEASES_"

DEFAULT_CONFIG = {
    'releases_url': ANDROID_STUDIO_RELEASES_LIST,
    'user_agent': APP_USER_AGENT,
    'timeout': 30.0,
    'max_retries': 2,
    'table_selector': RELEASES_TABLE_SELECTOR,
    'skip_malformed': False,
    'log_level': 'INFO',
}

# Environment variable suffix -> setting name
ENV_KEYS = {
    'URL': 'releases_url',
    'USER_AGENT': 'user_agent',
    'TIMEOUT': 'timeout',
    'MAX_RETRIES': 'max_retries',
    'TABLE_SELECTOR': 'table_selector',
    'SKIP_MALFORMED': 'skip_malformed',
    'LOG_LEVEL': 'log_level',
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class Settings:
    """Runtime settings for fetching and parsing the releases list"""

    def __init__(self, **overrides: Any):
        values = DEFAULT_CONFIG.copy()
        unknown = set(overrides) - set(values)
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")
        values.update(overrides)

        self.releases_url = str(values['releases_url'])
        self.user_agent = str(values['user_agent'])
        self.timeout = _as_float('timeout', values['timeout'])
        self.max_retries = _as_int('max_retries', values['max_retries'])
        self.table_selector = str(values['table_selector'])
        self.skip_malformed = _as_bool('skip_malformed', values['skip_malformed'])
        self.log_level = str(values['log_level']).upper()

        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.max_retries < 0:
            raise ConfigError(f"max_retries must not be negative, got {self.max_retries}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log_level {self.log_level!r}")
        if not self.table_selector.strip():
            raise ConfigError("table_selector must not be empty")

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'Settings':
        """
        Load settings from a YAML file and the environment.

        Args:
            config_path: YAML file path; falls back to STUDIO_RELEASES_CONFIG

        Returns:
            Settings with environment variables taking precedence over the file
        """
        load_dotenv()

        values: Dict[str, Any] = {}
        path = config_path or os.getenv(f"{ENV_PREFIX}CONFIG")
        if path:
            values.update(load_config_file(Path(path)))

        for suffix, key in ENV_KEYS.items():
            value = os.getenv(f"{ENV_PREFIX}{suffix}")
            if value is not None and value != '':
                values[key] = value

        settings = cls(**values)
        logger.debug(
            f"Settings: url={settings.releases_url}, timeout={settings.timeout}, "
            f"retries={settings.max_retries}, skip_malformed={settings.skip_malformed}"
        )
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, key) for key in DEFAULT_CONFIG}

    def __repr__(self):
        return f"Settings({self.to_dict()})"


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """Read settings from a YAML file. A missing file yields no settings."""
    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}. Using defaults.")
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    logger.info(f"Loaded config from {config_path}")
    return data


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ('true', '1', 'yes', 'on'):
        return True
    if text in ('false', '0', 'no', 'off'):
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None
