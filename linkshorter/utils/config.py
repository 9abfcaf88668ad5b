"""Utility functions for application configuration management.

Configuration is read once at startup and never changes while the process
runs. Values are layered, later layers winning:

    1. `AppConfig` defaults (see `linkshorter.constants.Defaults`)
    2. An optional JSON document, either passed explicitly or named by the
       `LINKSHORTER_CONFIG_FILE` environment variable:

        {
            "default_ttl_ms": 86400000,
            "default_click_limit": 100,
            "code_length": 6,
            "cleanup_interval_ms": 3600000,
            "notifications_enabled": true,
            "link_domain": "clck.ru"
        }

    3. Per-setting environment variables (`LINKSHORTER_DEFAULT_TTL_MS`, ...).

Classes:
    AppConfig
        Frozen, validated settings consumed by the link lifecycle core.

Functions:
    load_config(path: str | Path | None = None) -> AppConfig
        Build an AppConfig from defaults, an optional JSON file and the environment.

Example:
    Typical usage at the composition root:

        >>> from linkshorter.utils.config import load_config
        >>> os.environ['LINKSHORTER_DEFAULT_CLICK_LIMIT'] = '3'
        >>> config = load_config()
        >>> config.default_click_limit
        3
"""

import os
import json
import logging
from dataclasses import dataclass, fields
from datetime import timedelta
from pathlib import Path
from typing import Any

from linkshorter.constants import Defaults, ENV
from linkshorter.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)

_ONE_HOUR_MS = 3_600_000
_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


# fmt: off
@dataclass(frozen=True)
class AppConfig:
    default_ttl_ms: int = Defaults.TTL_MS                          # Link time-to-live (may be negative)
    default_click_limit: int = Defaults.CLICK_LIMIT                # Quota used when none is given
    code_length: int = Defaults.CODE_LENGTH                        # Characters per short code
    cleanup_interval_ms: int = Defaults.CLEANUP_INTERVAL_MS        # Sweep period
    notifications_enabled: bool = Defaults.NOTIFICATIONS_ENABLED   # Global notifier switch
    link_domain: str = Defaults.LINK_DOMAIN                        # Display-only prefix for short links
# fmt: on

    def __post_init__(self) -> None:
        for name in ('default_click_limit', 'code_length', 'cleanup_interval_ms'):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                raise BadConfigurationError(f"'{name}' must be a positive integer (given value: {value!r}).")
        if not _is_int(self.default_ttl_ms):
            raise BadConfigurationError(f"'default_ttl_ms' must be an integer (given value: {self.default_ttl_ms!r}).")
        if not isinstance(self.notifications_enabled, bool):
            raise BadConfigurationError(f"'notifications_enabled' must be a boolean (given value: {self.notifications_enabled!r}).")
        if not isinstance(self.link_domain, str) or not self.link_domain.strip():
            raise BadConfigurationError(f"'link_domain' must be a non-empty string (given value: {self.link_domain!r}).")

    @property
    def default_ttl(self) -> timedelta:
        return timedelta(milliseconds=self.default_ttl_ms)

    @property
    def ttl_hours(self) -> int:
        return self.default_ttl_ms // _ONE_HOUR_MS

    @property
    def cleanup_interval(self) -> timedelta:
        return timedelta(milliseconds=self.cleanup_interval_ms)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_env(name: str, raw: str, kind: type) -> Any:
    if kind is bool:
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise BadConfigurationError(f"Environment variable '{name}' is not a boolean (given value: {raw!r}).")
    if kind is int:
        try:
            return int(raw)
        except ValueError as e:
            raise BadConfigurationError(f"Environment variable '{name}' is not an integer (given value: {raw!r}).") from e
    return raw


_ENV_OVERRIDES = {
    'default_ttl_ms': (ENV.Link.DEFAULT_TTL_MS, int),
    'default_click_limit': (ENV.Link.DEFAULT_CLICK_LIMIT, int),
    'code_length': (ENV.Link.CODE_LENGTH, int),
    'cleanup_interval_ms': (ENV.Link.CLEANUP_INTERVAL_MS, int),
    'notifications_enabled': (ENV.Link.NOTIFICATIONS_ENABLED, bool),
    'link_domain': (ENV.Link.LINK_DOMAIN, str),
}


def _load_document(path: Path) -> dict[str, Any]:
    logger.debug('Loading configuration document.', extra={'configPath': str(path)})
    with path.open(encoding='utf-8') as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise BadConfigurationError(f'Configuration file {path} is not valid JSON.') from e

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration file {path} must contain a JSON object.')

    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(document) - known)
    if unknown:
        unknown_list = ', '.join(f"'{key}'" for key in unknown)
        raise BadConfigurationError(f'Unknown configuration keys in {path}: {unknown_list}')
    return document


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load the application configuration

    Args:
        path (str | Path | None):
            JSON configuration document. Falls back to `LINKSHORTER_CONFIG_FILE`;
            when neither is set only defaults and environment overrides apply.

    Returns:
        AppConfig: validated, read-only settings.

    Raises:
        FileNotFoundError:
            If the configuration document does not exist.
        BadConfigurationError:
            If any value is malformed or out of range.

    Example:
        >>> config = load_config('config/local.json')
        >>> config.link_domain
        'clck.ru'
    """
    values: dict[str, Any] = {}

    path = path or os.environ.get(ENV.App.CONFIG_FILE)
    if path:
        values.update(_load_document(Path(path)))

    for name, (variable, kind) in _ENV_OVERRIDES.items():
        raw = os.environ.get(variable)
        if raw is not None and raw != '':
            values[name] = _parse_env(variable, raw, kind)

    config = AppConfig(**values)
    logger.debug('Loaded configuration.', extra={'config': config})
    return config
