"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Defaults
   - Ensures load_config() returns defaults when nothing is configured.

2. Configuration document
   - Ensures values are read from an explicit path or LINKSHORTER_CONFIG_FILE.
   - Ensures unknown keys, malformed JSON and missing files are reported.

3. Environment overrides
   - Ensures environment variables win over the configuration document.
   - Ensures unparseable values raise BadConfigurationError.

4. Validation and derived values
"""

import json
from datetime import timedelta

import pytest

from linkshorter.utils.config import AppConfig, load_config
from linkshorter.exceptions import BadConfigurationError
from linkshorter.constants import ENV


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Start every test from a clean environment."""
    monkeypatch.delenv(ENV.App.CONFIG_FILE, raising=False)
    for variable in ENV.Link:
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def config_file(tmp_path):
    """Write a configuration document and return its path."""

    def _config_file(document) -> str:
        path = tmp_path / 'linkshorter.json'
        path.write_text(json.dumps(document) if not isinstance(document, str) else document, encoding='utf-8')
        return str(path)

    return _config_file


# -------------------------------
# 1. Defaults
# -------------------------------


def test_load_config_defaults():
    config = load_config()

    assert config == AppConfig()
    assert config.default_ttl_ms == 86_400_000
    assert config.default_click_limit == 100
    assert config.code_length == 6
    assert config.cleanup_interval_ms == 3_600_000
    assert config.notifications_enabled is True
    assert config.link_domain == 'clck.ru'


# -------------------------------
# 2. Configuration document
# -------------------------------


def test_load_config_from_explicit_path(config_file):
    path = config_file({'default_click_limit': 7, 'link_domain': 'sho.rt', 'notifications_enabled': False})

    config = load_config(path)

    assert config.default_click_limit == 7
    assert config.link_domain == 'sho.rt'
    assert config.notifications_enabled is False
    assert config.code_length == 6


def test_load_config_from_environment_path(monkeypatch, config_file):
    monkeypatch.setenv(ENV.App.CONFIG_FILE, config_file({'code_length': 8}))

    assert load_config().code_length == 8


def test_load_config_rejects_unknown_keys(config_file):
    path = config_file({'code_length': 8, 'redis_host': 'localhost'})

    with pytest.raises(BadConfigurationError, match="'redis_host'"):
        load_config(path)


@pytest.mark.parametrize('document', ['{not json', '[1, 2, 3]'])
def test_load_config_rejects_malformed_documents(config_file, document):
    with pytest.raises(BadConfigurationError):
        load_config(config_file(document))


def test_load_config_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / 'missing.json')


# -------------------------------
# 3. Environment overrides
# -------------------------------


def test_environment_overrides_document(monkeypatch, config_file):
    path = config_file({'default_click_limit': 7, 'default_ttl_ms': 1000})
    monkeypatch.setenv(ENV.Link.DEFAULT_CLICK_LIMIT, '3')
    monkeypatch.setenv(ENV.Link.NOTIFICATIONS_ENABLED, 'off')
    monkeypatch.setenv(ENV.Link.LINK_DOMAIN, 'https://sho.rt')

    config = load_config(path)

    assert config.default_click_limit == 3
    assert config.default_ttl_ms == 1000
    assert config.notifications_enabled is False
    assert config.link_domain == 'https://sho.rt'


@pytest.mark.parametrize(
    'variable, value',
    [
        (ENV.Link.DEFAULT_CLICK_LIMIT, 'many'),
        (ENV.Link.CODE_LENGTH, '6.5'),
        (ENV.Link.NOTIFICATIONS_ENABLED, 'maybe'),
        (ENV.Link.CLEANUP_INTERVAL_MS, '0'),
        (ENV.Link.DEFAULT_CLICK_LIMIT, '-3'),
    ],
)
def test_invalid_environment_values_raise(monkeypatch, variable, value):
    monkeypatch.setenv(variable, value)

    with pytest.raises(BadConfigurationError):
        load_config()


def test_empty_environment_values_are_ignored(monkeypatch):
    monkeypatch.setenv(ENV.Link.CODE_LENGTH, '')

    assert load_config().code_length == 6


# -------------------------------
# 4. Validation and derived values
# -------------------------------


@pytest.mark.parametrize(
    'overrides',
    [
        {'default_click_limit': 0},
        {'code_length': -1},
        {'cleanup_interval_ms': 0},
        {'default_ttl_ms': 1.5},
        {'notifications_enabled': 'yes'},
        {'link_domain': ' '},
        {'code_length': True},
    ],
)
def test_app_config_validation(overrides):
    with pytest.raises(BadConfigurationError):
        AppConfig(**overrides)


def test_negative_ttl_is_allowed():
    """A negative TTL produces links that are born expired."""
    assert AppConfig(default_ttl_ms=-1000).default_ttl == timedelta(seconds=-1)


def test_derived_values():
    config = AppConfig(default_ttl_ms=7_200_000, cleanup_interval_ms=60_000)

    assert config.default_ttl == timedelta(hours=2)
    assert config.ttl_hours == 2
    assert config.cleanup_interval == timedelta(minutes=1)
