import pytest
import requests

from modinject import ConfigurationError, ReservedTokenError, create_injector
from modinject.core import config
from modinject.core.config import (
    InjectorSettings,
    create_settings,
    get_injector_settings,
    get_settings,
)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(
        "injector:\n"
        "  strict: true\n"
        "  reserved_tokens:\n"
        "    - secret\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding='utf-8'
    )
    return path


def test_defaults_without_configuration():
    settings = InjectorSettings()

    assert settings.strict is False
    assert settings.reserved_tokens == []


def test_reads_injector_section(config_file):
    settings = get_injector_settings(create_settings(str(config_file)))

    assert settings.strict is True
    assert settings.reserved_tokens == ['secret']


def test_config_file_from_environment(config_file, monkeypatch):
    monkeypatch.setenv('CONFIG_FILE', str(config_file))

    assert get_settings().get('logging.level') == 'DEBUG'
    assert get_injector_settings().strict is True


def test_create_injector_uses_configured_defaults(config_file, monkeypatch, registry):
    monkeypatch.setenv('CONFIG_FILE', str(config_file))
    registry.define_module('myModule', []).constant('secret', 1)

    assert create_injector([], registry=registry).strict
    with pytest.raises(ReservedTokenError):
        create_injector(['myModule'], registry=registry)


def test_blank_reserved_token_is_rejected(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("injector:\n  reserved_tokens:\n    - '  '\n", encoding='utf-8')

    with pytest.raises(ConfigurationError) as exc_info:
        get_injector_settings(create_settings(str(path)))

    assert exc_info.value.config_key == 'injector'


def test_scalar_reserved_tokens_value_is_rejected(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("injector:\n  reserved_tokens: secret\n", encoding='utf-8')

    with pytest.raises(ConfigurationError) as exc_info:
        get_injector_settings(create_settings(str(path)))

    assert exc_info.value.config_key == 'injector'


class FakeResponse:

    def __init__(self, text):
        self.text = text

    def raise_for_status(self):
        pass


def test_downloads_remote_configuration(tmp_path, monkeypatch):
    monkeypatch.setattr(requests, 'get', lambda url, timeout: FakeResponse("injector:\n  strict: true\n"))

    path = config._download_config('https://example.com/config.yaml', str(tmp_path))

    assert open(path, encoding='utf-8').read() == "injector:\n  strict: true\n"


def test_failed_download_falls_back_to_cache(tmp_path, monkeypatch):
    monkeypatch.setattr(requests, 'get', lambda url, timeout: FakeResponse("cached: true\n"))
    cached = config._download_config('https://example.com/config.yaml', str(tmp_path))

    def unreachable(url, timeout):
        raise requests.ConnectionError('offline')

    monkeypatch.setattr(requests, 'get', unreachable)

    assert config._download_config('https://example.com/config.yaml', str(tmp_path)) == cached
    with pytest.raises(ConfigurationError):
        config._download_config('https://example.com/other.yaml', str(tmp_path))
