"""Tests for environment-driven configuration."""

import pytest

from webmail_client import config
from webmail_client.config import ClientSettings, get_settings, load_env
from webmail_client.utils.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("WEBMAIL_BASE_URL", "WEBMAIL_PAGE_SIZE", "WEBMAIL_REQUEST_TIMEOUT", "WEBMAIL_LOG_DIR"):
        # setenv first so teardown also removes values load_dotenv writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Keep module globals from leaking between tests
    for name in ("BASE_URL", "PAGE_SIZE", "REQUEST_TIMEOUT", "LOG_DIR"):
        monkeypatch.setattr(config, name, getattr(config, name))
    monkeypatch.chdir(tmp_path)


def test_defaults(tmp_path):
    load_env(tmp_path / "missing.env")
    settings = get_settings()
    assert settings.page_size == 25
    assert settings.base_url == "http://localhost:9009"
    assert settings.request_timeout == 30.0


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("WEBMAIL_BASE_URL", "https://mail.example.com/")
    monkeypatch.setenv("WEBMAIL_PAGE_SIZE", "50")
    monkeypatch.setenv("WEBMAIL_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("WEBMAIL_LOG_DIR", str(tmp_path / "logs"))
    load_env(tmp_path / "missing.env")

    settings = get_settings()
    assert settings.base_url == "https://mail.example.com"
    assert settings.page_size == 50
    assert settings.request_timeout == 2.5
    assert config.LOG_DIR == tmp_path / "logs"


def test_dotenv_file_is_read(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("WEBMAIL_PAGE_SIZE=10\n")
    load_env(env_file)
    assert get_settings().page_size == 10


@pytest.mark.parametrize("value", ["0", "-5", "ten"])
def test_invalid_page_size(monkeypatch, tmp_path, value):
    monkeypatch.setenv("WEBMAIL_PAGE_SIZE", value)
    with pytest.raises(ConfigError):
        load_env(tmp_path / "missing.env")


def test_settings_validate_directly():
    with pytest.raises(ConfigError):
        ClientSettings(page_size=0)
    with pytest.raises(ConfigError):
        ClientSettings(request_timeout=0)
