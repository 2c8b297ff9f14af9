import pytest

from afaq_portal.config import Settings
from afaq_portal.context import AppContext
from afaq_portal.errors import ConfigError


def test_missing_base_url(monkeypatch) -> None:
    monkeypatch.delenv("AFAQ_BASE_URL", raising=False)
    with pytest.raises(ConfigError):
        Settings.from_env(load_dotenv_file=False)


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("AFAQ_BASE_URL", "https://afaq.test")
    monkeypatch.setenv("AFAQ_SESSION_COOKIE", "s%3Aabc")
    monkeypatch.setenv("AFAQ_LANGUAGE", "ar-JO")
    monkeypatch.setenv("AFAQ_TIMEOUT", "5")
    monkeypatch.setenv("AFAQ_REDIRECT_DELAY", "0.25")
    monkeypatch.setenv("AFAQ_LOG_LEVEL", "debug")

    settings = Settings.from_env(load_dotenv_file=False)

    assert settings.base_url == "https://afaq.test"
    assert settings.session_cookie == "s%3Aabc"
    assert settings.language == "ar"
    assert settings.timeout == 5.0
    assert settings.redirect_delay == 0.25
    assert settings.log_level == "DEBUG"


def test_defaults(monkeypatch) -> None:
    monkeypatch.setenv("AFAQ_BASE_URL", "https://afaq.test")
    for name in ("AFAQ_SESSION_COOKIE", "AFAQ_LANGUAGE", "AFAQ_TIMEOUT", "AFAQ_REDIRECT_DELAY", "AFAQ_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env(load_dotenv_file=False)

    assert settings.session_cookie is None
    assert settings.language == "en"
    assert settings.redirect_delay == 0.5


def test_malformed_number(monkeypatch) -> None:
    monkeypatch.setenv("AFAQ_BASE_URL", "https://afaq.test")
    monkeypatch.setenv("AFAQ_TIMEOUT", "soon")
    with pytest.raises(ConfigError):
        Settings.from_env(load_dotenv_file=False)


def test_context_from_settings() -> None:
    settings = Settings(base_url="https://afaq.test/", language="ar", redirect_delay=0.1)
    ctx = AppContext.create(settings)
    assert ctx.client.login_url == "https://afaq.test/api/login"
    assert ctx.i18n.direction == "rtl"
    assert ctx.redirect_delay == 0.1
