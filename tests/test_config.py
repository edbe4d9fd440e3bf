import pytest
from pydantic import ValidationError

from storefront.config import DEFAULT_BACKEND_URL, Settings, load_settings


def test_backend_url_from_environment(monkeypatch):
    monkeypatch.setenv("BACKEND_URL", "https://api.shop.example/")

    settings = load_settings()

    assert settings.backend_url == "https://api.shop.example"


def test_backend_url_falls_back_when_unset(monkeypatch):
    monkeypatch.delenv("BACKEND_URL", raising=False)

    assert Settings(_env_file=None).backend_url == DEFAULT_BACKEND_URL


def test_empty_backend_url_uses_fallback(monkeypatch):
    monkeypatch.setenv("BACKEND_URL", "")

    assert Settings(_env_file=None).backend_url == DEFAULT_BACKEND_URL


def test_defaults(monkeypatch):
    monkeypatch.delenv("DEBOUNCE_MS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.debounce_ms == 300
    assert settings.request_timeout == 10.0


def test_negative_debounce_rejected():
    with pytest.raises(ValidationError):
        Settings(debounce_ms=-1)


@pytest.mark.parametrize("url", ["http://[::1", "not a url", "ftp://files.example"])
def test_malformed_backend_url_rejected(url):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, backend_url=url)
