import importlib

import pytest

from cardtracker import config


@pytest.mark.parametrize("path", ["/api/cards", "api/cards", "/api/offers/7", ""])
def test_api_url_empty_base_returns_path(path):
    assert config.api_url(path, base="") == path


def test_api_url_single_separator():
    assert config.api_url("/y", base="http://x/") == "http://x/y"
    assert config.api_url("y", base="http://x") == "http://x/y"
    assert config.api_url("//y", base="http://x//") == "http://x/y"


def test_resolve_api_base_dev_ignores_override():
    assert config.resolve_api_base(True, "https://api.example.com") == ""
    assert config.resolve_api_base(False, None) == ""
    assert config.resolve_api_base(False, "https://api.example.com") == "https://api.example.com"


def test_absolute_url_uses_origin_for_root_relative():
    assert config.absolute_url("/api/cards", "http://host:9000") == "http://host:9000/api/cards"
    assert config.absolute_url("https://api.example.com/api/cards", "http://host:9000") == "https://api.example.com/api/cards"


def test_env_configuration(monkeypatch):
    monkeypatch.setenv("CARDTRACKER_DEV", "false")
    monkeypatch.setenv("CARDTRACKER_API_BASE_URL", "https://prices.example.com/")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.API_BASE == "https://prices.example.com/"
        assert reloaded.api_url("/api/expansions") == "https://prices.example.com/api/expansions"

        monkeypatch.setenv("CARDTRACKER_DEV", "1")
        reloaded = importlib.reload(config)
        assert reloaded.API_BASE == ""
        assert reloaded.api_url("/api/expansions") == "/api/expansions"
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_bad_timeout_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("CARDTRACKER_HTTP_TIMEOUT", "soon")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.HTTP_TIMEOUT == 15.0

        monkeypatch.setenv("CARDTRACKER_HTTP_TIMEOUT", "2.5")
        assert importlib.reload(config).HTTP_TIMEOUT == 2.5
    finally:
        monkeypatch.undo()
        importlib.reload(config)
