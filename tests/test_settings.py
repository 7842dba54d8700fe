"""환경 변수 기반 CORS 설정 테스트."""

from datetime import timedelta

import pytest

from corsguard import ConfigError, build
from corsguard.core.config import Settings


def test_defaults():
    config = Settings().to_cors_config()
    config.validate()
    assert config.allowed_origins == ["http://localhost:5173"]
    assert config.max_age == timedelta(hours=12)
    assert config.options_response_status_code == 204


def test_from_environment(monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", '["https://*.example.com", "https://foo.com"]')
    monkeypatch.setenv("CORS_ALLOW_WILDCARD", "true")
    monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "true")
    monkeypatch.setenv("CORS_MAX_AGE", "600")

    handler = build(Settings().to_cors_config())

    assert handler.matcher.allowed("https://api.example.com")
    assert handler.normal_headers["Access-Control-Allow-Credentials"] == "true"
    assert handler.preflight_headers["Access-Control-Max-Age"] == "600"


def test_allow_all_ignores_origin_list(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ALL_ORIGINS", "true")
    config = Settings().to_cors_config()
    assert config.allowed_origins == []
    assert build(config).matcher.allow_all


def test_invalid_origin_from_environment(monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", '["google.com"]')
    with pytest.raises(ConfigError):
        build(Settings().to_cors_config())
