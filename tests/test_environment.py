import logging

import pytest

from job_hunter.environment import (
    allow_demo_features,
    assert_not_production,
    get_app_mode,
    get_environment_config,
    is_demo_mode,
    is_production_mode,
    log_environment_info,
    validate_environment,
)
from job_hunter.errors import ConfigError, DemoFeatureError


def test_unset_is_not_demo():
    assert is_demo_mode() is False
    assert get_app_mode() == "production"
    assert is_production_mode() is True


def test_exact_demo_value_enables_demo(monkeypatch):
    monkeypatch.setenv("APP_MODE", "demo")
    assert is_demo_mode() is True
    assert get_app_mode() == "demo"


@pytest.mark.parametrize("value", ["", "Demo", "DEMO", "production", "demo ", " demo", "staging", "true", "1"])
def test_anything_else_is_not_demo(monkeypatch, value):
    monkeypatch.setenv("APP_MODE", value)
    assert is_demo_mode() is False
    assert get_app_mode() == "production"


def test_repeated_calls_are_stable(monkeypatch):
    monkeypatch.setenv("APP_MODE", "demo")
    assert {is_demo_mode() for _ in range(5)} == {True}
    monkeypatch.setenv("APP_MODE", "staging")
    assert {is_demo_mode() for _ in range(5)} == {False}


def test_demo_features_require_explicit_development_opt_in(monkeypatch):
    assert allow_demo_features() is False
    monkeypatch.setenv("ENABLE_DEMO_FEATURES", "true")
    assert allow_demo_features() is False
    monkeypatch.setenv("APP_ENV", "development")
    assert allow_demo_features() is True


def test_environment_config(monkeypatch):
    monkeypatch.setenv("APP_MODE", "demo")
    cfg = get_environment_config()
    assert cfg.mode == "demo"
    assert cfg.is_demo and not cfg.is_production
    assert cfg.allow_demo_features


def test_assert_not_production_blocks_demo_features():
    with pytest.raises(DemoFeatureError) as info:
        assert_not_production("sample data")
    assert info.value.feature == "sample data"


def test_assert_not_production_allows_demo(monkeypatch):
    monkeypatch.setenv("APP_MODE", "demo")
    assert_not_production("sample data")


def test_validate_requires_api_key_in_production():
    with pytest.raises(ConfigError) as info:
        validate_environment()
    assert "LLM_API_KEY" in str(info.value)
    assert info.value.context["errors"]


def test_validate_passes_with_fallback_key(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    validate_environment()


def test_validate_skips_key_check_in_demo(monkeypatch):
    monkeypatch.setenv("APP_MODE", "demo")
    validate_environment()


def test_validate_warns_about_demo_features_in_production(monkeypatch, caplog):
    monkeypatch.setenv("LLM_API_KEY", "sk-test")
    monkeypatch.setenv("ENABLE_DEMO_FEATURES", "true")
    with caplog.at_level(logging.WARNING, logger="job_hunter.environment"):
        validate_environment()
    assert "ENABLE_DEMO_FEATURES" in caplog.text


def test_log_environment_info_reports_mode_without_secrets(monkeypatch, caplog):
    monkeypatch.setenv("APP_MODE", "demo")
    monkeypatch.setenv("LLM_API_KEY", "sk-very-secret-123")
    monkeypatch.setenv("GROQ_API_KEY", "gsk-very-secret-456")
    with caplog.at_level(logging.INFO, logger="job_hunter.environment"):
        log_environment_info()
    assert "Mode: demo" in caplog.text
    assert "Demo features: enabled" in caplog.text
    assert "DEMO mode" in caplog.text
    assert "secret" not in caplog.text
