from pathlib import Path

import pytest

from job_hunter.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    create_llm_client,
    get_llm_settings,
    load_profile,
)
from job_hunter.errors import ConfigError
from job_hunter.models import UserProfile

EXAMPLE_PROFILE = Path(__file__).resolve().parent.parent / "config" / "profile.example.yaml"


def test_defaults():
    settings = get_llm_settings()
    assert settings.api_key == ""
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout == DEFAULT_TIMEOUT


def test_groq_key_is_accepted_as_fallback(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", " gsk-123 ")
    assert get_llm_settings().api_key == "gsk-123"
    monkeypatch.setenv("LLM_API_KEY", "sk-primary")
    assert get_llm_settings().api_key == "sk-primary"


@pytest.mark.parametrize("raw", ["soon", "-3", "0"])
def test_invalid_timeout_falls_back(monkeypatch, raw):
    monkeypatch.setenv("LLM_TIMEOUT", raw)
    assert get_llm_settings().timeout == DEFAULT_TIMEOUT


def test_timeout_from_env(monkeypatch):
    monkeypatch.setenv("LLM_TIMEOUT", "12.5")
    assert get_llm_settings().timeout == 12.5


def test_client_requires_api_key():
    with pytest.raises(ConfigError):
        create_llm_client()


def test_client_uses_settings(monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "sk-test")
    monkeypatch.setenv("LLM_BASE_URL", "http://localhost:11434/v1")
    client = create_llm_client()
    assert str(client.base_url).rstrip("/") == "http://localhost:11434/v1"


def test_missing_profile(tmp_path):
    with pytest.raises(ConfigError) as info:
        load_profile(tmp_path / "profile.yaml")
    assert info.value.code == "config_error"


def test_profile_must_be_mapping(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_profile(path)


def test_example_profile_loads():
    data = load_profile(EXAMPLE_PROFILE)
    assert data["contact"]["email"] == "jane.doe@example.com"
    profile = UserProfile.from_dict(data)
    assert "Python" in profile.skills
    assert profile.experience[0].company == "Acme"
