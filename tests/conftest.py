from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from job_hunter.models import Education, Experience, UserProfile

_ENV_VARS = (
    "APP_MODE", "APP_ENV", "ENABLE_DEMO_FEATURES",
    "LLM_API_KEY", "GROQ_API_KEY", "LLM_BASE_URL", "LLM_MODEL", "LLM_VISION_MODEL", "LLM_TIMEOUT",
)


def completion(text: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client():
    """OpenAI client double; set ``client.reply("...")`` to choose the answer."""
    c = MagicMock()
    c.reply = lambda text: setattr(c.chat.completions.create, "return_value", completion(text))
    c.reply("{}")
    return c


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        skills=["Python", "AWS", "Docker"],
        experience=[
            Experience(title="Backend Engineer", company="Acme", description="Payments"),
            Experience(title="Software Engineer", company="Initech"),
        ],
        education=[Education(degree="BSc", field="Computer Science")],
    )


@pytest.fixture
def fake_page():
    page = MagicMock()
    page.url = "https://boards.example.com/acme/jobs/1"
    page.screenshot.return_value = b"\x89PNG-bytes"
    page.content.return_value = "<html>" + "x" * 20_000 + "</html>"
    return page
