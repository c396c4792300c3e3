"""Load profile and env configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from openai import OpenAI

from job_hunter.errors import ConfigError
from job_hunter.log import get_logger

log = get_logger(__name__)

load_dotenv()

CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
PROFILE_PATH: Path = CONFIG_DIR / "profile.yaml"

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_VISION_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class LLMSettings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    vision_model: str = DEFAULT_VISION_MODEL
    timeout: float = DEFAULT_TIMEOUT


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_api_key() -> str:
    return get_env("LLM_API_KEY") or get_env("GROQ_API_KEY")


def _parse_timeout(raw: str) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        log.warning("Invalid LLM_TIMEOUT %r, using %.0fs", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    if value <= 0:
        log.warning("LLM_TIMEOUT must be positive, using %.0fs", DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return value


def get_llm_settings() -> LLMSettings:
    return LLMSettings(
        api_key=get_api_key(),
        base_url=get_env("LLM_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
        model=get_env("LLM_MODEL", DEFAULT_MODEL) or DEFAULT_MODEL,
        vision_model=get_env("LLM_VISION_MODEL", DEFAULT_VISION_MODEL) or DEFAULT_VISION_MODEL,
        timeout=_parse_timeout(get_env("LLM_TIMEOUT")),
    )


def create_llm_client(settings: LLMSettings | None = None) -> OpenAI:
    """Build the OpenAI-compatible client handed to the analyzer."""
    settings = settings or get_llm_settings()
    if not settings.api_key:
        raise ConfigError("LLM_API_KEY (or GROQ_API_KEY) is not set")
    log.debug("LLM client → %s (timeout %.0fs)", settings.base_url, settings.timeout)
    return OpenAI(api_key=settings.api_key, base_url=settings.base_url, timeout=settings.timeout)


def load_profile(path: Path | None = None) -> dict[str, Any]:
    path = path or PROFILE_PATH
    if not path.exists():
        raise ConfigError(f"Profile not found: {path}", {"path": str(path)})
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Profile must be a mapping: {path}", {"path": str(path)})
    return data
