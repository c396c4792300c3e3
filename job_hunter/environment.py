"""Production vs demo mode detection.

Demo mode renders sample data instead of calling the model provider. It is
only ever switched on by explicit configuration: ``APP_MODE=demo``. Anything
else, including an unset variable, means production.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

from job_hunter.errors import ConfigError, DemoFeatureError
from job_hunter.log import get_logger

log = get_logger(__name__)

AppMode = Literal["production", "demo"]

MODE_VAR = "APP_MODE"
DEMO_VALUE = "demo"


@dataclass(frozen=True)
class EnvironmentConfig:
    mode: AppMode
    is_development: bool
    is_production: bool
    is_demo: bool
    allow_demo_features: bool


def is_demo_mode() -> bool:
    """True iff APP_MODE is exactly "demo" (case-sensitive, untrimmed)."""
    return os.environ.get(MODE_VAR) == DEMO_VALUE


def get_app_mode() -> AppMode:
    return "demo" if is_demo_mode() else "production"


def is_production_mode() -> bool:
    return get_app_mode() == "production"


def is_development() -> bool:
    return os.environ.get("APP_ENV") == "development"


def allow_demo_features() -> bool:
    """Demo features: demo mode, or development with an explicit opt-in."""
    if is_demo_mode():
        return True
    return is_development() and os.environ.get("ENABLE_DEMO_FEATURES") == "true"


def get_environment_config() -> EnvironmentConfig:
    mode = get_app_mode()
    return EnvironmentConfig(
        mode=mode,
        is_development=is_development(),
        is_production=mode == "production",
        is_demo=mode == "demo",
        allow_demo_features=allow_demo_features(),
    )


def assert_not_production(feature: str) -> None:
    if is_production_mode() and not allow_demo_features():
        raise DemoFeatureError(feature)


def validate_environment() -> None:
    """Raise ConfigError listing every variable the current mode is missing."""
    errors: list[str] = []

    if is_production_mode():
        if not (os.environ.get("LLM_API_KEY", "").strip() or os.environ.get("GROQ_API_KEY", "").strip()):
            errors.append("LLM_API_KEY (or GROQ_API_KEY) is required in production mode")
        if os.environ.get("ENABLE_DEMO_FEATURES") == "true":
            log.warning("ENABLE_DEMO_FEATURES is set in production mode")

    if errors:
        raise ConfigError(
            "Environment validation failed:\n"
            + "\n".join(f"  - {e}" for e in errors)
            + f"\nFor demo mode, set {MODE_VAR}={DEMO_VALUE}",
            {"errors": errors},
        )


def log_environment_info() -> None:
    cfg = get_environment_config()
    log.info("Mode: %s", cfg.mode)
    log.info("APP_ENV: %s", os.environ.get("APP_ENV") or "not set")
    log.info("Demo features: %s", "enabled" if cfg.allow_demo_features else "disabled")
    if cfg.is_demo:
        log.warning("Running in DEMO mode — sample data only, not for production use")
