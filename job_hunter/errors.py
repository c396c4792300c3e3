"""Exception hierarchy shared by the analyzer, config and environment helpers."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


class JobHunterError(Exception):
    """Base error; carries a short machine-readable code and optional context."""

    def __init__(self, message: str, code: str = "job_hunter_error", context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context,
            "timestamp": self.timestamp,
        }


class ConfigError(JobHunterError):
    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, "config_error", context)


class ProviderError(JobHunterError):
    """The model provider call failed (network, auth, quota, server error)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
        code: str = "provider_error",
    ) -> None:
        super().__init__(message, code, context)
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class ResponseFormatError(ProviderError):
    """The provider answered, but the answer could not be used."""

    def __init__(self, message: str, raw: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, context=context, code="response_format_error")
        self.raw = raw


class DemoFeatureError(JobHunterError):
    def __init__(self, feature: str) -> None:
        super().__init__(
            f'Demo feature "{feature}" cannot be used in production mode. '
            "Set APP_MODE=demo to enable demo features.",
            "demo_feature_error",
            {"feature": feature},
        )
        self.feature = feature
