"""Application configuration helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True)
class Settings:
    """Holds configuration values for the application."""

    default_port: int = 25565
    session_timeout_seconds: float = 7.0
    socket_timeout_seconds: float = 7.0
    app_version: str = "0.1.0"
    api_base: str = "/api"
    allowed_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8765

    @property
    def api_prefix(self) -> str:
        """Return the URL prefix used for API routes."""

        return self.api_base.rstrip("/")


def get_settings() -> Settings:
    """Provide application settings, applying environment overrides."""

    settings = Settings()
    overrides: dict[str, object] = {}

    session_timeout = os.getenv("STATUS_TIMEOUT_SECONDS")
    if session_timeout:
        overrides["session_timeout_seconds"] = _positive_float(
            "STATUS_TIMEOUT_SECONDS", session_timeout
        )

    socket_timeout = os.getenv("SOCKET_TIMEOUT_SECONDS")
    if socket_timeout:
        overrides["socket_timeout_seconds"] = _positive_float(
            "SOCKET_TIMEOUT_SECONDS", socket_timeout
        )

    default_port = os.getenv("STATUS_DEFAULT_PORT")
    if default_port:
        overrides["default_port"] = _port("STATUS_DEFAULT_PORT", default_port)

    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        overrides["log_level"] = log_level.upper()

    api_host = os.getenv("API_HOST")
    if api_host:
        overrides["host"] = api_host

    api_port = os.getenv("API_PORT")
    if api_port:
        overrides["port"] = _port("API_PORT", api_port)

    if overrides:
        return replace(settings, **overrides)
    return settings


def _positive_float(name: str, raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw_value!r}.") from None
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero.")
    return value


def _port(name: str, raw_value: str) -> int:
    try:
        value = int(raw_value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}.") from None
    if not 0 <= value <= 65535:
        raise ValueError(f"{name} must be between 0 and 65535.")
    return value
