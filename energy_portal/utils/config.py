"""Runtime settings resolved once from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


DEFAULT_BACKEND_URL = "http://127.0.0.1:8000"


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _resolve_backend_url() -> str:
    # NEXT_PUBLIC_BACKEND_URL is accepted so older deployments keep working.
    url = _env_str("BACKEND_URL", "") or _env_str("NEXT_PUBLIC_BACKEND_URL", DEFAULT_BACKEND_URL)
    return url.rstrip("/")


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str

    backend_url: str
    backend_timeout_seconds: float

    api_prefix: str
    api_host: str
    api_port: int
    portal_api_url: str
    dashboard_url: str

    dataset_default_page: int
    dataset_default_limit: int
    monthly_divisor: float


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    api_host = _env_str("API_HOST", "127.0.0.1")
    api_port = _env_int("API_PORT", 3000)
    return Settings(
        app_name=_env_str("APP_NAME", "Energy Consumption Portal"),
        app_version=_env_str("APP_VERSION", "0.1.0"),
        log_level=_env_str("LOG_LEVEL", "INFO"),
        backend_url=_resolve_backend_url(),
        backend_timeout_seconds=_env_float("BACKEND_TIMEOUT_SECONDS", 10.0),
        api_prefix="/api",
        api_host=api_host,
        api_port=api_port,
        portal_api_url=_env_str("PORTAL_API_URL", f"http://{api_host}:{api_port}").rstrip("/"),
        dashboard_url=_env_str("DASHBOARD_URL", "http://127.0.0.1:8501").rstrip("/"),
        dataset_default_page=1,
        dataset_default_limit=50,
        monthly_divisor=4.0,
    )
