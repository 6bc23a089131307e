"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from kubetriage.models.config import (
    DefaultsConfig,
    KubeConfig,
    LogConfig,
    LogFetchConfig,
    ReportConfig,
    TriageConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBETRIAGE_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(key: str, default: float, min_val: float | None = None) -> float:
    val = float(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    return val


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> TriageConfig:
    """Load configuration from KUBETRIAGE_* environment variables."""
    return TriageConfig(
        defaults=DefaultsConfig(
            tail_lines=_env_int("LINES", 50, min_val=1, max_val=10000),
            no_color=_env_bool("NO_COLOR", False),
        ),
        log_fetch=LogFetchConfig(
            timeout_seconds=_env_float("LOG_FETCH_TIMEOUT", 15.0, min_val=0.0),
        ),
        report=ReportConfig(
            max_primary_events=_env_int("MAX_EVENTS", 10, min_val=1, max_val=100),
        ),
        kube=KubeConfig(
            kubeconfig=_env("KUBECONFIG", ""),
            context=_env("CONTEXT", ""),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
        ),
    )
