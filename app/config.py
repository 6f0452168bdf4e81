"""
Runtime settings read from ``LINE_EDITOR_*`` environment variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

ENV_PREFIX = "LINE_EDITOR_"
LOG_FORMAT = "%(asctime)s  %(name)s  %(levelname)s  %(message)s"


def _env(name: str, default: str) -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _env_int(name: str, fallback: int) -> int:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class Settings:
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000


def load_settings(*, default_log_level: str = "INFO") -> Settings:
    return Settings(
        log_level=_env("LOG_LEVEL", default_log_level).upper(),
        host=_env("HOST", "127.0.0.1"),
        port=_env_int("PORT", 8000),
    )
