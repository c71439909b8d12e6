from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_STORE_NAME_ENV = "MOLD_STORE_NAME"
_STORE_PATH_ENV = "MOLD_STORE_PERSISTENCE_PATH"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    store_name: str
    store_persistence_path: Optional[str]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        store_name=_read_str_env(_STORE_NAME_ENV, "mold_snapshots"),
        store_persistence_path=_read_optional_env(_STORE_PATH_ENV, None),
        log_level=_read_log_level("INFO"),
    )
