from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict, Iterable, Sequence

from settings import get_settings

# Attributes passed through ``extra=`` that are appended to each log line.
MESSAGE_CONTEXT_KEYS = (
    "message_type",
    "controller_id",
    "field",
    "sequence",
    "error_kind",
    "reason",
)

_configured = False


class ContextualFormatter(logging.Formatter):

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        context_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._context_keys: Sequence[str] = tuple(context_keys or MESSAGE_CONTEXT_KEYS)

    def context_of(self, record: logging.LogRecord) -> str:
        pairs = []
        for key in self._context_keys:
            value = getattr(record, key, None)
            if value is not None:
                pairs.append(f"{key}={value}")
        return " ".join(pairs)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = self.context_of(record)
        return f"{line} | {context}" if context else line


def build_logging_config(level: str | int) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "message_context": {
                "()": "logging_config.ContextualFormatter",
                "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
                "style": "%",
                "context_keys": list(MESSAGE_CONTEXT_KEYS),
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "message_context",
            }
        },
        "loggers": {
            # httpx logs every request line at INFO.
            "httpx": {"level": "WARNING"},
        },
        "root": {"handlers": ["default"], "level": level},
    }


def configure_logging(level: str | int | None = None) -> None:
    """Configure process-wide logging once; later calls are no-ops."""
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level
    dictConfig(build_logging_config(log_level))
    _configured = True
