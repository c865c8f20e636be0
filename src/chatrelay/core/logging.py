"""
Chatrelay Logging — colorized dev output, JSON lines in production.

Features:
- Color formatter for dev mode (auto-detects TTY)
- JSON structured formatter for production (CHATRELAY_LOG_FORMAT=json)
- Suppresses noisy third-party loggers (httpx, httpcore, openai, anthropic)
- Configurable via CHATRELAY_LOG_LEVEL, CHATRELAY_LOG_COLOR, CHATRELAY_LOG_FORMAT

Structured log extra fields (pass via logger.info(..., extra={...})):
    request_id, provider, mode, events, duration_ms, status
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


COLORS = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[1;31m",  # Bold red
    "RESET": "\033[0m",
    "DIM": "\033[2m",
}


class ColorFormatter(logging.Formatter):
    """Colorized log formatter for terminal output."""

    def __init__(self, use_color: bool = True):
        super().__init__(
            fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)

        level_color = COLORS.get(record.levelname, "")
        reset = COLORS["RESET"]
        dim = COLORS["DIM"]

        orig_levelname = record.levelname
        orig_name = record.name

        record.levelname = f"{level_color}{record.levelname}{reset}"
        record.name = f"{dim}{record.name}{reset}"

        result = super().format(record)

        # Restore so other handlers see the plain record
        record.levelname = orig_levelname
        record.name = orig_name

        return result


# Structured log fields forwarded from logger.info(..., extra={...})
_STRUCTURED_FIELDS = (
    "request_id",
    "provider",
    "mode",
    "events",
    "duration_ms",
    "status",
)


class StructuredFormatter(logging.Formatter):
    """JSON log formatter for production / log aggregation.

    Each log line is a single JSON object. Extra fields passed via
    logger.info("msg", extra={"request_id": "...", "duration_ms": 42})
    are included at the top level for easy querying.

    Enable with: CHATRELAY_LOG_FORMAT=json
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for key in _STRUCTURED_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _should_use_color() -> bool:
    """Auto-detect color support."""
    env_val = os.getenv("CHATRELAY_LOG_COLOR", "auto").lower()
    if env_val == "true":
        return True
    if env_val == "false":
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def setup_logging() -> None:
    """Configure logging for the entire application.

    Call this once at startup.

    Env vars:
        CHATRELAY_LOG_LEVEL  — DEBUG / INFO / WARNING / ERROR (default: INFO)
        CHATRELAY_LOG_COLOR  — true / false / auto (default: auto, TTY detection)
        CHATRELAY_LOG_FORMAT — text / json (default: text)
    """
    level_name = os.getenv("CHATRELAY_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    log_format = os.getenv("CHATRELAY_LOG_FORMAT", "text").lower()

    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers (avoid duplicate output)
    root.handlers.clear()

    if log_format == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = ColorFormatter(use_color=_should_use_color())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    # SDK request/response chatter
    for noisy_logger in [
        "httpx",
        "httpcore",
        "httpcore.http11",
        "httpcore.connection",
        "openai",
        "openai._base_client",
        "anthropic",
        "anthropic._base_client",
        "uvicorn.access",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    logging.getLogger("uvicorn.error").setLevel(level)

    logger = logging.getLogger("chatrelay")
    logger.debug("Logging configured (level=%s, format=%s)", level_name, log_format)
