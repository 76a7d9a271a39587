# src/logging/logger.py — v2
"""Build log formatting: every record carries the build, profile and stage.

configure_logging() attaches one console handler (and an optional rotating
file handler) to the ``alpsgraph`` logger, the parent of every module logger
in the package.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, TYPE_CHECKING, Any

from alpsgraph.logging.context import LogContext, get_context
from alpsgraph.logging.handlers import create_rotating_handler

if TYPE_CHECKING:
    from alpsgraph.config.settings import Settings

ROOT_LOGGER = "alpsgraph"


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per record; build context fields sit at top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(get_context().as_dict())

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line records for terminals: ``time [LEVEL] logger <ctx> - msg``."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            _timestamp(record).strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname:8s}]",
            record.name,
        ]
        parts.extend(_context_parts(get_context()))
        parts.append(f"- {record.getMessage()}")
        line = " ".join(parts)
        if record.exc_info and record.exc_info[1] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _context_parts(ctx: LogContext) -> list[str]:
    parts = []
    if ctx.build_id:
        parts.append(f"<{ctx.build_id}>")
    if ctx.profile_file:
        parts.append(f"[{ctx.profile_file}]")
    if ctx.stage:
        parts.append(f"({ctx.stage})")
    return parts


def configure_logging(settings: Settings, stream: IO[str] | None = None) -> logging.Logger:
    """Route ``alpsgraph`` records according to the logging section of Settings.

    Replaces handlers installed by an earlier call, so reconfiguring does not
    duplicate output.

    Args:
        settings: Provides log_level, log_format, log_file, log_rotation and
            log_retention.
        stream: Console stream; defaults to stdout.

    Returns:
        The configured ``alpsgraph`` logger.
    """
    formatter: logging.Formatter = (
        JsonFormatter() if settings.log_format == "json" else TextFormatter()
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if settings.log_file:
        handlers.append(
            create_rotating_handler(
                settings.log_file,
                rotation=settings.log_rotation,
                retention=settings.log_retention,
            )
        )

    root = logging.getLogger(ROOT_LOGGER)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(settings.log_level)
    return root
