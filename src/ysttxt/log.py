"""Logging helpers that keep every ysttxt logger under one namespace.

This module provides:
    - JsonLogFormatter: compact JSON formatter with stable fields.
    - setup_base_logger: one-time configuration of the 'ysttxt' logger.
    - get_logger: namespaced logger factory ('ysttxt.*').

The library itself never calls setup_base_logger; applications (and the
demo script) decide how records are emitted.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

BASE_LOGGER = "ysttxt"


class JsonLogFormatter(logging.Formatter):
    """Emit log records as one JSON object per line.

    Fields:
        - ts: ISO-8601 UTC timestamp with millisecond precision.
        - level: Level name.
        - module: Logger name (e.g. 'ysttxt.engine').
        - msg: Formatted message.
        - ctx: Optional dict attached to the record as 'context'.
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure the base 'ysttxt' logger once and return it.

    Args:
        json_logs: Use JsonLogFormatter instead of the plain text format.
        level: Level for the base logger.
        stream: Target stream, stderr by default.
    """
    base = logging.getLogger(BASE_LOGGER)
    if base.handlers:
        base.setLevel(level)
        return base

    base.setLevel(level)
    base.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    base.addHandler(handler)
    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the 'ysttxt' namespace."""
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER}.{name}")
