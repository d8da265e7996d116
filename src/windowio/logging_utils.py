"""Logging setup for the ``windowio`` package logger and structured event helpers."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

PACKAGE_LOGGER = "windowio"
JSON_LOGS_ENV = "WINDOWIO_JSON_LOGS"

_HANDLER_NAME = "windowio-stream"
_PLAIN_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def json_logs_requested(json_logs: bool | None = None) -> bool:
    """Explicit choice wins; otherwise read ``WINDOWIO_JSON_LOGS``."""

    if json_logs is not None:
        return json_logs
    return os.getenv(JSON_LOGS_ENV, "false").strip().lower() in {"1", "true", "yes", "on"}


class JsonEventFormatter(logging.Formatter):
    """Render each record as a single JSON object line."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        try:
            payload = json.loads(message)
        except ValueError:
            payload = {"message": message}
        if not isinstance(payload, dict):
            payload = {"message": payload}
        payload.setdefault("level", record.levelname)
        payload.setdefault("logger", record.name)
        return json.dumps(payload, default=str)


def configure_logging(level: str | int = "INFO", json_logs: bool | None = None) -> logging.Logger:
    """Attach a stream handler to the ``windowio`` logger and return it.

    Only the package logger is touched, so applications keep control of the
    root logger. Calling this again replaces the level and formatter of the
    existing handler instead of adding a second one.
    """

    log = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    log.setLevel(level)

    handler = next((h for h in log.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        log.addHandler(handler)
    handler.setFormatter(JsonEventFormatter() if json_logs_requested(json_logs) else logging.Formatter(_PLAIN_FORMAT))
    return log


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    level: int = logging.INFO,
    json_logs: bool | None = None,
    **fields: Any,
) -> None:
    """Emit ``event`` with ``fields``, as JSON text or as the plain mapping."""

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    if json_logs_requested(json_logs):
        logger.log(level, json.dumps(payload, default=str))
    else:
        logger.log(level, payload)
