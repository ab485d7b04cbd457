from __future__ import annotations

import contextvars
import datetime as dt
import json
import logging
import os
from typing import Any

# Context variables
request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)
todo_id_var: contextvars.ContextVar[int | None] = contextvars.ContextVar("todo_id", default=None)

_EXTRA_KEYS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "prerequisites",
    "cycle",
    "tasks",
    "edges",
    "length",
)


class ContextFilter(logging.Filter):
    """Injecte les contextvars dans chaque LogRecord."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        # un ``extra={"request_id": ...}`` explicite garde la priorité
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        if getattr(record, "todo_id", None) is None:
            record.todo_id = todo_id_var.get()
        return True


class JsonFormatter(logging.Formatter):
    """Formateur JSON simple pour les logs structurés."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "timestamp": dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "request_id": getattr(record, "request_id", None),
            "todo_id": getattr(record, "todo_id", None),
            "message": record.getMessage(),
        }
        # Ajout de champs supplémentaires éventuels
        for key in _EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str | None = None) -> None:
    """Configure le root logger pour utiliser le formateur JSON."""
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(ContextFilter())
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers = [handler]


# Configure les logs dès l'import
configure_logging()
