"""Logging pipeline setup."""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from tickstream.api.logging import LoggingConfig
from tickstream.runtime.config import resolve_log_level_name

_QUEUE_LISTENER: QueueListener | None = None
_QUEUE_HANDLER: QueueHandler | None = None

_STANDARD_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "asctime",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter with extra-field preservation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


def configure_tickstream_logging(config: LoggingConfig) -> None:
    """Configure root logging with optional queued file output."""
    global _QUEUE_LISTENER, _QUEUE_HANDLER

    shutdown_tickstream_logging()

    level = getattr(logging, config.level_name.upper(), logging.INFO)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    _QUEUE_HANDLER = QueueHandler(log_queue)
    root.addHandler(_QUEUE_HANDLER)
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def setup_tickstream_logging(
    level_name: str | None = None,
    *,
    console_format: str = "text",
    file_path: str | None = None,
) -> bool:
    """Configure logging if no handlers are present.

    Returns True when this call installed the handlers, so the caller owns
    `shutdown_tickstream_logging`. File output is always JSON lines.
    """
    root = logging.getLogger()
    if root.handlers:
        return False
    configure_tickstream_logging(
        LoggingConfig(
            level_name=level_name or resolve_log_level_name(default="INFO"),
            console_format=console_format,
            file_path=file_path,
            file_format="json",
        )
    )
    return True


def shutdown_tickstream_logging() -> None:
    """Flush, stop and detach the queued file pipeline, if one is running."""
    global _QUEUE_LISTENER, _QUEUE_HANDLER

    if _QUEUE_HANDLER is not None:
        logging.getLogger().removeHandler(_QUEUE_HANDLER)
        _QUEUE_HANDLER = None
    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
