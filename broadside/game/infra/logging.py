"""Logging setup: text or JSON console output plus an optional JSONL file.

Log messages follow an ``event key=value ...`` shape. The JSON formatter
splits such messages into an ``event`` name and a ``fields`` mapping.
"""

from __future__ import annotations

import json
import logging
import os
import queue
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

__all__ = ["JsonFormatter", "LoggingConfig", "build_logging_config", "configure_logging"]

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_QUEUE_LISTENER: QueueListener | None = None
_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}
_EVENT_MESSAGE = re.compile(r"(?P<event>[a-z][a-z0-9_]*)(?P<pairs>(?:\s+\w+=(?:\w*\([^)]*\)|\S+))*)")
_PAIR = re.compile(r"(\w+)=(\w*\([^)]*\)|\S+)")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``key=value`` message parts as fields."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": message,
        }
        event, fields = parse_event_message(message)
        if event is not None:
            payload["event"] = event
        fields.update((k, v) for k, v in record.__dict__.items() if k not in _RECORD_ATTRIBUTES)
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def parse_event_message(message: str) -> tuple[str | None, dict[str, object]]:
    """Split ``"event a=1 b=x"`` into ``("event", {"a": 1, "b": "x"})``.

    Messages of any other shape give ``(None, {})``.
    """
    match = _EVENT_MESSAGE.fullmatch(message.strip())
    if match is None:
        return None, {}
    fields: dict[str, object] = {}
    for key, raw in _PAIR.findall(match.group("pairs")):
        fields[key] = int(raw) if raw.lstrip("-").isdigit() else raw
    return match.group("event"), fields


def build_logging_config() -> LoggingConfig:
    """Read logging settings from the environment."""
    level_name = os.getenv("BROADSIDE_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
    console_format = os.getenv("LOG_FORMAT", "text").lower()
    file_path = os.getenv("BROADSIDE_LOG_FILE", "").strip() or None
    return LoggingConfig(level_name=level_name, console_format=console_format, file_path=file_path)


def configure_logging(config: LoggingConfig) -> None:
    """Install console logging on the root logger.

    With a file path set, both sinks sit behind a queue so file writes happen
    on the listener thread.
    """
    global _QUEUE_LISTENER

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = _handler(logging.StreamHandler(), config.console_format)
    if not config.file_path:
        root.addHandler(console)
        return

    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sink = _handler(logging.FileHandler(path, encoding="utf-8", delay=True), config.file_format)
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _QUEUE_LISTENER = QueueListener(records, console, sink, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the file listener, if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def _handler(handler: logging.Handler, kind: str) -> logging.Handler:
    if kind.strip().lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    return handler
