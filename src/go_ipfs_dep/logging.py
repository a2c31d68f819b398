"""Logging configuration and console output."""
import datetime
import json
import logging
import sys
from typing import Any, List

import structlog
from structlog.types import EventDict, Processor

IGNORED_LOGGERS = ["aiohttp", "asyncio"]


def add_timestamp(_, __, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to the event dict."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return event_dict


def flatten_event(_, __, event_dict: EventDict) -> EventDict:
    """Lift dict-shaped events into the top level of the event dict."""
    event = event_dict.get("event")
    if isinstance(event, dict):
        event_dict.update({k: v for k, v in event.items() if k != "event"})
        event_dict["event"] = event.get("event", "")
    return event_dict


def level_filter(logger: Any, name: str, event_dict: EventDict) -> EventDict:
    """Drop records from noisy third-party loggers."""
    logger_name = getattr(logger, "name", "")
    if any(ignored in logger_name for ignored in IGNORED_LOGGERS):
        raise structlog.DropEvent
    return event_dict


class CompactJSONRenderer:
    """Single-line JSON renderer with minimal output."""
    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        items = {
            "ts": event_dict.pop("timestamp", None),
            "lvl": event_dict.pop("level", "???"),
            "msg": event_dict.pop("event", ""),
        }
        if other := dict(event_dict):
            items["data"] = other
        return json.dumps(items, separators=(",", ":"), default=str)


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Structured events go to stderr: compact JSON when stderr is a terminal,
    console rendering otherwise. Stdout is reserved for progress lines.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )

    json_processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        level_filter,
        flatten_event,
        structlog.stdlib.add_log_level,
        add_timestamp,
        CompactJSONRenderer(),
    ]

    console_processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        flatten_event,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=json_processors if sys.stderr.isatty() else console_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def report(message: str) -> None:
    """Write a human-readable progress line to stdout."""
    sys.stdout.write(f"{message}\n")
    sys.stdout.flush()


# Until configure_logging() runs, route events through stdlib logging so
# library use never writes structured events to stdout
if not structlog.is_configured():
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            flatten_event,
            structlog.stdlib.add_log_level,
            add_timestamp,
            CompactJSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
