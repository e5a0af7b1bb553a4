"""
Logging setup for the payload hydrator.

Library modules only ask for a logger and attach counts through `extra=`;
they never configure handlers. The CLI calls `configure_logging` once, which
routes everything to stderr either as console lines or as one JSON object per
record. Payload values are never logged, only field counts and names.

Usage:
    from payload_hydrator.utils.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", json_logs=True)
    log = get_logger(__name__)
    log.debug("Hydrated record", extra={"fields": 3, "missing": 1})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Serialize a record to one JSON line, lifting `extra=` attributes to the top level."""
    body: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    body.update(
        (key, value) for key, value in vars(record).items() if key not in _RESERVED_ATTRS
    )
    # extra={"extra": {...}} nests the fields one level down; flatten it too.
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        body.update(nested)
    if record.exc_info:
        body["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        body["stack_info"] = record.stack_info
    return json.dumps(body, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def build_logging_config(level: str = "INFO", json_logs: bool = False) -> Dict[str, Any]:
    """
    Return the `dictConfig` mapping used by `configure_logging`.

    A single stderr handler on the root logger, so stdout stays free for
    command output such as `hydrate --json`.
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": CONSOLE_DATEFMT},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_logs else "console",
                "level": level,
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Install the root handler.

    Parameters
    ----------
    level : str
        Level name, case-insensitive ("debug", "INFO", ...).
    json_logs : bool
        Emit JSON lines instead of console lines.
    force : bool
        When False and the root logger already has handlers (e.g. an embedding
        application configured logging), leave them untouched.
    """
    if not force and logging.getLogger().handlers:
        return
    logging.config.dictConfig(build_logging_config(level=level, json_logs=json_logs))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["build_logging_config", "configure_logging", "get_logger", "JsonFormatter"]
