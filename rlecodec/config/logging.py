"""Logging helpers for the RLE codec tooling."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from logging.config import dictConfig
from typing import Any

import msgspec

from ..errors import RLEError
from .model import CodecConfig

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))) | {
    "asctime",
    "message",
}

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _to_log_value(value: Any) -> Any:
    """Map token streams, enums and structs onto JSON-friendly values."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"[{' '.join(f'{b:02X}' for b in bytes(value))}]"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, msgspec.Struct):
        return {key: _to_log_value(item) for key, item in msgspec.structs.asdict(value).items()}
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class StructuredLogFormatter(logging.Formatter):
    """One JSON object per record, logger names relative to the package."""

    PREFIX = "rlecodec."

    def _extras(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: _to_log_value(value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }

    def format(self, record: logging.LogRecord) -> str:
        logger_name = record.name.removeprefix(self.PREFIX)

        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": logger_name,
            "message": record.getMessage(),
        }

        extras = self._extras(record)
        if extras:
            payload["extra"] = extras

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
            error = record.exc_info[1]
            if isinstance(error, RLEError):
                payload["error"] = {"kind": error.kind.name, "position": error.position}

        return msgspec.json.encode(payload).decode("utf-8")


def configure_logging(config: CodecConfig) -> None:
    """Configure root logging based on codec settings."""

    level_name = "DEBUG" if config.debug_logging else "INFO"
    formatter = "structured" if config.log_format == "json" else "text"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "()": "rlecodec.config.logging.StructuredLogFormatter",
                },
                "text": {
                    "format": TEXT_FORMAT,
                },
            },
            "handlers": {
                "rlecodec": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "level": level_name,
                    "formatter": formatter,
                }
            },
            "root": {
                "level": level_name,
                "handlers": ["rlecodec"],
            },
        }
    )

    logging.getLogger("rlecodec").debug("Logging configured at level %s", level_name)
