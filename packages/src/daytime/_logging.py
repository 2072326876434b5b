"""Log formatting for the daytime command-line tool.

The library modules only call ``logging.getLogger(__name__)`` and
never install handlers.  The CLI calls :func:`configure_logging` once
per invocation with its :class:`LoggingSettings`.

Both formatters understand :class:`~daytime._errors.DaytimeError`:
when a record carries one in ``exc_info``, its ``error_type`` and the
attributes that locate the failure (``field``, ``symbol``,
``direction``, ...) are rendered as data rather than left inside a
traceback.  A log line for ``Time(25)`` therefore reads::

    {"level": "ERROR", ..., "error_type": "invalid_field",
     "error": {"field": "hour", "value": 25, "lower": 0, "upper": 24}}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from types import TracebackType
from typing import Any

from daytime._errors import DaytimeError
from daytime._settings import LoggingSettings

_ONE_MB = 1024 * 1024

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Attributes set by the DaytimeError subclasses, in rendering order.
_CONTEXT_ATTRS = (
    "field",
    "value",
    "lower",
    "upper",
    "direction",
    "symbol",
    "pattern",
    "position",
)

_ExcInfo = tuple[type[BaseException], BaseException, TracebackType | None]


def error_context(exc: BaseException) -> dict[str, Any]:
    """Return the locating attributes of a daytime error.

    Non-daytime exceptions yield an empty dict.
    """
    if not isinstance(exc, DaytimeError):
        return {}
    return {
        name: getattr(exc, name) for name in _CONTEXT_ATTRS if hasattr(exc, name)
    }


def _daytime_error(record: logging.LogRecord) -> DaytimeError | None:
    if record.exc_info and isinstance(record.exc_info[1], DaytimeError):
        return record.exc_info[1]
    return None


class JsonFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects (NDJSON).

    Fields:

    - ``timestamp``: ISO 8601 in UTC
    - ``level``, ``logger``, ``message``
    - ``service`` and ``version`` (version omitted when empty)
    - ``error_type``: set when the record carries a daytime error
    - ``error``: that error's :func:`error_context`, when non-empty
    - ``exception``: the formatted traceback, when present
    - ``stack_info``: when logged with ``stack_info=True``
    """

    def __init__(
        self,
        *,
        service: str = "",
        version: str = "",
    ) -> None:
        super().__init__()
        self._service = service
        self._version = version

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self._service,
        }
        if self._version:
            entry["version"] = self._version

        error = _daytime_error(record)
        if error is not None:
            entry["error_type"] = error.error_type
            context = error_context(error)
            if context:
                entry["error"] = context

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines; daytime errors render as one context line.

    Other exceptions keep the usual traceback.
    """

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def formatException(self, ei: _ExcInfo) -> str:  # type: ignore[override]
        exc = ei[1]
        if not isinstance(exc, DaytimeError):
            return super().formatException(ei)
        pairs = " ".join(f"{k}={v!r}" for k, v in error_context(exc).items())
        return f"  {exc.error_type}: {pairs}" if pairs else f"  {exc.error_type}"


def configure_logging(
    settings: LoggingSettings,
    *,
    service: str = "daytime",
    version: str = "",
) -> None:
    """Replace the root logger's handlers according to *settings*.

    A ``stderr`` handler is always installed.  ``settings.file`` adds a
    :class:`~logging.handlers.RotatingFileHandler` that shares the
    same formatter.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    formatter: logging.Formatter
    if settings.format == "json":
        formatter = JsonFormatter(service=service, version=version)
    else:
        formatter = TextFormatter()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if settings.file is not None:
        file_handler = RotatingFileHandler(
            settings.file,
            maxBytes=settings.max_file_size_mb * _ONE_MB,
            backupCount=settings.backup_count,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(settings.level)
