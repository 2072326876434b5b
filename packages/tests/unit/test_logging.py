"""Unit tests for daytime._logging: formatters and config.

Test Techniques Used:
    - Specification-based Testing: JsonFormatter output schema
    - Equivalence Partitioning: One daytime error per context shape
    - State Inspection: Root logger handler/level after configure
    - Fixture Isolation: Save/restore root logger state
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from daytime._errors import (
    InvalidFieldError,
    PatternSyntaxError,
    TimeRangeError,
    UnknownSymbolError,
)
from daytime._logging import (
    JsonFormatter,
    TextFormatter,
    configure_logging,
    error_context,
)
from daytime._settings import LoggingSettings


def _make_record(
    message: str = "hello",
    level: int = logging.INFO,
    exc: BaseException | None = None,
) -> logging.LogRecord:
    record = logging.LogRecord(
        name="daytime._time",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    if exc is not None:
        try:
            raise exc
        except BaseException:
            record.exc_info = sys.exc_info()
    return record


class TestJsonFormatter:
    """JsonFormatter output schema.

    Technique: Specification-based Testing.
    """

    def test_has_required_fields(self) -> None:
        result = json.loads(JsonFormatter(service="daytime").format(_make_record()))
        assert {"timestamp", "level", "logger", "message", "service"} <= result.keys()
        assert result["logger"] == "daytime._time"
        assert result["message"] == "hello"

    def test_timestamp_is_utc(self) -> None:
        result = json.loads(JsonFormatter().format(_make_record()))
        assert datetime.fromisoformat(result["timestamp"]).tzinfo == UTC

    def test_version_omitted_when_empty(self) -> None:
        result = json.loads(JsonFormatter(service="svc").format(_make_record()))
        assert "version" not in result

    def test_version_included_when_set(self) -> None:
        fmt = JsonFormatter(service="svc", version="0.1.0")
        assert json.loads(fmt.format(_make_record()))["version"] == "0.1.0"

    def test_exception_included(self) -> None:
        try:
            raise OverflowError("past midnight")
        except OverflowError:
            record = _make_record()
            record.exc_info = sys.exc_info()
        output = JsonFormatter().format(record)
        assert "\n" not in output
        assert "past midnight" in json.loads(output)["exception"]

    def test_daytime_error_fields(self) -> None:
        exc = InvalidFieldError("hour", 25, 0, 24)
        record = _make_record("bad", logging.ERROR, exc=exc)
        result = json.loads(JsonFormatter().format(record))
        assert result["error_type"] == "invalid_field"
        assert result["error"] == {
            "field": "hour",
            "value": 25,
            "lower": 0,
            "upper": 24,
        }
        assert "exception" in result

    def test_unknown_symbol_reports_symbol(self) -> None:
        record = _make_record(exc=UnknownSymbolError("Y", "HH:Y"))
        result = json.loads(JsonFormatter().format(record))
        assert result["error_type"] == "unknown_symbol"
        assert result["error"] == {"symbol": "Y", "pattern": "HH:Y"}

    def test_time_range_reports_direction(self) -> None:
        record = _make_record(exc=TimeRangeError(-1, 86_399_999_999))
        result = json.loads(JsonFormatter().format(record))
        assert result["error_type"] == "time_range"
        assert result["error"]["direction"] == "underflow"

    def test_foreign_exception_has_no_error_type(self) -> None:
        result = json.loads(JsonFormatter().format(_make_record(exc=KeyError("x"))))
        assert "error_type" not in result
        assert "error" not in result


class TestErrorContext:
    """Locating attributes pulled from daytime errors.

    Technique: Equivalence Partitioning.
    """

    def test_pattern_syntax(self) -> None:
        exc = PatternSyntaxError("HH 'at", 3, "Unterminated quote")
        assert error_context(exc) == {"pattern": "HH 'at", "position": 3}

    def test_non_daytime_error_is_empty(self) -> None:
        assert error_context(ValueError("nope")) == {}


class TestTextFormatter:
    """Text lines with daytime errors condensed.

    Technique: Specification-based Testing.
    """

    def test_daytime_error_rendered_as_context_line(self) -> None:
        exc = InvalidFieldError("minute", 60, 0, 60)
        record = _make_record("bad", logging.ERROR, exc=exc)
        output = TextFormatter().format(record)
        assert "Traceback" not in output
        assert "invalid_field: field='minute' value=60 lower=0 upper=60" in output

    def test_foreign_exception_keeps_traceback(self) -> None:
        output = TextFormatter().format(_make_record(exc=KeyError("x")))
        assert "Traceback" in output
        assert "KeyError" in output


class TestConfigureLogging:
    """Root logger state after configure_logging.

    Technique: State Inspection.
    """

    @pytest.mark.usefixtures("_restore_root_logger")
    def test_installs_single_stream_handler(self) -> None:
        configure_logging(LoggingSettings())
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert root.level == logging.WARNING

    @pytest.mark.usefixtures("_restore_root_logger")
    def test_json_format_selects_json_formatter(self) -> None:
        configure_logging(LoggingSettings(format="json"), version="1.0")
        assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)

    @pytest.mark.usefixtures("_restore_root_logger")
    def test_text_format_selects_text_formatter(self) -> None:
        configure_logging(LoggingSettings(format="text"))
        assert isinstance(logging.getLogger().handlers[0].formatter, TextFormatter)

    @pytest.mark.usefixtures("_restore_root_logger")
    def test_file_handler_added(self, tmp_path: Path) -> None:
        log_file = tmp_path / "daytime.log"
        configure_logging(
            LoggingSettings(file=str(log_file), max_file_size_mb=2, backup_count=5)
        )
        handlers = logging.getLogger().handlers
        file_handlers = [h for h in handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 2 * 1024 * 1024
        assert file_handlers[0].backupCount == 5

    @pytest.mark.usefixtures("_restore_root_logger")
    def test_level_applied(self) -> None:
        configure_logging(LoggingSettings(level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG
