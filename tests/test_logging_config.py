"""
Unit tests for relative_drawing.logging_config.

Tests:
- JSON and console formatters
- Handler installation on the package logger
- log_timing / timed
- LogContext fields on package records
"""

import json
import logging
import sys
from io import StringIO

import pytest

from relative_drawing.logging_config import (
    PACKAGE_LOGGER,
    ConsoleFormatter,
    JSONFormatter,
    LogContext,
    configure_default_logging,
    get_logger,
    log_timing,
    record_extras,
    setup_logging,
    timed,
)


def make_record(name="relative_drawing.drawing.fitting", level=logging.INFO,
                msg="Resolved layout", args=(), exc_info=None):
    return logging.LogRecord(
        name=name, level=level, pathname="fitting.py", lineno=12,
        msg=msg, args=args, exc_info=exc_info,
    )


class CaptureHandler(logging.Handler):
    """Keeps emitted records in a list."""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestRecordExtras:
    """Tests for record_extras()."""

    def test_only_user_fields(self):
        """Test standard LogRecord attributes are excluded."""
        record = make_record()
        record.shapes = 3
        assert record_extras(record) == {"shapes": 3}


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        """Test level, logger and interpolated message."""
        data = json.loads(JSONFormatter().format(
            make_record(msg="ratio=%s", args=("50",))
        ))
        assert data["level"] == "INFO"
        assert data["logger"] == "relative_drawing.drawing.fitting"
        assert data["message"] == "ratio=50"
        assert "timestamp" in data
        assert "location" not in data

    def test_extra_fields(self):
        """Test extra fields are copied; unserializable ones as strings."""
        record = make_record()
        record.example = "line"
        record.ratio = object()
        data = json.loads(JSONFormatter().format(record))
        assert data["example"] == "line"
        assert isinstance(data["ratio"], str)

    def test_extra_fields_disabled(self):
        """Test include_extra=False drops extra fields."""
        record = make_record()
        record.example = "line"
        data = json.loads(JSONFormatter(include_extra=False).format(record))
        assert "example" not in data

    def test_location_for_warning(self):
        """Test warnings carry file and line."""
        data = json.loads(JSONFormatter().format(make_record(level=logging.WARNING)))
        assert data["location"] == {"file": "fitting.py", "line": 12, "function": None}

    def test_exception(self):
        """Test exception text is included."""
        try:
            raise ZeroDivisionError("division by zero")
        except ZeroDivisionError:
            record = make_record(level=logging.ERROR, exc_info=sys.exc_info())
        data = json.loads(JSONFormatter().format(record))
        assert "ZeroDivisionError" in data["exception"]

    def test_unicode(self):
        """Test non-ASCII text is written unescaped."""
        output = JSONFormatter().format(make_record(msg="Текст ⌀ label"))
        assert "Текст ⌀" in output


class TestConsoleFormatter:
    """Tests for ConsoleFormatter."""

    def test_package_prefix_stripped(self):
        """Test logger names are shown relative to the package."""
        result = ConsoleFormatter(use_colors=False).format(make_record())
        assert " drawing.fitting: Resolved layout" in result
        assert "relative_drawing." not in result

    def test_foreign_logger_name_kept(self):
        """Test names outside the package are shown in full."""
        assert ConsoleFormatter.short_name("svgwrite.base") == "svgwrite.base"

    def test_extra_fields_inline(self):
        """Test extras are appended as key=value pairs."""
        record = make_record()
        record.elapsed_seconds = 0.012345
        record.handles = [1, 2, 3, 4, 5]
        result = ConsoleFormatter(use_colors=False).format(record)
        assert "elapsed_seconds=0.0123" in result
        assert "handles=[...5 items]" in result

    def test_extra_fields_hidden(self):
        """Test show_extra=False hides extras."""
        record = make_record()
        record.example = "line"
        result = ConsoleFormatter(use_colors=False, show_extra=False).format(record)
        assert "example=" not in result

    def test_colors(self):
        """Test ANSI codes appear only when enabled."""
        record = make_record(level=logging.ERROR)
        assert "\033[" not in ConsoleFormatter(use_colors=False).format(record)
        assert "\033[31m" in ConsoleFormatter(use_colors=True).format(record)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_configures_package_logger(self):
        """Test the package logger gets the level and stops propagating."""
        logger = setup_logging(level=logging.WARNING, console=False)
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.WARNING
        assert logger.propagate is False

    def test_repeated_setup_replaces_handlers(self):
        """Test calling setup twice does not duplicate handlers."""
        setup_logging(console=True)
        logger = setup_logging(console=True)
        assert len(logger.handlers) == 1

    def test_json_file(self, tmp_path):
        """Test JSON lines are written to the log file."""
        path = tmp_path / "render.log.json"
        logger = setup_logging(json_file=path, console=False)
        get_logger("relative_drawing.drawing").info("Wrote %s", "out.svg", extra={"bytes": 120})
        for handler in logger.handlers:
            handler.flush()
        data = json.loads(path.read_text(encoding="utf-8").strip())
        assert data["message"] == "Wrote out.svg"
        assert data["bytes"] == 120
        assert data["logger"] == "relative_drawing.drawing"


class TestLogTiming:
    """Tests for log_timing and timed."""

    @pytest.fixture
    def stream_logger(self):
        logger = logging.getLogger("timing_probe")
        logger.setLevel(logging.DEBUG)
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(handler)
        yield logger, stream
        logger.removeHandler(handler)

    def test_start_and_completion(self, stream_logger):
        """Test both records mention the operation."""
        logger, stream = stream_logger
        with log_timing(logger, "Rendering drawing", shapes=2) as timing:
            pass
        output = stream.getvalue()
        assert "Starting: Rendering drawing" in output
        assert "Completed: Rendering drawing" in output
        assert timing["elapsed_seconds"] >= 0

    def test_failure_logged_and_reraised(self, stream_logger):
        """Test exceptions are logged at ERROR and propagate."""
        logger, stream = stream_logger
        with pytest.raises(ZeroDivisionError):
            with log_timing(logger, "Fitting"):
                raise ZeroDivisionError("zero extent")
        assert "ERROR Failed: Fitting" in stream.getvalue()

    def test_completion_carries_fields(self):
        """Test extra fields reach the completion record."""
        logger = logging.getLogger("timing_fields")
        logger.setLevel(logging.DEBUG)
        capture = CaptureHandler()
        logger.addHandler(capture)
        try:
            with log_timing(logger, "Rendering", shapes=4) as timing:
                timing["elements"] = 7
        finally:
            logger.removeHandler(capture)
        complete = capture.records[-1]
        assert complete.event == "complete"
        assert complete.shapes == 4
        assert complete.elements == 7

    def test_timed_decorator(self):
        """Test the decorator keeps the result and the function name."""
        logger = logging.getLogger("timed_probe")
        logger.addHandler(logging.NullHandler())

        @timed(logger=logger)
        def fit(width):
            return width / 2

        assert fit(100) == 50
        assert fit.__name__ == "fit"


class TestLogContext:
    """Tests for LogContext."""

    def test_fields_on_child_logger_records(self):
        """Test context fields reach records of package child loggers."""
        logger = setup_logging(console=False)
        capture = CaptureHandler()
        logger.addHandler(capture)
        with LogContext(example="three-circles-horizontal"):
            get_logger("relative_drawing.drawing.drawing").info("Rendering")
        get_logger("relative_drawing.drawing.drawing").info("After")
        assert capture.records[0].example == "three-circles-horizontal"
        assert not hasattr(capture.records[1], "example")

    def test_current(self):
        """Test current() tracks nested contexts."""
        assert LogContext.current() is None
        with LogContext(a=1) as outer:
            with LogContext(b=2) as inner:
                assert LogContext.current() is inner
            assert LogContext.current() is outer
        assert LogContext.current() is None


class TestConfigureDefaultLogging:
    """Tests for configure_default_logging()."""

    def test_levels(self):
        """Test INFO by default and DEBUG when verbose."""
        assert configure_default_logging().level == logging.INFO
        assert configure_default_logging(verbose=True).level == logging.DEBUG
