"""
Tests for the Logger facade.
"""

import inspect
import logging
import os

import pytest
from structlog.testing import capture_logs

from logtree.core.exceptions.custom_exceptions import ChainProtocolError, SinkError
from logtree.logger import (
    Level,
    Sink,
    StdlibHandler,
    context_fields,
    current_fields,
    helper,
    make,
    tee,
)
from logtree.sinks.capture import CaptureSink
from logtree.value.fields import F, M


class BrokenSink(Sink):
    def log_entry(self, entry):
        raise OSError("disk full")

    def sync(self):
        raise OSError("sync failed")


class TalkativeError(Exception):
    def format_error(self, p):
        for piece in ("msg", "fun", "loc", "extra"):
            p.print(piece)


@helper
def log_through_helper(log):
    log.info("from helper")


class TestLevels:
    """Test cases for Level."""

    def test_order(self):
        assert Level.DEBUG < Level.INFO < Level.WARN < Level.ERROR
        assert Level.ERROR < Level.CRITICAL < Level.FATAL

    def test_parse(self):
        assert Level.parse("warning") == Level.WARN
        assert Level.parse(" Info ") == Level.INFO
        with pytest.raises(ValueError):
            Level.parse("loud")

    def test_str(self):
        assert str(Level.CRITICAL) == "CRITICAL"


class TestLogging:
    """Test cases for logging entries."""

    def test_fields(self, captured_logger):
        log, capture = captured_logger
        log.info("hello", F("who", "world"), ("count", 2), retries=3)

        assert capture.messages() == ["hello"]
        assert capture.entries[0].text == "who: world\ncount: 2\nretries: 3"

    def test_level_filtering(self, capture):
        log = make(capture, level=Level.WARN)
        log.debug("d")
        log.info("i")
        log.warn("w")
        log.error("e")

        assert capture.messages() == ["w", "e"]

    def test_leveled(self, captured_logger):
        log, capture = captured_logger
        quiet = log.leveled("error")
        quiet.info("dropped")
        log.info("kept")

        assert capture.messages() == ["kept"]
        assert not quiet.enabled(Level.WARN)
        assert quiet.enabled(Level.CRITICAL)

    def test_field_order(self, captured_logger):
        """Test context fields come first, then logger fields, then call fields."""
        log, capture = captured_logger
        with context_fields(F("ctx", 1)):
            log.with_fields(F("lg", 2)).info("m", F("call", 3))

        assert capture.entries[0].fields.names() == ("ctx", "lg", "call")

    def test_with_fields_is_immutable(self, captured_logger):
        log, capture = captured_logger
        derived = log.with_fields(F("a", 1))
        log.info("plain")
        derived.info("with")

        assert capture.entries[0].fields.names() == ()
        assert capture.entries[1].fields.names() == ("a",)

    def test_named(self, captured_logger):
        log, capture = captured_logger
        log.named("http").named("").named("client").info("m")

        entry = capture.entries[0].entry
        assert entry.logger_names == ("http", "client")
        assert entry.logger_name == "http.client"

    def test_entry_time_is_utc(self, captured_logger):
        log, capture = captured_logger
        log.info("m")
        assert capture.entries[0].entry.time.utcoffset().total_seconds() == 0

    def test_error_syncs(self, captured_logger):
        log, capture = captured_logger
        log.info("i")
        assert capture.syncs == 0
        log.error("e")
        log.critical("c")
        assert capture.syncs == 2

    def test_fatal_exits(self, captured_logger):
        log, capture = captured_logger
        with pytest.raises(SystemExit) as exc_info:
            log.fatal("bye")

        assert exc_info.value.code == 1
        assert capture.levels() == (Level.FATAL,)
        assert capture.syncs == 1

    def test_tee(self):
        first = CaptureSink()
        second = CaptureSink()
        log = tee(make(first).named("a"), make(second, level=Level.INFO))

        log.debug("only first")
        log.info("both")

        assert first.messages() == ["only first", "both"]
        assert second.messages() == ["both"]
        assert first.entries[0].entry.logger_names == ("a",)
        assert second.entries[0].entry.logger_names == ()

    def test_chain_protocol_error_propagates(self, captured_logger):
        log, _ = captured_logger
        with pytest.raises(ChainProtocolError):
            log.info("bad", F("error", TalkativeError()))


class TestCallerLocation:
    """Test cases for the reported call site."""

    def test_location(self, captured_logger):
        log, capture = captured_logger
        line = inspect.currentframe().f_lineno + 1
        log.info("here")

        entry = capture.entries[0].entry
        assert os.path.basename(entry.file) == os.path.basename(__file__)
        assert entry.line == line
        assert entry.func.endswith("test_location")

    def test_helper_skipped(self, captured_logger):
        log, capture = captured_logger
        line = inspect.currentframe().f_lineno + 1
        log_through_helper(log)

        entry = capture.entries[0].entry
        assert entry.line == line
        assert entry.func.endswith("test_helper_skipped")


class TestSinkFailures:
    """Test cases for sinks that raise."""

    def test_failing_sink_reported(self, capture):
        log = tee(make(BrokenSink()), make(capture))

        with capture_logs() as logs:
            log.info("still delivered")

        assert capture.messages() == ["still delivered"]
        assert logs[0]["event"] == "sink failed to log entry"
        assert logs[0]["sink"] == "BrokenSink"
        assert logs[0]["log_level"] == "error"
        assert logs[0]["error_code"] == "SINK_WRITE_ERROR"
        sink_error = logs[0]["exc_info"]
        assert isinstance(sink_error, SinkError)
        assert isinstance(sink_error.__cause__, OSError)
        assert sink_error.details["sink"] == "BrokenSink"

    def test_failing_sync_reported(self, capture):
        log = tee(make(BrokenSink()), make(capture))

        with capture_logs() as logs:
            log.sync()

        assert capture.syncs == 1
        assert [entry["event"] for entry in logs] == ["sink failed to sync"]
        assert logs[0]["error_code"] == "SINK_SYNC_ERROR"

    def test_failing_close_reported(self, capture):
        log = tee(make(BrokenSink()), make(capture))

        with capture_logs() as logs:
            log.close()

        assert capture.syncs == 1
        assert logs[0]["event"] == "sink failed to close"
        assert logs[0]["error_code"] == "SINK_CLOSE_ERROR"


class TestContextFields:
    """Test cases for context_fields."""

    def test_nesting(self):
        assert current_fields() == M()
        with context_fields(F("a", 1)):
            with context_fields(("b", 2)) as fields:
                assert fields == M(F("a", 1), F("b", 2))
            assert current_fields() == M(F("a", 1))
        assert current_fields() == M()


class TestStdlibHandler:
    """Test cases for the logging module bridge."""

    def test_forwarding(self, capture):
        std = logging.getLogger("tests.bridge")
        handler = StdlibHandler(make(capture))
        std.addHandler(handler)
        std.setLevel(logging.DEBUG)
        std.propagate = False
        try:
            std.warning("hi %s", "there")
        finally:
            std.removeHandler(handler)

        captured = capture.entries[0]
        assert captured.message == "hi there"
        assert captured.level == Level.WARN
        assert captured.entry.logger_names == ("stdlib",)
        assert captured.text == "logger: tests.bridge"
        assert os.path.basename(captured.entry.file) == os.path.basename(__file__)

    def test_exception_info(self, capture):
        std = logging.getLogger("tests.bridge.exc")
        handler = StdlibHandler(make(capture))
        std.addHandler(handler)
        std.propagate = False
        try:
            try:
                raise ValueError("boom")
            except ValueError:
                std.exception("failed")
        finally:
            std.removeHandler(handler)

        captured = capture.entries[0]
        assert captured.level == Level.ERROR
        assert captured.fields.names() == ("logger", "error")
        assert capture.syncs == 1
