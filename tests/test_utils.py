"""Unit tests for utility modules."""

import io
import json
import sys
import time

import pytest
from core.errors import BaseRoverError, InvalidInputError
from internal.logging import LogLevel, StructuredLogger
from utils.ksuid import generate_ksuid, ksuid_time
from utils.timestamp import elapsed_ms, format_timestamp, now_micros


class TestKSUID:
    """Tests for KSUID generation."""

    def test_generate_ksuid_returns_string(self):
        """KSUID is a string."""
        assert isinstance(generate_ksuid(), str)

    def test_generate_ksuid_length(self):
        """KSUID has expected length."""
        assert len(generate_ksuid()) == 27  # Base62 encoded

    def test_generate_ksuid_unique(self):
        """KSUIDs are unique."""
        ksuids = [generate_ksuid() for _ in range(100)]
        assert len(set(ksuids)) == 100

    def test_generate_ksuid_sortable(self):
        """KSUIDs from later seconds sort after earlier ones."""
        assert generate_ksuid(1700000001) > generate_ksuid(1700000000)

    def test_ksuid_time_roundtrip(self):
        assert ksuid_time(generate_ksuid(1700000000)) == 1700000000

    def test_ksuid_time_rejects_bad_length(self):
        with pytest.raises(ValueError):
            ksuid_time("abc")


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_format_timestamp_iso_format(self):
        """Timestamp is ISO 8601 format."""
        ts = format_timestamp()
        assert "T" in ts
        assert ts.endswith("Z")

    def test_format_timestamp_has_microseconds(self):
        """Timestamp includes microseconds."""
        decimal_part = format_timestamp().split(".")[1].rstrip("Z")
        assert len(decimal_part) == 6

    def test_format_timestamp_fixed_value(self):
        assert format_timestamp(0) == "1970-01-01T00:00:00.000000Z"

    def test_now_micros_reasonable_value(self):
        """now_micros returns an int after 2020-01-01."""
        micros = now_micros()
        assert isinstance(micros, int)
        assert micros > 1577836800000000

    def test_elapsed_ms(self):
        assert elapsed_ms(1_000, 3_500) == 2.5


class TestErrors:
    """Tests for tracked errors."""

    def test_error_has_id_and_timestamp(self):
        err = BaseRoverError("broken")
        assert len(err.error_id) == 27
        assert "T" in err.timestamp
        assert str(err) == f"[{err.error_id}] broken"

    def test_invalid_input_records_line(self):
        err = InvalidInputError("bad heading", line=4)
        assert err.context == {"line": 4}
        assert isinstance(err, BaseRoverError)

    def test_invalid_input_keeps_cause(self):
        cause = ValueError("x")
        err = InvalidInputError("not an integer", cause=cause)
        assert err.cause is cause

    def test_to_dict(self):
        data = InvalidInputError("bad", line=2).to_dict()
        assert data["type"] == "InvalidInputError"
        assert data["msg"] == "bad"
        assert data["context"] == {"line": 2}


class TestStructuredLogger:
    """Tests for the JSON logger."""

    def test_emits_json_line(self):
        stream = io.StringIO()
        log = StructuredLogger(LogLevel.DEBUG, stream)
        log.info("hello", rovers=2)
        record = json.loads(stream.getvalue())
        assert record["level"] == "INFO"
        assert record["msg"] == "hello"
        assert record["rovers"] == 2

    def test_filters_below_level(self):
        stream = io.StringIO()
        log = StructuredLogger(LogLevel.WARN, stream)
        log.info("quiet")
        assert stream.getvalue() == ""

    def test_error_carries_error_id(self):
        stream = io.StringIO()
        err = InvalidInputError("bad")
        StructuredLogger(LogLevel.INFO, stream).warn("rejected", error=err)
        record = json.loads(stream.getvalue())
        assert record["error_id"] == err.error_id

    def test_level_parse(self):
        assert LogLevel.parse("debug") == LogLevel.DEBUG
        assert LogLevel.parse("loud", LogLevel.INFO) == LogLevel.INFO
        with pytest.raises(ValueError):
            LogLevel.parse("loud")


class TestAsyncFileLogger:
    """Tests for the audit file logger."""

    @pytest.mark.asyncio
    async def test_writes_records(self, tmp_path):
        from internal.logging import AsyncFileLogger
        path = tmp_path / "audit" / "rovers.log"
        logger = AsyncFileLogger(str(path))
        await logger.start()
        assert logger.try_log("simulation", {"rovers": 2})
        await logger.stop()
        lines = path.read_text().splitlines()
        assert json.loads(lines[0])["kind"] == "simulation"
        assert logger.get_stats()["written"] == 1

    @pytest.mark.asyncio
    async def test_unwritable_record_is_dropped(self, tmp_path):
        """A record that cannot be serialised is counted and skipped."""
        from internal.logging import AsyncFileLogger
        circular = {}
        circular["self"] = circular
        path = tmp_path / "rovers.log"
        logger = AsyncFileLogger(str(path))
        await logger.start()
        logger.try_log("simulation", circular)
        logger.try_log("simulation", {"rovers": 1})
        await logger.stop()
        assert logger.dropped == 1
        assert logger.written == 1
        assert len(path.read_text().splitlines()) == 1

    @pytest.mark.asyncio
    async def test_unopenable_file_drops_queue(self, tmp_path):
        """A log path that cannot be opened does not break shutdown."""
        from internal.logging import AsyncFileLogger
        logger = AsyncFileLogger(str(tmp_path))
        logger.try_log("simulation", {"rovers": 1})
        await logger.start()
        await logger.stop()
        assert logger.dropped == 1
        assert logger.written == 0
        assert not logger.running

    def test_full_queue_drops(self, tmp_path):
        from internal.logging import AsyncFileLogger
        logger = AsyncFileLogger(str(tmp_path / "rovers.log"), queue_size=1)
        assert logger.try_log("simulation", {})
        assert not logger.try_log("simulation", {})
        assert logger.dropped == 1


class TestCrashHandler:
    """Tests for crash handling utilities."""

    def test_configure_sets_path(self):
        """configure() sets crash log path."""
        from utils import crash
        original = crash._crash_log
        crash.configure("/tmp/test_crash.log")
        assert crash._crash_log == "/tmp/test_crash.log"
        crash.configure(original)

    def test_install_crash_handler(self):
        """install_crash_handler sets sys.excepthook."""
        from utils.crash import install_crash_handler, log_crash
        original_hook = sys.excepthook
        install_crash_handler()
        assert sys.excepthook == log_crash
        sys.excepthook = original_hook

    def test_log_crash_writes_record(self, tmp_path, capsys):
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        try:
            err = InvalidInputError("bad")
            record = crash.log_crash(InvalidInputError, err, None)
        finally:
            crash.configure(original)
        written = json.loads((tmp_path / "crash.log").read_text())
        assert written["id"] == record["id"]
        assert written["error_id"] == err.error_id
        assert "CRASH" in capsys.readouterr().err

    def test_log_async_crash_without_exception(self, tmp_path):
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        try:
            record = crash.log_async_crash(None, {"message": "Task was destroyed"})
        finally:
            crash.configure(original)
        assert record["type"] == "AsyncError"
        assert record["msg"] == "Task was destroyed"
