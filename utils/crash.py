"""Crash records for exceptions nobody handled."""

import json
import os
import sys
import traceback

from utils.ksuid import generate_ksuid
from utils.timestamp import format_timestamp

# Overridden from config.logging.crash_file by configure()
_crash_log = "logs/crash.log"


def configure(crash_file):
    global _crash_log
    _crash_log = crash_file


def _write_crash(record):
    """Append one JSON line to the crash log. Never raises."""
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_crash_log, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except Exception:
        pass


def _record(exc_type, exc_value, tb, context=None):
    record = {
        "id": generate_ksuid(),
        "timestamp": format_timestamp(),
        "type": exc_type.__name__ if exc_type else "Unknown",
        "msg": str(exc_value) if exc_value else "",
        "traceback": tb,
    }
    # Tracked errors already carry an id; keep it so the two can be joined
    error_id = getattr(exc_value, "error_id", None)
    if error_id:
        record["error_id"] = error_id
    if context:
        record["context"] = context
    return record


def log_crash(exc_type, exc_value, exc_tb):
    """sys.excepthook replacement: report to stderr and the crash log."""
    tb = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    record = _record(exc_type, exc_value, tb)

    sys.stderr.write(f"\n{'=' * 60}\nCRASH [{record['id']}] {record['timestamp']}\n{'=' * 60}\n")
    sys.stderr.write(f"{record['type']}: {record['msg']}\n{'-' * 60}\n{tb}{'=' * 60}\n\n")
    _write_crash(record)
    return record


def log_async_crash(exc, context_dict, logger=None):
    """Record an exception reported by the event loop. Never raises."""
    if exc is not None:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        record = _record(type(exc), exc, tb, str(context_dict))
    else:
        record = _record(None, context_dict.get("message", "Unknown"), None, str(context_dict))
        record["type"] = "AsyncError"

    if logger:
        logger.error("Async exception", error=record["msg"], crash_id=record["id"],
                     task=str(context_dict.get("future", "unknown")))

    _write_crash(record)
    return record


def create_async_handler(logger=None):
    """Create async exception handler for event loop."""
    def handler(loop, context):
        log_async_crash(context.get("exception"), context, logger)
    return handler


def install_crash_handler():
    sys.excepthook = log_crash
