import asyncio
import json
import os
import sys
import threading
from enum import IntEnum

from utils.timestamp import format_timestamp


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def parse(cls, name, default=None):
        try:
            return cls[str(name).upper()]
        except KeyError:
            if default is None:
                raise ValueError(f"unknown log level: {name!r}") from None
            return default


_logger = None
_logger_lock = threading.Lock()


class StructuredLogger:
    """JSON lines on stderr, one record per call."""

    def __init__(self, level=LogLevel.INFO, stream=None):
        self.level = level
        self.stream = stream

    def _emit(self, level, message, error=None, **kwargs):
        if level < self.level:
            return
        try:
            record = {"timestamp": format_timestamp(), "level": level.name, "msg": message, **kwargs}
            if error:
                record["err"] = str(error)
                error_id = getattr(error, "error_id", None)
                if error_id:
                    record["error_id"] = error_id
            print(json.dumps(record, default=str), file=self.stream or sys.stderr, flush=True)
        except Exception:
            pass

    def debug(self, message, **kwargs):
        self._emit(LogLevel.DEBUG, message, **kwargs)

    def info(self, message, **kwargs):
        self._emit(LogLevel.INFO, message, **kwargs)

    def warn(self, message, error=None, **kwargs):
        self._emit(LogLevel.WARN, message, error, **kwargs)

    def error(self, message, error=None, **kwargs):
        self._emit(LogLevel.ERROR, message, error, **kwargs)

    @classmethod
    def configure(cls, min_level=LogLevel.INFO, stream=None):
        global _logger
        with _logger_lock:
            _logger = cls(min_level, stream)
        return _logger


def get_logger():
    global _logger
    if _logger is None:
        with _logger_lock:
            if _logger is None:
                _logger = StructuredLogger()
    return _logger


class AsyncFileLogger:
    """Audit trail of simulation requests, written off the request path.

    Records are queued with try_log() and appended to `file_path` by a
    background task. A full queue drops the record instead of blocking.
    """

    def __init__(self, file_path, queue_size=1000):
        self.path = file_path
        self.queue = asyncio.Queue(maxsize=queue_size)
        self._task = None
        self._stop = asyncio.Event()
        self.written = 0
        self.dropped = 0

    @property
    def running(self):
        return self._task is not None and not self._task.done()

    def try_log(self, kind, data):
        try:
            self.queue.put_nowait({"timestamp": format_timestamp(), "kind": kind, "data": data})
            return True
        except asyncio.QueueFull:
            self.dropped += 1
        return False

    async def start(self):
        if self._task:
            return
        dir_path = os.path.dirname(self.path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        self._stop.clear()
        self._task = asyncio.create_task(self._run())

    async def stop(self):
        self._stop.set()
        if self._task:
            await self._task
            self._task = None
        self._discard_queued()

    def get_stats(self):
        return {
            "queued": self.queue.qsize(),
            "written": self.written,
            "dropped": self.dropped,
        }

    def _write(self, file, record):
        file.write(json.dumps(record, default=str) + "\n")
        self.written += 1

    def _write_guarded(self, file, record):
        try:
            self._write(file, record)
            file.flush()
        except (OSError, TypeError, ValueError) as exc:
            self.dropped += 1
            get_logger().warn("audit log write failed", error=exc, path=self.path)

    def _discard_queued(self):
        while not self.queue.empty():
            self.queue.get_nowait()
            self.dropped += 1

    async def _run(self):
        try:
            file = open(self.path, "a")
        except OSError as exc:
            get_logger().error("audit log unavailable", error=exc, path=self.path)
            self._discard_queued()
            return

        with file:
            while not self._stop.is_set():
                try:
                    record = await asyncio.wait_for(self.queue.get(), timeout=0.5)
                except asyncio.TimeoutError:
                    continue
                self._write_guarded(file, record)
            while not self.queue.empty():
                self._write_guarded(file, self.queue.get_nowait())
