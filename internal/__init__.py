from internal.logging import AsyncFileLogger, LogLevel, StructuredLogger, get_logger

__all__ = [
    "AsyncFileLogger",
    "LogLevel",
    "StructuredLogger",
    "get_logger",
]
