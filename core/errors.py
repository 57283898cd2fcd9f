"""Custom errors with tracking IDs."""

from utils.timestamp import format_timestamp
from utils.ksuid import generate_ksuid


class BaseRoverError(Exception):
    """Base error with unique ID and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = generate_ksuid()
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"

    def to_dict(self):
        return {
            "error_id": self.error_id,
            "timestamp": self.timestamp,
            "type": type(self).__name__,
            "msg": self.args[0] if self.args else "",
            "context": self.context,
        }


class InvalidInputError(BaseRoverError):
    """Rover input could not be parsed or simulated."""

    def __init__(self, message, line=None, **kwargs):
        context = kwargs.pop("context", {})
        if line is not None:
            context["line"] = line
        super().__init__(message, context=context, **kwargs)


class HealthCheckError(BaseRoverError):
    """Health check failures."""

    def __init__(self, message, component=None, **kwargs):
        context = kwargs.pop("context", {})
        if component:
            context["component"] = component
        super().__init__(message, context=context, **kwargs)
