import json
import os
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class RoverConfig:
    __slots__ = ("unknown_instructions",)

    def __init__(self, unknown_instructions="reject"):
        # "reject" fails the request, "ignore" skips the character
        self.unknown_instructions = unknown_instructions


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=3000):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "file", "crash_file")

    def __init__(self, level="INFO", file="logs/rovers.log", crash_file="logs/crash.log"):
        self.level = level
        self.file = file
        self.crash_file = crash_file


class CorsConfig:
    __slots__ = ("allow_origins",)

    def __init__(self, allow_origins=None):
        self.allow_origins = list(allow_origins) if allow_origins else ["*"]


class Config:
    __slots__ = ("rovers", "server", "logging", "cors")

    def __init__(self, rovers=None, server=None, logging=None, cors=None):
        self.rovers = rovers or RoverConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()
        self.cors = cors or CorsConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            RoverConfig(**d.get("rovers", {})),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
            CorsConfig(**d.get("cors", {})),
        )


def _apply_env(config, environ):
    if environ.get("HOST"):
        config.server.host = environ["HOST"]
    if environ.get("PORT"):
        config.server.port = int(environ["PORT"])
    return config


def load_config(path=None, environ=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG
    environ = os.environ if environ is None else environ

    if not config_path.exists():
        return _apply_env(Config(), environ)

    with open(config_path) as file:
        return _apply_env(Config.from_dict(json.load(file)), environ)
