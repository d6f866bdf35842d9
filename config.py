import json
import os
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "file", "crash_file")

    def __init__(self, level="INFO", file="logs/tuid.log", crash_file="logs/crash.log"):
        self.level = level
        self.file = file
        self.crash_file = crash_file


class ApiConfig:
    __slots__ = ("username", "password", "max_batch")

    def __init__(self, username=None, password=None, max_batch=1000):
        self.username = username or os.environ.get("API_USERNAME", "admin")
        self.password = password or os.environ.get("API_PASSWORD", "admin123")
        self.max_batch = max_batch


class Config:
    __slots__ = ("server", "logging", "api")

    def __init__(self, server=None, logging=None, api=None):
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()
        self.api = api or ApiConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
            ApiConfig(**d.get("api", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))
