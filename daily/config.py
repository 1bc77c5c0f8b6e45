"""
Application configuration.

Resolution order (highest wins):
    1. Environment variables DAILY_ADDR, DAILY_DB_PATH, DAILY_SCHEMA_PATH, DAILY_LOG_LEVEL
    2. config.yaml (or the file passed explicitly)
    3. Built-in defaults

The resulting AppConfig is built once at startup and passed to the repository
and the HTTP layer.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

import yaml

from .errors import ConfigurationError

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_SCHEMA_PATH = os.path.join(_PACKAGE_DIR, "schema-init.sql")
DEFAULT_CONFIG_FILE = "config.yaml"
ENV_PREFIX = "DAILY_"


@dataclass
class AppConfig:
    addr: str = "localhost:11111"
    db_path: str = "./daily.db"
    schema_path: str = field(default=DEFAULT_SCHEMA_PATH)
    log_level: str = "INFO"

    @property
    def host(self) -> str:
        return self.addr.rsplit(":", 1)[0] or "localhost"

    @property
    def port(self) -> int:
        _, _, port = self.addr.rpartition(":")
        try:
            return int(port)
        except ValueError:
            raise ConfigurationError(f"addr {self.addr!r} has no valid port") from None


def _read_config_yaml(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"could not read config from {path!r}: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"config file {path!r} must contain a mapping")
    return cfg


def load_config(config_file: str | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """Build an AppConfig from defaults, the YAML file and the environment.

    An explicitly given ``config_file`` must exist; the implicit ``config.yaml``
    is only read when present.
    """
    env = os.environ if environ is None else environ
    known = {f.name for f in fields(AppConfig)}
    values: dict[str, Any] = {}

    path = config_file
    if path is None and os.path.exists(DEFAULT_CONFIG_FILE):
        path = DEFAULT_CONFIG_FILE
    if path is not None:
        for k, v in _read_config_yaml(path).items():
            if k not in known:
                raise ConfigurationError(f"unknown config key {k!r} in {path!r}")
            if isinstance(v, str) and v.strip():
                values[k] = v.strip()
            elif v is not None:
                raise ConfigurationError(f"config key {k!r} must be a non-empty string")

    for name in known:
        v = env.get(ENV_PREFIX + name.upper())
        if v:
            values[name] = v

    return AppConfig(**values)
