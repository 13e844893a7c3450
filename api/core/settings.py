"""
Environment-provided settings.

Values are read when requested, not at import time, so tests and `.env`
loading (see `main.py`) can change them before the first connection.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_DB_PORT = 10708
DEFAULT_CA_FILE = "./ca.pem"


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() == "true"


@dataclass(frozen=True)
class DatabaseSettings:
    host: str
    port: int
    user: str | None
    password: str | None
    database: str | None
    ssl_verify: bool
    ssl_ca_file: str

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        return cls(
            host=_env_str("DB_HOST", "localhost"),
            port=_env_int("DB_PORT", DEFAULT_DB_PORT),
            # Empty values fall through to asyncpg's own defaults.
            user=_env_str("DB_USER") or None,
            password=os.environ.get("DB_PASSWORD") or None,
            database=_env_str("DB_NAME") or None,
            ssl_verify=_env_flag("DB_SSL"),
            ssl_ca_file=_env_str("DB_SSL_CA", DEFAULT_CA_FILE),
        )


def server_host() -> str:
    return _env_str("HOST", "0.0.0.0")


def server_port() -> int:
    return _env_int("PORT", 3000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
