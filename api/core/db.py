"""
Per-request database access helpers (raw SQL) using asyncpg.

There is no pool: every request that needs the database gets its own
connection from `get_connection()`, a FastAPI yield dependency, and that
connection is closed when the request finishes. Handlers receive the
connection as a parameter.

A burst of N concurrent requests opens N connections; nothing caps this.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
import os
import ssl
from collections.abc import AsyncIterator
from typing import Any

import asyncpg

from .settings import DatabaseSettings

logger = logging.getLogger(__name__)


# Acquisition failures are explicit and separable from query failures.
class DatabaseUnavailableError(RuntimeError):
    pass


def ssl_context(settings: DatabaseSettings) -> ssl.SSLContext:
    """
    Build the TLS context for a connection.

    TLS is always requested. Certificate verification is enforced only when
    `DB_SSL=true`; in that case the CA bundle must exist.
    """
    ca_file = settings.ssl_ca_file
    has_ca = bool(ca_file) and os.path.isfile(ca_file)

    if settings.ssl_verify:
        if not has_ca:
            raise DatabaseUnavailableError(f"CA bundle not found: {ca_file}")
        return ssl.create_default_context(cafile=ca_file)

    ctx = ssl.create_default_context(cafile=ca_file if has_ca else None)
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


async def connect(settings: DatabaseSettings | None = None) -> asyncpg.Connection:
    settings = settings or DatabaseSettings.from_env()
    try:
        return await asyncpg.connect(
            host=settings.host,
            port=settings.port,
            user=settings.user,
            password=settings.password,
            database=settings.database,
            ssl=ssl_context(settings),
        )
    except DatabaseUnavailableError:
        raise
    except (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
        raise DatabaseUnavailableError(
            f"Could not connect to {settings.host}:{settings.port}: {e}"
        ) from e


async def release(conn: asyncpg.Connection) -> None:
    """
    Close a connection. A failing close is logged and never re-raised so it
    cannot replace the response the handler already produced.
    """
    try:
        await conn.close()
    except Exception:
        logger.warning("db_close_failed", exc_info=True)


async def get_connection() -> AsyncIterator[asyncpg.Connection]:
    """
    FastAPI dependency: one dedicated connection for the current request.
    """
    conn = await connect()
    try:
        yield conn
    finally:
        await release(conn)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(conn: asyncpg.Connection, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await conn.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(conn: asyncpg.Connection, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await conn.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]
