# tests/conftest.py
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from core import db


# Make anyio run on asyncio (so our async fixtures work everywhere)
@pytest.fixture(scope="session", autouse=True)
def anyio_backend():
    return "asyncio"


# ==============================================================
# In-memory stand-in for a PostgreSQL connection
# ==============================================================

class FakeQueryError(Exception):
    pass


_SELECT = re.compile(r"^SELECT \* FROM (\w+) ORDER BY created_date DESC$")
_INSERT = re.compile(r"^INSERT INTO (\w+) \(slug, title, content\) VALUES \(\$1, \$2, \$3\) RETURNING \*$")
_UPDATE = re.compile(r"^UPDATE (\w+) SET title = \$1, content = \$2 WHERE slug = \$3 RETURNING \*$")
_DELETE = re.compile(r"^DELETE FROM (\w+) WHERE slug = \$1 RETURNING \*$")


class FakeDatabase:
    """
    Two tables keyed by slug. `created_date` advances one second per insert
    so ordering is deterministic.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[str, dict[str, Any]]] = {"posts": {}, "drafts": {}}
        self.connections: list[FakeConnection] = []
        self.statements: list[tuple[str, tuple]] = []
        self.fail_queries_with: Exception | None = None
        self.fail_close_with: Exception | None = None
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def run(self, sql: str, args: tuple) -> list[dict[str, Any]]:
        statement = " ".join(sql.split())
        self.statements.append((statement, args))
        if self.fail_queries_with is not None:
            raise self.fail_queries_with

        if m := _SELECT.match(statement):
            rows = self.tables[m.group(1)].values()
            return sorted((dict(r) for r in rows), key=lambda r: r["created_date"], reverse=True)

        if m := _INSERT.match(statement):
            table = self.tables[m.group(1)]
            slug, title, content = args
            if slug in table:
                raise FakeQueryError(f'duplicate key value violates unique constraint "{m.group(1)}_pkey"')
            table[slug] = {"slug": slug, "title": title, "content": content, "created_date": self.tick()}
            return [dict(table[slug])]

        if m := _UPDATE.match(statement):
            table = self.tables[m.group(1)]
            title, content, slug = args
            if slug not in table:
                return []
            table[slug].update(title=title, content=content)
            return [dict(table[slug])]

        if m := _DELETE.match(statement):
            row = self.tables[m.group(1)].pop(args[0], None)
            return [row] if row is not None else []

        raise FakeQueryError(f"unexpected statement: {statement}")


class FakeConnection:
    def __init__(self, database: FakeDatabase) -> None:
        self.database = database
        self.closed = False

    async def fetch(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        return self.database.run(sql, args)

    async def fetchrow(self, sql: str, *args: Any) -> dict[str, Any] | None:
        rows = self.database.run(sql, args)
        return rows[0] if rows else None

    async def close(self) -> None:
        self.closed = True
        if self.database.fail_close_with is not None:
            raise self.database.fail_close_with


@pytest.fixture
def fake_db(monkeypatch) -> FakeDatabase:
    database = FakeDatabase()

    async def _connect(settings=None):
        conn = FakeConnection(database)
        database.connections.append(conn)
        return conn

    monkeypatch.setattr(db, "connect", _connect)
    return database


@pytest.fixture
async def client(fake_db):
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
