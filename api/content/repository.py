"""
Post/draft persistence (raw SQL).

Each function runs exactly one statement on the connection it is given.
"""

from __future__ import annotations

import asyncpg

from core import db

from .resources import Resource


async def list_rows(conn: asyncpg.Connection, resource: Resource) -> list[dict]:
    return await db.fetch_all(
        conn,
        f"""
        SELECT *
        FROM {resource.table}
        ORDER BY created_date DESC
        """,
    )


async def create_row(
    conn: asyncpg.Connection,
    resource: Resource,
    *,
    slug: str,
    title: str,
    content: str,
) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        INSERT INTO {resource.table} (slug, title, content)
        VALUES ($1, $2, $3)
        RETURNING *
        """,
        slug,
        title,
        content,
    )
    if row is None:
        raise RuntimeError(f"Failed to create {resource.label.lower()}.")
    return row


async def update_row(
    conn: asyncpg.Connection,
    resource: Resource,
    slug: str,
    *,
    title: str,
    content: str,
) -> dict | None:
    # The slug is the immutable key: it is not recomputed from the new title.
    return await db.fetch_one(
        conn,
        f"""
        UPDATE {resource.table}
        SET title = $1,
            content = $2
        WHERE slug = $3
        RETURNING *
        """,
        title,
        content,
        slug,
    )


async def delete_row(conn: asyncpg.Connection, resource: Resource, slug: str) -> dict | None:
    return await db.fetch_one(
        conn,
        f"""
        DELETE FROM {resource.table}
        WHERE slug = $1
        RETURNING *
        """,
        slug,
    )
