"""
FastAPI routers for the post and draft endpoints.

Both resources share one handler shape; `build_router` binds it to a table.
Status codes follow the existing client contract: update and delete answer
201, list/create failures return an empty 500, update/delete failures carry
the driver's message.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from core import db

from . import repository, schemas
from .resources import Resource
from .slug import slugify

logger = logging.getLogger(__name__)


def _not_found(resource: Resource) -> JSONResponse:
    return JSONResponse({"error": f"{resource.label} not found"}, status_code=404)


def _failed(action: str, resource: Resource, exc: Exception) -> JSONResponse:
    return JSONResponse(
        {"error": f"Failed to {action} {resource.label.lower()}", "message": str(exc)},
        status_code=500,
    )


def build_router(resource: Resource) -> APIRouter:
    router = APIRouter(prefix=resource.prefix)

    @router.get("", response_model=None)
    async def list_items(
        conn: asyncpg.Connection = Depends(db.get_connection),
    ) -> list[dict] | Response:
        """
        All rows, newest first.
        """
        try:
            return await repository.list_rows(conn, resource)
        except Exception:
            logger.exception("list_failed resource=%s", resource.name)
            return Response(status_code=500)

    @router.post("", status_code=201, response_model=None)
    async def create_item(
        payload: schemas.ContentWrite,
        conn: asyncpg.Connection = Depends(db.get_connection),
    ) -> dict | Response:
        """
        Insert a row keyed by the slug of its title.
        """
        slug = slugify(payload.title)
        try:
            return await repository.create_row(
                conn,
                resource,
                slug=slug,
                title=payload.title,
                content=payload.content,
            )
        except Exception:
            logger.exception("create_failed resource=%s slug=%s", resource.name, slug)
            return Response(status_code=500)

    @router.put("/{slug}", status_code=201, response_model=None)
    async def update_item(
        slug: str,
        payload: schemas.ContentWrite,
        conn: asyncpg.Connection = Depends(db.get_connection),
    ) -> dict | Response:
        try:
            row = await repository.update_row(
                conn,
                resource,
                slug,
                title=payload.title,
                content=payload.content,
            )
        except Exception as exc:
            logger.exception("update_failed resource=%s slug=%s", resource.name, slug)
            return _failed("update", resource, exc)

        if row is None:
            return _not_found(resource)
        return row

    @router.delete("/{slug}", status_code=201, response_model=None)
    async def delete_item(
        slug: str,
        conn: asyncpg.Connection = Depends(db.get_connection),
    ) -> dict | Response:
        try:
            row = await repository.delete_row(conn, resource, slug)
        except Exception as exc:
            logger.exception("delete_failed resource=%s slug=%s", resource.name, slug)
            return _failed("delete", resource, exc)

        if row is None:
            return _not_found(resource)
        return {"message": f"{resource.label} with slug {slug} deleted successfully"}

    return router
