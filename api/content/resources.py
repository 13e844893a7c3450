"""
Table-backed resources served by the API.

Table names are only ever taken from these declarations, never from the
request, so they can be interpolated into SQL safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Resource:
    name: str
    table: str
    label: str

    @property
    def prefix(self) -> str:
        return f"/api/{self.name}"


POSTS = Resource(name="posts", table="posts", label="Post")
DRAFTS = Resource(name="drafts", table="drafts", label="Draft")

ALL = (POSTS, DRAFTS)
