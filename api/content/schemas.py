"""
Pydantic schemas for post/draft endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class ContentWrite(BaseModel):
    # Presence checks only; length and format are not validated.
    title: str
    content: str
