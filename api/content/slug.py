"""
Title -> slug normalization.

Slugs are the primary lookup key for posts and drafts. They are derived once,
at creation time, and never recomputed on update.
"""

from __future__ import annotations

import re
from typing import Any

_WHITESPACE = re.compile(r"\s+")
# ASCII-only: letters outside [A-Za-z0-9_] are dropped, not transliterated.
_NON_WORD = re.compile(r"[^\w\-]+", re.ASCII)
_MULTI_DASH = re.compile(r"--+")
_LEADING_DASH = re.compile(r"^-+")
_TRAILING_DASH = re.compile(r"-+$")


def slugify(value: Any) -> str:
    """
    Convert a title into a lowercase, hyphen-delimited, URL-safe token.

    Falsy input returns "". No uniqueness check and no length limit; titles
    made only of non-ASCII characters produce an empty slug.
    """
    if not value:
        return ""

    text = str(value).strip().lower()
    text = _WHITESPACE.sub("-", text)
    text = _NON_WORD.sub("", text)
    text = _MULTI_DASH.sub("-", text)
    text = _LEADING_DASH.sub("", text)
    return _TRAILING_DASH.sub("", text)
