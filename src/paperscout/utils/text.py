"""Text processing utilities for paperscout."""

import html
import json
import re
from typing import Any


def json_dumps(data: Any, *, indent: int | None = None) -> str:
    """Serialize data to JSON string."""
    return json.dumps(data, ensure_ascii=False, indent=indent)


def clean_html(value: str | None) -> str | None:
    """Clean HTML tags from string."""
    if not value:
        return None
    text = re.sub(r"<[^>]+>", " ", value)
    text = html.unescape(text)
    text = re.sub(r"\s+", " ", text).strip()
    return text or None


__all__ = [
    "json_dumps",
    "clean_html",
]
