"""Text cleanup and truncation rules applied to extracted fields."""

import re
from urllib.parse import urlparse

ELLIPSIS = "..."
IDENTIFIER_SCHEME = "arXiv:"

_VERSION_MARKER = re.compile(r"v\d+$")
_WHITESPACE = re.compile(r"\s+")


def normalize(raw_abstract: str, max_len: int) -> str:
    """Bound abstract length.

    Strings longer than ``max_len`` are cut to exactly ``max_len`` characters
    and suffixed with ``...``. The cut is by character count, not by word.
    """
    if len(raw_abstract) <= max_len:
        return raw_abstract
    return raw_abstract[:max_len] + ELLIPSIS


def clean_text(value: str | None) -> str:
    """Collapse internal whitespace and trim."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip()


def strip_label(value: str | None, label: str) -> str:
    """Remove a leading ``<label>:`` (case-insensitive) and surrounding whitespace."""
    if not value:
        return ""
    pattern = re.compile(rf"^\s*{re.escape(label)}\s*:\s*", re.IGNORECASE)
    return pattern.sub("", value, count=1).strip()


def split_authors(value: str | None) -> list[str]:
    """Split a comma-separated author line, dropping empty segments."""
    text = strip_label(value, "Authors")
    return [a for a in (clean_text(part) for part in text.split(",")) if a]


def derive_identifier(url: str) -> str:
    """Identifier from the final path segment of a detail URL.

    ``2401.01234v2`` is kept as-is; ``2401.01234`` becomes ``arXiv:2401.01234``.
    """
    segment = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    if _VERSION_MARKER.search(segment):
        return segment
    return f"{IDENTIFIER_SCHEME}{segment}"


__all__ = [
    "ELLIPSIS",
    "IDENTIFIER_SCHEME",
    "normalize",
    "clean_text",
    "strip_label",
    "split_authors",
    "derive_identifier",
]
