"""Shared utilities."""

from .logging import setup_logging
from .text import clean_html, json_dumps

__all__ = [
    "setup_logging",
    "clean_html",
    "json_dumps",
]
