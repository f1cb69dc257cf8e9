"""Output generation (JSON export, HTML report)."""

from .html import render_html, write_html
from .json_writer import build_payload, write_json

__all__ = ["render_html", "write_html", "build_payload", "write_json"]
