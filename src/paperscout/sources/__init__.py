"""Search sources."""

from .arxiv import ArxivSearch, build_search_url

__all__ = ["ArxivSearch", "build_search_url"]
