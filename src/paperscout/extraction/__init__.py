"""Resilient extraction of paper metadata from search and detail pages."""

from .detail import DetailExtractor
from .enumerator import EnumerationResult, ResultEnumerator
from .normalize import derive_identifier, normalize, split_authors, strip_label
from .resolver import SelectorMatch, SelectorResolver

__all__ = [
    "SelectorResolver",
    "SelectorMatch",
    "ResultEnumerator",
    "EnumerationResult",
    "DetailExtractor",
    "normalize",
    "strip_label",
    "split_authors",
    "derive_identifier",
]
