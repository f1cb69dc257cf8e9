"""Ranked locator candidates for each semantic field.

Within each tuple the most specific (most reliable) locator comes first. The
lists tolerate arXiv markup variations between the current listing layout and
older ones.
"""

SITE_ORIGIN = "https://arxiv.org"

# Path fragment that identifies a paper detail (abstract) page
DETAIL_PATH_MARKER = "/abs/"

# Search results page
RESULT_ITEM: tuple[str, ...] = (
    "li.arxiv-result",
    "ol.breathe-horizontal > li",
)

NO_RESULTS_NOTICE: tuple[str, ...] = (
    "p.is-size-4.has-text-warning",
    "p:has-text('produced no results')",
)

TITLE: tuple[str, ...] = (
    "p.title",
    ".list-title",
    ".title",
)

DETAIL_LINK: tuple[str, ...] = (
    "p.list-title a[href*='/abs/']",
    "a.abstract-link",
    "a[href*='/abs/']",
)

# Paper detail page
ABSTRACT: tuple[str, ...] = (
    "blockquote.abstract",
    "#abs .abstract",
)

AUTHORS: tuple[str, ...] = (
    "div.authors",
    ".authors",
    "p.authors",
    ".meta",
)

SUBMISSION_DATE: tuple[str, ...] = (
    "div.dateline",
    ".submission-history",
)

DOI_LINK: tuple[str, ...] = (
    "td.doi a[href*='doi.org']",
    "a[href*='doi.org']",
)


__all__ = [
    "SITE_ORIGIN",
    "DETAIL_PATH_MARKER",
    "RESULT_ITEM",
    "NO_RESULTS_NOTICE",
    "TITLE",
    "DETAIL_LINK",
    "ABSTRACT",
    "AUTHORS",
    "SUBMISSION_DATE",
    "DOI_LINK",
]
