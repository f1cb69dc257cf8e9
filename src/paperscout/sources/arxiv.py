"""arXiv advanced search submission."""

import logging
from urllib.parse import urlencode

from paperscout.core.models import SearchCriteria
from paperscout.core.protocols import Page

logger = logging.getLogger(__name__)

ADVANCED_SEARCH_URL = "https://arxiv.org/search/advanced"

# Result page sizes the search form accepts
PAGE_SIZES = (25, 50, 100, 200)

SUBJECTS = (
    "computer_science",
    "economics",
    "eess",
    "mathematics",
    "physics",
    "q_biology",
    "q_finance",
    "statistics",
)

SEARCH_FIELDS = (
    "title",
    "author",
    "abstract",
    "comments",
    "journal_ref",
    "acm_class",
    "msc_class",
    "report_num",
    "paper_id",
    "doi",
    "orcid",
    "all",
)


def page_size_for(max_results: int) -> int:
    """Smallest page size that holds ``max_results`` entries."""
    for size in PAGE_SIZES:
        if max_results <= size:
            return size
    return PAGE_SIZES[-1]


def build_search_url(
    criteria: SearchCriteria,
    page_size: int | None = None,
    base_url: str = ADVANCED_SEARCH_URL,
) -> str:
    """Advanced-search URL equivalent to submitting the filled-in form.

    Restricts to the criteria's subject classification, matches the topic in
    the configured field and filters to the specific submission year, newest
    first.

    Raises:
        ValueError: Unknown subject or search field.
    """
    if criteria.subject not in SUBJECTS:
        raise ValueError(f"Unknown arXiv subject {criteria.subject!r}")
    if criteria.search_field not in SEARCH_FIELDS:
        raise ValueError(f"Unknown arXiv search field {criteria.search_field!r}")

    params = [
        ("advanced", ""),
        ("terms-0-operator", "AND"),
        ("terms-0-term", criteria.topic),
        ("terms-0-field", criteria.search_field),
        (f"classification-{criteria.subject}", "y"),
        ("classification-include_cross_list", "include"),
    ]
    if criteria.year:
        params += [
            ("date-filter_by", "specific_year"),
            ("date-year", criteria.year),
        ]
    else:
        params.append(("date-filter_by", "all_dates"))
    params += [
        ("date-date_type", "submitted_date"),
        ("abstracts", "show"),
        ("size", str(page_size or page_size_for(criteria.max_results))),
        ("order", "-announced_date_first"),
    ]
    return f"{base_url}?{urlencode(params)}"


class ArxivSearch:
    """Submit a filtered search and leave the page on the results listing."""

    def __init__(self, search_url: str = ADVANCED_SEARCH_URL):
        self.search_url = search_url

    async def submit(self, page: Page, criteria: SearchCriteria) -> str:
        """Navigate to the results for ``criteria``.

        Returns:
            The results URL.

        Raises:
            PageProcessingError: The results page could not be loaded.
        """
        url = build_search_url(criteria, base_url=self.search_url)

        logger.info(
            'Searching arXiv for "%s" (%s, field=%s, year=%s)',
            criteria.topic,
            criteria.subject,
            criteria.search_field,
            criteria.year or "any",
        )
        await page.goto(url)
        await page.wait_until_ready()
        logger.info("Submitted search query")
        return url


__all__ = [
    "ADVANCED_SEARCH_URL",
    "PAGE_SIZES",
    "SUBJECTS",
    "SEARCH_FIELDS",
    "page_size_for",
    "build_search_url",
    "ArxivSearch",
]
