"""Enumerate paper references from a search results page."""

import logging
from dataclasses import dataclass, field

from paperscout.core.exceptions import ElementLookupError
from paperscout.core.models import TITLE_NOT_FOUND, EnumerationStatus, PaperReference, SearchCriteria
from paperscout.core.protocols import Element, Page
from paperscout.diagnostics import (
    ENUMERATION_COMPLETE,
    ENUMERATION_FAILED,
    REFERENCE_DROPPED,
    DiagnosticsSink,
    NullDiagnostics,
)

from . import selectors
from .normalize import strip_label
from .resolver import SelectorResolver

logger = logging.getLogger(__name__)


@dataclass
class EnumerationResult:
    """References read from the listing plus how the listing was read."""

    references: list[PaperReference] = field(default_factory=list)
    status: EnumerationStatus = EnumerationStatus.OK
    found_elements: int = 0
    screenshot: str | None = None


class ResultEnumerator:
    """Turn result elements into an ordered, capped list of PaperReference."""

    def __init__(
        self,
        resolver: SelectorResolver | None = None,
        diagnostics: DiagnosticsSink | None = None,
        origin: str = selectors.SITE_ORIGIN,
        screenshot_path: str | None = "arxiv-search-results.png",
    ):
        """Initialize the enumerator.

        Args:
            resolver: Selector resolver; one sharing ``diagnostics`` is created if omitted.
            diagnostics: Sink for progress and diagnostic events.
            origin: Site origin used to absolutize relative links.
            screenshot_path: Where to save a page capture when no results can be read.
                None disables the capture.
        """
        self.diagnostics = diagnostics or NullDiagnostics()
        self.resolver = resolver or SelectorResolver(self.diagnostics)
        self.origin = origin
        self.screenshot_path = screenshot_path

    async def enumerate(self, page: Page, criteria: SearchCriteria) -> list[PaperReference]:
        """Ordered references, at most ``criteria.max_results`` long."""
        result = await self.enumerate_with_status(page, criteria)
        return result.references

    async def enumerate_with_status(self, page: Page, criteria: SearchCriteria) -> EnumerationResult:
        """Read the listing and report whether it was readable at all.

        Never raises for markup problems: an unreadable listing yields an empty
        result with status ``unreadable`` and a screenshot for troubleshooting.
        """
        match = await self.resolver.resolve(page, selectors.RESULT_ITEM, field="result item")
        if match is None:
            return await self._empty_result(page)

        scopes = match.elements[: criteria.max_results]
        references: list[PaperReference] = []
        for idx, scope in enumerate(scopes, 1):
            reference = await self._read_reference(scope, idx)
            if reference is not None:
                references.append(reference)

        self.diagnostics.emit(
            ENUMERATION_COMPLETE,
            f"Found {len(match.elements)} papers, processing up to {criteria.max_results}",
            {
                "found": len(match.elements),
                "selected": len(references),
                "selector": match.selector,
            },
        )
        return EnumerationResult(
            references=references,
            status=EnumerationStatus.OK,
            found_elements=len(match.elements),
        )

    async def _read_reference(self, scope: Element, idx: int) -> PaperReference | None:
        """Build one reference from a result element; None when it has no link."""
        try:
            title_text = await self.resolver.first_text(scope, selectors.TITLE, field="title")
        except ElementLookupError as e:
            logger.debug("Could not read title of result %d: %s", idx, e)
            title_text = None
        title = strip_label(title_text, "Title") if title_text else ""
        if not title:
            title = TITLE_NOT_FOUND

        try:
            href = await self.resolver.first_attribute(scope, selectors.DETAIL_LINK, "href", field="detail link")
        except ElementLookupError as e:
            logger.debug("Could not read detail link of result %d: %s", idx, e)
            href = None
        if not href:
            href = await self._scan_anchors(scope)
        if not href:
            self.diagnostics.emit(
                REFERENCE_DROPPED,
                f"No detail link for result {idx}: {title}",
                {"index": idx, "title": title},
            )
            return None

        return PaperReference.from_href(title, href, self.origin)

    async def _scan_anchors(self, scope: Element) -> str | None:
        """Last resort: first anchor in the scope pointing at a detail page."""
        match = await self.resolver.resolve(scope, ("a",), field="anchor scan")
        if match is None:
            return None
        for anchor in match.elements:
            try:
                href = await anchor.get_attribute("href")
            except ElementLookupError:
                continue
            if href and selectors.DETAIL_PATH_MARKER in href:
                return href
        return None

    async def _empty_result(self, page: Page) -> EnumerationResult:
        notice = await self.resolver.resolve(page, selectors.NO_RESULTS_NOTICE, field="no results notice")
        if notice is not None:
            self.diagnostics.emit(ENUMERATION_FAILED, "Search returned no results", {"url": page.url})
            return EnumerationResult(status=EnumerationStatus.NO_RESULTS)

        screenshot = None
        if self.screenshot_path:
            try:
                screenshot = await page.capture_screenshot(self.screenshot_path)
            except Exception as e:
                logger.warning("Failed to capture screenshot: %s", e)

        self.diagnostics.emit(
            ENUMERATION_FAILED,
            "No paper elements found on results page",
            {"url": page.url, "screenshot": screenshot},
        )
        return EnumerationResult(status=EnumerationStatus.UNREADABLE, screenshot=screenshot)


__all__ = ["EnumerationResult", "ResultEnumerator"]
