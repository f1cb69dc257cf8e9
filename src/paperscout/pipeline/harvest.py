"""Harvesting pipeline: enumerate search results, extract each paper, normalize.

Flow: Init -> Enumerating -> (ResultsEmpty | PerPaperLoop) -> Done
"""

import logging
import time
from dataclasses import dataclass

from paperscout.config.settings import Settings
from paperscout.core.models import (
    EnumerationStatus,
    ExtractionOutcome,
    PaperRecord,
    PaperReference,
    SearchCriteria,
)
from paperscout.core.protocols import Page
from paperscout.diagnostics import (
    ENUMERATION_START,
    PAPER_FAILED,
    PAPER_PARTIAL,
    PAPER_START,
    PAPER_SUCCEEDED,
    RUN_COMPLETE,
    DiagnosticsSink,
    LoggingDiagnostics,
)
from paperscout.extraction.detail import DetailExtractor
from paperscout.extraction.enumerator import ResultEnumerator
from paperscout.extraction.normalize import normalize
from paperscout.extraction.resolver import SelectorResolver

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Statistics from one harvesting run."""

    criteria: SearchCriteria
    enumeration_status: EnumerationStatus
    found_elements: int = 0
    processed: int = 0
    succeeded: int = 0
    partial: int = 0
    failed: int = 0
    elapsed_seconds: float = 0.0
    screenshot: str | None = None

    @property
    def degraded(self) -> int:
        """Records with at least one placeholder field."""
        return self.partial + self.failed

    @property
    def success_rate(self) -> float:
        """Share of processed papers extracted without any fallback, in percent."""
        if self.processed == 0:
            return 0.0
        return self.succeeded / self.processed * 100

    def describe(self) -> str:
        """Human-readable one-line summary."""
        if self.enumeration_status is EnumerationStatus.NO_RESULTS:
            return f"No results for \"{self.criteria.topic}\" ({self.criteria.year}) in {self.elapsed_seconds:.2f}s"
        if self.enumeration_status is EnumerationStatus.UNREADABLE:
            where = f"; screenshot saved to {self.screenshot}" if self.screenshot else ""
            return f"Could not read search results after {self.elapsed_seconds:.2f}s{where}"
        return (
            f"Processed {self.processed} papers in {self.elapsed_seconds:.2f}s: "
            f"{self.succeeded} complete, {self.partial} partial, {self.failed} failed"
        )


class HarvestPipeline:
    """Runs enumeration, detail extraction and normalization over one page.

    Papers are processed strictly one at a time in listing order; every
    reference yields exactly one record, degraded or not.
    """

    def __init__(
        self,
        diagnostics: DiagnosticsSink | None = None,
        enumerator: ResultEnumerator | None = None,
        extractor: DetailExtractor | None = None,
        screenshot_path: str | None = "arxiv-search-results.png",
    ):
        """Initialize the pipeline.

        Args:
            diagnostics: Sink shared by every component of the run.
            enumerator: Result enumerator (built on the shared sink if omitted).
            extractor: Detail extractor (built on the shared sink if omitted).
            screenshot_path: Page capture path used when results cannot be read.
        """
        self.diagnostics = diagnostics or LoggingDiagnostics()
        resolver = SelectorResolver(self.diagnostics)
        self.enumerator = enumerator or ResultEnumerator(
            resolver=resolver,
            diagnostics=self.diagnostics,
            screenshot_path=screenshot_path,
        )
        self.extractor = extractor or DetailExtractor(resolver=resolver, diagnostics=self.diagnostics)

    async def run(self, page: Page, criteria: SearchCriteria) -> tuple[list[PaperRecord], RunSummary]:
        """Harvest records from the results page currently loaded in ``page``.

        Args:
            page: Page showing the search results.
            criteria: Search criteria (caps and abstract bound).

        Returns:
            Tuple of (records in listing order, run summary).
        """
        start_time = time.time()

        self.diagnostics.emit(
            ENUMERATION_START,
            f'Starting scrape for topic: "{criteria.topic}", year: {criteria.year}',
            {"topic": criteria.topic, "year": criteria.year, "max_results": criteria.max_results},
        )
        enumeration = await self.enumerator.enumerate_with_status(page, criteria)
        summary = RunSummary(
            criteria=criteria,
            enumeration_status=enumeration.status,
            found_elements=enumeration.found_elements,
            screenshot=enumeration.screenshot,
        )

        references = enumeration.references
        outcomes = [await self._process(page, criteria, idx, ref) for idx, ref in enumerate(references, 1)]
        records = [outcome.record for outcome in outcomes]

        summary.processed = len(outcomes)
        summary.succeeded = sum(1 for o in outcomes if o.status == "ok")
        summary.partial = sum(1 for o in outcomes if o.status == "partial")
        summary.failed = sum(1 for o in outcomes if o.status == "failed")
        summary.elapsed_seconds = time.time() - start_time

        self.diagnostics.emit(
            RUN_COMPLETE,
            f"Finished scraping in {summary.elapsed_seconds:.2f} seconds. {summary.describe()}",
            {
                "processed": summary.processed,
                "succeeded": summary.succeeded,
                "partial": summary.partial,
                "failed": summary.failed,
                "enumeration_status": summary.enumeration_status.value,
                "execution_time": f"{summary.elapsed_seconds:.2f}",
            },
        )
        return records, summary

    async def _process(
        self,
        page: Page,
        criteria: SearchCriteria,
        idx: int,
        reference: PaperReference,
    ) -> ExtractionOutcome:
        """Extract and normalize one paper; always produces an outcome."""
        self.diagnostics.emit(PAPER_START, f"Processing paper {idx}: {reference.title}", {"index": idx})

        try:
            outcome = await self.extractor.extract(page, reference)
        except Exception as e:
            logger.exception("Unexpected error extracting paper %d (%s)", idx, reference.detail_url)
            outcome = ExtractionOutcome(
                record=PaperRecord.failed(reference.title),
                status="failed",
                error=str(e) or type(e).__name__,
            )

        if outcome.status != "failed" and "abstract" not in outcome.failed_fields:
            record = outcome.record.model_copy(
                update={"abstract": normalize(outcome.record.abstract, criteria.max_abstract_length)}
            )
            outcome = outcome.model_copy(update={"record": record})

        if outcome.status == "ok":
            self.diagnostics.emit(PAPER_SUCCEEDED, f"Successfully extracted details for paper {idx}", {"index": idx})
        elif outcome.status == "partial":
            self.diagnostics.emit(
                PAPER_PARTIAL,
                f"Extracted paper {idx} with fallbacks for: {', '.join(outcome.failed_fields)}",
                {"index": idx, "failed_fields": outcome.failed_fields},
            )
        else:
            self.diagnostics.emit(
                PAPER_FAILED,
                f"Failed to extract details for paper {idx}: {reference.title}",
                {"index": idx, "error": outcome.error},
            )
        return outcome


async def harvest(
    settings: Settings,
    diagnostics: DiagnosticsSink | None = None,
) -> tuple[list[PaperRecord], RunSummary]:
    """Open a browser, submit the configured search and harvest the results.

    Errors from the browser session itself (launch failure, search page
    unreachable) propagate to the caller.
    """
    # Imported here so the core pipeline stays importable without a browser stack
    from paperscout.infrastructure.browser import BrowserSession
    from paperscout.infrastructure.llm_extractor import LLMFieldExtractor
    from paperscout.llm import create_llm_provider
    from paperscout.sources.arxiv import ArxivSearch

    criteria = settings.search.criteria()
    llm = create_llm_provider(settings.llm)
    extractor = LLMFieldExtractor(
        llm=llm,
        max_html_chars=settings.llm.max_html_chars,
        max_tokens=settings.llm.max_tokens,
        temperature=settings.llm.temperature,
    )
    pipeline = HarvestPipeline(
        diagnostics=diagnostics,
        screenshot_path=settings.browser.screenshot_path,
    )

    async with BrowserSession(settings.browser, extractor) as page:
        await ArxivSearch().submit(page, criteria)
        return await pipeline.run(page, criteria)


__all__ = ["HarvestPipeline", "RunSummary", "harvest"]
