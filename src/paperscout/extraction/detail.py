"""Per-paper detail page extraction.

Every field is read independently: a field whose extraction path fails takes
its placeholder and the rest of the record is still filled. Only a page that
cannot be navigated to degrades the whole record.
"""

import logging
from collections.abc import Awaitable
from typing import TypeVar

from paperscout.core.models import (
    ABSTRACT_NOT_FOUND,
    CITATION_COUNT_UNSUPPORTED,
    DATE_NOT_FOUND,
    DOI_NOT_AVAILABLE,
    AbstractSchema,
    AuthorsSchema,
    ExtractionOutcome,
    PaperRecord,
    PaperReference,
)
from paperscout.core.protocols import Page
from paperscout.diagnostics import FIELD_FAILED, DiagnosticsSink, NullDiagnostics

from . import selectors
from .normalize import clean_text, derive_identifier, split_authors, strip_label
from .resolver import SelectorResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")

ABSTRACT_INSTRUCTION = "Extract only the abstract text"
AUTHORS_INSTRUCTION = "Extract only the list of authors"


class DetailExtractor:
    """Extract a PaperRecord from one paper's detail page."""

    def __init__(
        self,
        resolver: SelectorResolver | None = None,
        diagnostics: DiagnosticsSink | None = None,
    ):
        self.diagnostics = diagnostics or NullDiagnostics()
        self.resolver = resolver or SelectorResolver(self.diagnostics)

    async def extract(self, page: Page, reference: PaperReference) -> ExtractionOutcome:
        """Navigate to the reference's detail page and read every field.

        Never raises. Navigation failure of any kind, deadline expiry included,
        yields a whole-record fallback with status ``failed``; individual field
        failures yield status ``partial``.
        """
        try:
            await page.goto(reference.detail_url)
        except Exception as e:
            logger.warning("Failed to load %s: %r", reference.detail_url, e)
            return ExtractionOutcome(
                record=PaperRecord.failed(reference.title),
                status="failed",
                error=str(e) or type(e).__name__,
            )

        failed_fields: list[str] = []

        abstract = await self._field("abstract", self._read_abstract(page), ABSTRACT_NOT_FOUND, failed_fields)
        authors = await self._field("authors", self._read_authors(page), (), failed_fields)
        submission_date = await self._field(
            "submission_date", self._read_submission_date(page), DATE_NOT_FOUND, failed_fields
        )
        doi = await self._field("doi", self._read_doi(page), DOI_NOT_AVAILABLE, failed_fields)

        record = PaperRecord(
            title=reference.title,
            authors=authors,
            abstract=abstract,
            submission_date=submission_date,
            identifier=derive_identifier(reference.detail_url),
            doi=doi,
            citation_count=CITATION_COUNT_UNSUPPORTED,
        )
        return ExtractionOutcome(
            record=record,
            status="partial" if failed_fields else "ok",
            failed_fields=tuple(failed_fields),
        )

    async def _field(self, name: str, reader: Awaitable[T], default: T, failed: list[str]) -> T:
        """Await one field reader, substituting ``default`` when it fails.

        Readers signal "not found" by returning None and failure by raising.
        """
        try:
            value = await reader
        except Exception as e:
            self.diagnostics.emit(FIELD_FAILED, f"{name} extraction failed: {e}", {"field": name, "error": str(e)})
            failed.append(name)
            return default

        if value is None:
            if name in ("abstract", "submission_date"):
                self.diagnostics.emit(FIELD_FAILED, f"{name} not found", {"field": name})
                failed.append(name)
            return default
        return value

    async def _read_abstract(self, page: Page) -> str | None:
        try:
            result = await page.extract(ABSTRACT_INSTRUCTION, AbstractSchema)
            abstract = strip_label(result.abstract, "Abstract")
            if abstract:
                return abstract
            logger.debug("Instruction-driven abstract was empty, trying selectors")
        except Exception as e:
            logger.debug("Instruction-driven abstract extraction failed, trying selectors: %s", e)

        text = await self.resolver.first_text(page, selectors.ABSTRACT, field="abstract")
        return clean_text(strip_label(text, "Abstract")) or None

    async def _read_authors(self, page: Page) -> list[str]:
        match = await self.resolver.resolve(page, selectors.AUTHORS, field="authors")
        if match is not None:
            return split_authors(await match.first.text())

        logger.debug("No author element found, falling back to instruction-driven extraction")
        result = await page.extract(AUTHORS_INSTRUCTION, AuthorsSchema)
        return [a.strip() for a in result.authors if a and a.strip()]

    async def _read_submission_date(self, page: Page) -> str | None:
        text = await self.resolver.first_text(page, selectors.SUBMISSION_DATE, field="submission date")
        return clean_text(text) or None

    async def _read_doi(self, page: Page) -> str | None:
        href = await self.resolver.first_attribute(page, selectors.DOI_LINK, "href", field="doi")
        return href.strip() if href else None


__all__ = ["DetailExtractor", "ABSTRACT_INSTRUCTION", "AUTHORS_INSTRUCTION"]
