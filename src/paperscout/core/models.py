"""Core domain models for paperscout."""

from enum import Enum
from typing import Literal
from urllib.parse import urljoin

from pydantic import BaseModel, ConfigDict, Field

# Placeholder values written into degraded records
TITLE_NOT_FOUND = "Title not found"
ABSTRACT_NOT_FOUND = "Abstract not found"
DATE_NOT_FOUND = "Date not found"
DOI_NOT_AVAILABLE = "Not available"
EXTRACTION_FAILED = "Extraction Failed"
CITATION_COUNT_UNSUPPORTED = "N/A"


class SearchCriteria(BaseModel):
    """Immutable input for one harvesting run."""

    model_config = ConfigDict(frozen=True)

    topic: str
    year: str
    max_results: int = Field(default=4, ge=1)
    max_abstract_length: int = Field(default=300, ge=0)
    subject: str = "computer_science"
    search_field: str = "title"

    def capped(self, ceiling: int) -> "SearchCriteria":
        """Return a copy whose max_results does not exceed ``ceiling``."""
        if self.max_results <= ceiling:
            return self
        return self.model_copy(update={"max_results": max(ceiling, 1)})


class PaperReference(BaseModel):
    """Lightweight pointer to a paper's detail page."""

    model_config = ConfigDict(frozen=True)

    title: str
    detail_url: str

    @classmethod
    def from_href(cls, title: str, href: str, origin: str) -> "PaperReference":
        """Build a reference, resolving relative hrefs against the site origin."""
        href = href.strip()
        if not href.startswith(("http://", "https://")):
            href = urljoin(origin, href)
        return cls(title=title, detail_url=href)


class PaperRecord(BaseModel):
    """Final output unit: normalized metadata for one paper."""

    model_config = ConfigDict(frozen=True)

    title: str
    authors: tuple[str, ...] = ()
    abstract: str
    submission_date: str
    identifier: str
    doi: str = DOI_NOT_AVAILABLE
    citation_count: str = CITATION_COUNT_UNSUPPORTED

    @classmethod
    def failed(cls, title: str) -> "PaperRecord":
        """Whole-record fallback used when the detail page could not be processed."""
        return cls(
            title=title,
            authors=(),
            abstract=EXTRACTION_FAILED,
            submission_date=EXTRACTION_FAILED,
            identifier=EXTRACTION_FAILED,
            doi=DOI_NOT_AVAILABLE,
            citation_count=CITATION_COUNT_UNSUPPORTED,
        )


class ExtractionOutcome(BaseModel):
    """Tagged per-paper result of detail extraction."""

    model_config = ConfigDict(frozen=True)

    record: PaperRecord
    status: Literal["ok", "partial", "failed"] = "ok"
    failed_fields: tuple[str, ...] = ()
    error: str | None = None


class EnumerationStatus(str, Enum):
    """How the result listing was read."""

    OK = "ok"
    NO_RESULTS = "no_results"  # the site reported zero matches
    UNREADABLE = "unreadable"  # no result elements and no zero-results notice


# Schemas for instruction-driven extraction


class AbstractSchema(BaseModel):
    """Abstract text of a paper."""

    abstract: str


class AuthorsSchema(BaseModel):
    """Ordered author names of a paper."""

    authors: list[str] = Field(default_factory=list)


__all__ = [
    "TITLE_NOT_FOUND",
    "ABSTRACT_NOT_FOUND",
    "DATE_NOT_FOUND",
    "DOI_NOT_AVAILABLE",
    "EXTRACTION_FAILED",
    "CITATION_COUNT_UNSUPPORTED",
    "SearchCriteria",
    "PaperReference",
    "PaperRecord",
    "ExtractionOutcome",
    "EnumerationStatus",
    "AbstractSchema",
    "AuthorsSchema",
]
