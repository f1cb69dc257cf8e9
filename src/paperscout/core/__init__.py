"""Core domain models and interfaces."""

from .exceptions import (
    BrowserSessionError,
    ConfigurationError,
    ElementLookupError,
    ExtractionError,
    LLMError,
    PageProcessingError,
    PaperScoutError,
)
from .models import (
    AbstractSchema,
    AuthorsSchema,
    EnumerationStatus,
    ExtractionOutcome,
    PaperRecord,
    PaperReference,
    SearchCriteria,
)
from .protocols import Element, LLMResponse, Page

__all__ = [
    # Models
    "SearchCriteria",
    "PaperReference",
    "PaperRecord",
    "ExtractionOutcome",
    "EnumerationStatus",
    "AbstractSchema",
    "AuthorsSchema",
    # Protocols
    "Element",
    "Page",
    "LLMResponse",
    # Exceptions
    "PaperScoutError",
    "ConfigurationError",
    "ElementLookupError",
    "PageProcessingError",
    "BrowserSessionError",
    "ExtractionError",
    "LLMError",
]
