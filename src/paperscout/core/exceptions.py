"""Exception hierarchy for paperscout."""


class PaperScoutError(Exception):
    """Base class for all paperscout errors."""


class ConfigurationError(PaperScoutError):
    """Raised when settings are missing or invalid."""


class ElementLookupError(PaperScoutError):
    """Raised when a locator lookup fails or times out."""

    def __init__(self, selector: str, message: str = ""):
        self.selector = selector
        super().__init__(message or f"Lookup failed for selector {selector!r}")


class PageProcessingError(PaperScoutError):
    """Raised when a page cannot be navigated to or never becomes ready."""

    def __init__(self, url: str, message: str = ""):
        self.url = url
        super().__init__(message or f"Could not process page {url}")


class BrowserSessionError(PaperScoutError):
    """Raised when the browser cannot be launched or connected to."""


class ExtractionError(PaperScoutError):
    """Raised when instruction-driven extraction cannot produce a valid value."""


class LLMError(PaperScoutError):
    """Raised when an LLM provider request fails."""


__all__ = [
    "PaperScoutError",
    "ConfigurationError",
    "ElementLookupError",
    "PageProcessingError",
    "BrowserSessionError",
    "ExtractionError",
    "LLMError",
]
