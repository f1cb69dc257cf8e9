"""Protocol definitions for paperscout components.

The page automation capability is an external collaborator: anything that can
navigate, run scoped locator lookups and answer instruction-driven extraction
requests can drive the pipeline. ``infrastructure.browser`` provides the
Playwright implementation; tests use in-memory fakes.
"""

from dataclasses import dataclass
from typing import Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass
class LLMResponse:
    """Response from LLM provider."""

    content: str
    model: str
    tokens_used: int
    cached: bool = False


@runtime_checkable
class Element(Protocol):
    """A lookup scope: an element subtree (or a whole page)."""

    async def query_all(self, selector: str) -> list["Element"]:
        """Return every element matching ``selector`` inside this scope.

        Raises ElementLookupError when the lookup itself fails.
        """
        ...

    async def text(self) -> str | None:
        """Text content of the element."""
        ...

    async def get_attribute(self, name: str) -> str | None:
        """Attribute value, or None when absent."""
        ...


@runtime_checkable
class Page(Element, Protocol):
    """A single browsing context navigated serially for a whole run."""

    @property
    def url(self) -> str:
        """Current page URL."""
        ...

    async def goto(self, url: str) -> None:
        """Navigate and wait for the content-ready signal.

        Raises PageProcessingError on navigation or wait failure.
        """
        ...

    async def wait_until_ready(self) -> None:
        """Bounded wait for the page to settle after a navigation or submit."""
        ...

    async def content(self) -> str:
        """Current page HTML."""
        ...

    async def extract(self, instruction: str, schema: type[SchemaT]) -> SchemaT:
        """Instruction-driven extraction returning a value conforming to ``schema``.

        Raises ExtractionError when no conforming value can be produced.
        """
        ...

    async def capture_screenshot(self, path: str) -> str | None:
        """Save a screenshot for troubleshooting; returns the path written."""
        ...


__all__ = [
    "LLMResponse",
    "Element",
    "Page",
    "SchemaT",
]
