"""Layered selector resolution.

Fields are located by trying a ranked list of candidate selectors inside a
scope; the first candidate with matches wins.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from paperscout.core.exceptions import ElementLookupError
from paperscout.core.protocols import Element
from paperscout.diagnostics import SELECTOR_ATTEMPT, DiagnosticsSink, NullDiagnostics

logger = logging.getLogger(__name__)


@dataclass
class SelectorMatch:
    """Elements matched by the winning candidate."""

    selector: str
    rank: int
    elements: list[Element]

    @property
    def first(self) -> Element:
        return self.elements[0]


class SelectorResolver:
    """Resolve a ranked candidate list against a page or element scope."""

    def __init__(self, diagnostics: DiagnosticsSink | None = None):
        self.diagnostics = diagnostics or NullDiagnostics()

    async def resolve(
        self,
        scope: Element,
        candidates: Sequence[str],
        field: str = "",
    ) -> SelectorMatch | None:
        """Return the first candidate that matches at least one element.

        Candidates are tried in order and evaluated only inside ``scope``.
        Lookup or timeout errors count as zero matches. Returns None when no
        candidate matches.

        Args:
            scope: Page or element subtree to search.
            candidates: Locator expressions, most reliable first.
            field: Semantic field name, used for diagnostics only.

        Returns:
            SelectorMatch for the winning candidate, or None.
        """
        for rank, selector in enumerate(candidates):
            try:
                elements = await scope.query_all(selector)
            except (ElementLookupError, asyncio.TimeoutError) as e:
                logger.debug("Lookup for %s failed on %r: %s", field or "selector", selector, e)
                elements = []

            self.diagnostics.emit(
                SELECTOR_ATTEMPT,
                f"{field or 'selector'}: {selector!r} matched {len(elements)}",
                {"field": field, "selector": selector, "rank": rank, "matches": len(elements)},
            )
            if elements:
                return SelectorMatch(selector=selector, rank=rank, elements=list(elements))

        return None

    async def first_text(self, scope: Element, candidates: Sequence[str], field: str = "") -> str | None:
        """Text of the first element matched, or None."""
        match = await self.resolve(scope, candidates, field)
        if match is None:
            return None
        return await match.first.text()

    async def first_attribute(
        self,
        scope: Element,
        candidates: Sequence[str],
        name: str,
        field: str = "",
    ) -> str | None:
        """Attribute ``name`` of the first element matched, or None."""
        match = await self.resolve(scope, candidates, field)
        if match is None:
            return None
        return await match.first.get_attribute(name)


__all__ = ["SelectorMatch", "SelectorResolver"]
