"""Browser automation and LLM-backed extraction infrastructure."""

from .browser import BrowserSession, PlaywrightElement, PlaywrightPage
from .llm_extractor import LLMFieldExtractor

__all__ = [
    "BrowserSession",
    "PlaywrightPage",
    "PlaywrightElement",
    "LLMFieldExtractor",
]
