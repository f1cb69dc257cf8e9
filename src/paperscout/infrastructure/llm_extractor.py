"""Instruction-driven field extraction from page HTML using an LLM."""

import json
import logging
import re

from pydantic import BaseModel, ValidationError

from paperscout.core.exceptions import ExtractionError, LLMError
from paperscout.core.protocols import SchemaT
from paperscout.llm.base import BaseLLMProvider
from paperscout.utils.text import clean_html

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You extract structured metadata from academic paper web pages. Reply with JSON only."

# Extraction prompt for one instruction + schema
EXTRACT_PROMPT = """{instruction} from the following academic paper webpage.

Respond with a single JSON object conforming to this JSON schema:
{schema}

Requirements:
1. Return ONLY the JSON object, no markdown fences or explanation
2. Values must be plain text, no HTML tags
3. Remove header words such as "Abstract:" or "Authors:" from values
4. If the requested information is not on the page, return exactly "NOT_FOUND"

Page URL: {url}

Page content (truncated):
{content}
"""

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class LLMFieldExtractor:
    """Extract schema-conforming values from HTML using an LLM."""

    def __init__(
        self,
        llm: BaseLLMProvider,
        max_html_chars: int = 15000,
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ):
        """Initialize the extractor.

        Args:
            llm: LLM provider for extraction.
            max_html_chars: Maximum page text characters sent to the LLM.
            max_tokens: Maximum tokens for LLM response.
            temperature: LLM temperature (low for extraction).
        """
        self.llm = llm
        self.max_html_chars = max_html_chars
        self.max_tokens = max_tokens
        self.temperature = temperature

    def _preprocess_html(self, html: str) -> str:
        """Drop markup that never carries paper metadata, then reduce to text."""
        html = re.sub(r"<script[^>]*>.*?</script>", "", html, flags=re.DOTALL | re.IGNORECASE)
        html = re.sub(r"<style[^>]*>.*?</style>", "", html, flags=re.DOTALL | re.IGNORECASE)
        html = re.sub(r"<!--.*?-->", "", html, flags=re.DOTALL)
        html = re.sub(r"<nav[^>]*>.*?</nav>", "", html, flags=re.DOTALL | re.IGNORECASE)
        html = re.sub(r"<header[^>]*>.*?</header>", "", html, flags=re.DOTALL | re.IGNORECASE)
        html = re.sub(r"<footer[^>]*>.*?</footer>", "", html, flags=re.DOTALL | re.IGNORECASE)
        text = clean_html(html) or ""
        return text[: self.max_html_chars]

    def _build_prompt(self, html: str, instruction: str, schema: type[BaseModel], url: str | None) -> str:
        return EXTRACT_PROMPT.format(
            instruction=instruction.rstrip("."),
            schema=json.dumps(schema.model_json_schema(), ensure_ascii=False),
            url=url or "unknown",
            content=self._preprocess_html(html),
        )

    def _parse(self, content: str, schema: type[SchemaT]) -> SchemaT:
        result = _FENCE.sub("", content.strip()).strip()
        if not result or "NOT_FOUND" in result:
            raise ExtractionError("LLM reported the requested information as not found")

        # Tolerate prose around the object
        start, end = result.find("{"), result.rfind("}")
        if start == -1 or end < start:
            raise ExtractionError(f"LLM response is not a JSON object: {result[:100]!r}")

        try:
            return schema.model_validate(json.loads(result[start : end + 1]))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ExtractionError(f"LLM response does not match {schema.__name__}: {e}") from e

    def extract(
        self,
        html: str,
        instruction: str,
        schema: type[SchemaT],
        url: str | None = None,
    ) -> SchemaT:
        """Extract a value conforming to ``schema`` from HTML content.

        Args:
            html: Raw page HTML.
            instruction: Natural-language description of what to extract.
            schema: Pydantic model the answer must validate against.
            url: Page URL, given to the LLM as context.

        Returns:
            Validated schema instance.

        Raises:
            ExtractionError: No content, provider failure, or a non-conforming answer.
        """
        if not html:
            raise ExtractionError("Page has no content")

        prompt = self._build_prompt(html, instruction, schema, url)
        try:
            response = self.llm.complete(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except LLMError as e:
            raise ExtractionError(str(e)) from e

        value = self._parse(response.content, schema)
        logger.debug("LLM extracted %s (%d tokens)", schema.__name__, response.tokens_used)
        return value


__all__ = ["LLMFieldExtractor", "EXTRACT_PROMPT"]
