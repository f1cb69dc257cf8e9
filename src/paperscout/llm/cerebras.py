"""Cerebras inference LLM provider implementation."""

import logging

from .http_client import BaseHTTPLLMClient

logger = logging.getLogger(__name__)


class CerebrasClient(BaseHTTPLLMClient):
    """Cerebras Inference API client (OpenAI-compatible endpoint).

    Low latency makes it a good fit for the many short extraction calls a run
    issues, one or two per detail page.
    """

    name = "cerebras"
    BASE_URL = "https://api.cerebras.ai/v1"

    def __init__(
        self,
        api_key: str,
        default_model: str = "llama-3.3-70b",
        timeout: float = 60.0,
        max_retries: int = 3,
        backoff_factor: float = 2.0,
    ) -> None:
        super().__init__(
            api_key=api_key,
            default_model=default_model,
            timeout=timeout,
            max_retries=max_retries,
            backoff_factor=backoff_factor,
        )

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(
        self,
        prompt: str,
        system: str | None,
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> dict:
        payload = super()._build_payload(prompt, system, model, max_tokens, temperature)
        # Cerebras names the limit max_completion_tokens
        payload["max_completion_tokens"] = payload.pop("max_tokens")
        return payload


__all__ = ["CerebrasClient"]
