"""Base class for OpenAI-compatible HTTP LLM providers."""

import logging
from abc import abstractmethod

import requests

from paperscout.config.settings import LLMConfig
from paperscout.core.exceptions import LLMError
from paperscout.core.protocols import LLMResponse

from .base import BaseLLMProvider
from .retry import with_retry

logger = logging.getLogger(__name__)


class BaseHTTPLLMClient(BaseLLMProvider):
    """Abstract base class for chat-completions style HTTP providers.

    Handles the session, retries and response parsing. Subclasses define
    ``BASE_URL``, ``name`` and ``_build_headers()``; they may override
    ``_build_payload()`` when the provider deviates from the common format.
    """

    BASE_URL: str  # Subclass must define

    def __init__(
        self,
        api_key: str,
        default_model: str,
        timeout: float = 60.0,
        max_retries: int = 3,
        backoff_factor: float = 2.0,
    ) -> None:
        """Initialize HTTP LLM client.

        Args:
            api_key: API key for authentication.
            default_model: Default model to use for completions.
            timeout: Request timeout in seconds.
            max_retries: Maximum retry attempts.
            backoff_factor: Exponential backoff factor.
        """
        self.api_key = api_key
        self.default_model = default_model
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self._session = requests.Session()

    @classmethod
    def from_config(cls, config: LLMConfig) -> "BaseHTTPLLMClient":
        """Create client from LLM configuration."""
        return cls(
            api_key=config.api_key,
            default_model=config.model,
            timeout=config.timeout,
            max_retries=config.retry.max_attempts,
            backoff_factor=config.retry.backoff_factor,
        )

    @abstractmethod
    def _build_headers(self) -> dict[str, str]:
        """Build HTTP headers including authorization."""
        ...

    def _build_payload(
        self,
        prompt: str,
        system: str | None,
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> dict:
        """Build the chat-completions JSON payload."""
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    def _extract_response(self, data: dict, model: str) -> LLMResponse:
        """Extract LLMResponse from a chat-completions response."""
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError(f"{self.name}: unexpected response shape") from e
        tokens_used = (data.get("usage") or {}).get("total_tokens", 0)
        return LLMResponse(
            content=content or "",
            model=data.get("model", model),
            tokens_used=tokens_used,
        )

    def complete(
        self,
        prompt: str,
        *,
        system: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        """Send completion request to the API.

        Raises:
            LLMError: When the request still fails after retries.
        """
        use_model = model or self.default_model
        post = with_retry(max_attempts=self.max_retries, backoff_factor=self.backoff_factor)(self._post)
        try:
            data = post(self._build_payload(prompt, system, use_model, max_tokens, temperature))
        except requests.RequestException as e:
            raise LLMError(f"{self.name} request failed: {e}") from e
        return self._extract_response(data, use_model)

    def _post(self, payload: dict) -> dict:
        response = self._session.post(
            f"{self.BASE_URL}/chat/completions",
            headers=self._build_headers(),
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()


__all__ = ["BaseHTTPLLMClient"]
