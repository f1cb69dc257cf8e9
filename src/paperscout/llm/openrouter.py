"""OpenRouter LLM provider implementation."""

from .http_client import BaseHTTPLLMClient


class OpenRouterClient(BaseHTTPLLMClient):
    """OpenRouter client, for running extraction on models other than Cerebras-hosted ones.

    Requests carry OpenRouter's attribution headers (``HTTP-Referer`` and
    ``X-Title``) so runs show up under the application's name.
    """

    name = "openrouter"
    BASE_URL = "https://openrouter.ai/api/v1"
    ATTRIBUTION_URL = "https://github.com/paperscout/paperscout"

    def __init__(
        self,
        api_key: str,
        default_model: str = "meta-llama/llama-3.3-70b-instruct",
        app_name: str = "paperscout",
        **kwargs,
    ) -> None:
        super().__init__(api_key=api_key, default_model=default_model, **kwargs)
        self.app_name = app_name

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.ATTRIBUTION_URL,
            "X-Title": self.app_name,
        }


__all__ = ["OpenRouterClient"]
