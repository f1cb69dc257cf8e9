"""LLM integration."""

from paperscout.config.settings import LLMConfig
from paperscout.core.exceptions import ConfigurationError

from .base import BaseLLMProvider
from .cerebras import CerebrasClient
from .openrouter import OpenRouterClient

PROVIDERS: dict[str, type] = {
    "cerebras": CerebrasClient,
    "openrouter": OpenRouterClient,
}


def create_llm_provider(config: LLMConfig) -> BaseLLMProvider:
    """Instantiate the provider named in ``config``.

    Raises:
        ConfigurationError: Unknown provider or missing API key.
    """
    provider_class = PROVIDERS.get(config.provider.lower())
    if provider_class is None:
        raise ConfigurationError(
            f"Unknown LLM provider {config.provider!r}; expected one of {', '.join(sorted(PROVIDERS))}"
        )
    if not config.api_key:
        raise ConfigurationError(f"No API key configured for LLM provider {config.provider!r}")
    return provider_class.from_config(config)


__all__ = [
    "BaseLLMProvider",
    "CerebrasClient",
    "OpenRouterClient",
    "PROVIDERS",
    "create_llm_provider",
]
