"""LLM provider interface used by instruction-driven extraction."""

from abc import ABC, abstractmethod

from paperscout.core.protocols import LLMResponse


class BaseLLMProvider(ABC):
    """Chat model answering one extraction prompt per call.

    Calls block; the browser adapter runs them in a worker thread.
    """

    #: Short provider id, also used in error messages
    name: str = ""

    @abstractmethod
    def complete(
        self,
        prompt: str,
        *,
        system: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        """Raises LLMError when no answer could be obtained."""
        ...


__all__ = ["LLMResponse", "BaseLLMProvider"]
