"""Base LLM provider abstraction."""

from abc import ABC, abstractmethod


class LLMError(Exception):
    """Base LLM error."""


class LLMRateLimitError(LLMError):
    """Rate limit hit."""


class LLMAuthError(LLMError):
    """Authentication failure."""


class LLMProvider(ABC):
    """Abstract LLM provider interface."""

    provider_name: str = "base"

    @abstractmethod
    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float | None = None,
        top_p: float | None = None,
    ) -> str:
        """Generate a response from messages.

        Args:
            messages: Ordered {"role": "user"|"assistant", "content": ...} dicts
            system: Optional system instruction
            max_tokens: Max response tokens
            temperature: Sampling temperature (None = provider default)
            top_p: Nucleus sampling cutoff (None = provider default)

        Returns:
            Generated text
        """
        ...


def sampling_kwargs(temperature: float | None, top_p: float | None) -> dict:
    """Only pass sampling parameters that were explicitly set."""
    kwargs = {}
    if temperature is not None:
        kwargs["temperature"] = temperature
    if top_p is not None:
        kwargs["top_p"] = top_p
    return kwargs
