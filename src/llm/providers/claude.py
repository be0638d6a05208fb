"""Claude (Anthropic) LLM provider."""

from ..base import (
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    sampling_kwargs,
)


class ClaudeProvider(LLMProvider):
    """Anthropic Claude provider."""

    provider_name = "claude"

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.model = model or "claude-sonnet-4-20250514"

        if client:
            self.client = client
            return

        try:
            from anthropic import Anthropic
        except ImportError:
            raise LLMError("anthropic package not installed. Run: pip install anthropic")

        self.client = Anthropic(api_key=api_key)

    def _get_exceptions(self):
        from anthropic import APIError, AuthenticationError, RateLimitError

        return AuthenticationError, RateLimitError, APIError

    def _handle_error(self, e: Exception):
        AuthenticationError, RateLimitError, APIError = self._get_exceptions()
        if isinstance(e, AuthenticationError):
            raise LLMAuthError(f"Claude auth failed: {e}") from e
        if isinstance(e, RateLimitError):
            raise LLMRateLimitError(f"Claude rate limit: {e}") from e
        if isinstance(e, APIError):
            raise LLMError(f"Claude API error: {e}") from e
        raise LLMError(f"Claude error: {e}") from e

    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float | None = None,
        top_p: float | None = None,
    ) -> str:
        try:
            self._get_exceptions()
        except ImportError:
            raise LLMError("anthropic package not installed")

        try:
            kwargs = {
                "model": self.model,
                "max_tokens": max_tokens,
                "messages": messages,
                **sampling_kwargs(temperature, top_p),
            }
            if system:
                kwargs["system"] = system

            response = self.client.messages.create(**kwargs)
            return response.content[0].text
        except Exception as e:
            self._handle_error(e)
