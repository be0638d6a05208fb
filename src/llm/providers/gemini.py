"""Google Gemini LLM provider using google-genai SDK."""

from ..base import (
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
)


def _handle_gemini_error(e: Exception):
    err_str = str(e).lower()
    if "api key" in err_str or "authentication" in err_str or "permission" in err_str:
        raise LLMAuthError(f"Gemini auth failed: {e}") from e
    if ("resource" in err_str and "exhausted" in err_str) or "rate limit" in err_str or "429" in err_str:
        raise LLMRateLimitError(f"Gemini rate limit: {e}") from e
    raise LLMError(f"Gemini API error: {e}") from e


class GeminiProvider(LLMProvider):
    """Google Gemini provider (google-genai SDK)."""

    provider_name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.model_name = model or "gemini-2.5-flash"
        self._api_key = api_key

        if client:
            self.client = client
            return

        try:
            from google import genai
        except ImportError:
            raise LLMError(
                "google-genai package not installed. Run: pip install google-genai"
            )

        self.client = genai.Client(api_key=api_key)

    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float | None = None,
        top_p: float | None = None,
    ) -> str:
        try:
            from google.genai import types
        except ImportError:
            raise LLMError("google-genai package not installed")

        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=self._convert_messages(messages),
                config=types.GenerateContentConfig(
                    system_instruction=system,
                    max_output_tokens=max_tokens,
                    temperature=temperature,
                    top_p=top_p,
                ),
            )
            return response.text
        except Exception as e:
            _handle_gemini_error(e)

    def _convert_messages(self, messages: list[dict]) -> list:
        """Convert generic messages to Gemini Content format ("assistant" -> "model")."""
        from google.genai import types

        contents = []
        for msg in messages:
            if not msg.get("content"):
                continue
            role = "model" if msg.get("role") == "assistant" else "user"
            contents.append(
                types.Content(role=role, parts=[types.Part.from_text(text=msg["content"])])
            )
        return contents
