"""LLM provider factory with credential auto-detection."""

import os

from .base import LLMError, LLMProvider

# Checked in order; the first variable that is set wins.
_PROVIDER_ENV_KEYS = {
    "gemini": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    "claude": ("ANTHROPIC_API_KEY",),
    "openai": ("OPENAI_API_KEY",),
}

_AUTO_DETECT_ORDER = ["gemini", "claude", "openai"]

# Classification calls are short, structured and latency-bound
_CHEAP_MODELS = {
    "claude": "claude-3-5-haiku-latest",
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.0-flash",
}


def _env_key(provider: str) -> str | None:
    for env_var in _PROVIDER_ENV_KEYS.get(provider, ()):
        value = os.getenv(env_var)
        if value:
            return value
    return None


def create_cheap_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Create a cheap-tier provider for classification calls."""
    resolved = provider or "auto"
    if resolved == "auto":
        resolved = _auto_detect_provider(api_key)
    cheap_model = model or _CHEAP_MODELS.get(resolved)
    return create_llm_provider(provider=resolved, api_key=api_key, model=cheap_model, client=client)


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "claude", "openai", "gemini", "auto", or None (auto-detect)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI

    Returns:
        LLMProvider instance

    Raises:
        LLMError: unknown provider, or no credential could be found
    """
    resolved = provider or "auto"

    if resolved == "auto":
        resolved = _auto_detect_provider(api_key)

    if not api_key and not client:
        api_key = _env_key(resolved)
        if not api_key:
            raise LLMError(f"No API key configured for provider: {resolved}")

    if resolved == "claude":
        from .providers.claude import ClaudeProvider

        return ClaudeProvider(api_key=api_key, model=model, client=client)
    elif resolved == "openai":
        from .providers.openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key, model=model, client=client)
    elif resolved == "gemini":
        from .providers.gemini import GeminiProvider

        return GeminiProvider(api_key=api_key, model=model, client=client)
    else:
        raise LLMError(f"Unknown provider: {resolved}. Use: claude, openai, gemini")


def _detect_provider_from_key(api_key: str) -> str | None:
    """Infer provider from API key prefix."""
    if api_key.startswith("sk-ant-"):
        return "claude"
    if api_key.startswith("sk-"):
        return "openai"
    if api_key.startswith("AI"):
        return "gemini"
    return None


def _auto_detect_provider(api_key: str | None = None) -> str:
    """Detect provider from explicit key prefix, then env vars."""
    if api_key:
        inferred = _detect_provider_from_key(api_key)
        if inferred:
            return inferred

    for name in _AUTO_DETECT_ORDER:
        if _env_key(name):
            return name
    raise LLMError(
        "No LLM API key found. Set one of: GOOGLE_API_KEY, ANTHROPIC_API_KEY, OPENAI_API_KEY"
    )
