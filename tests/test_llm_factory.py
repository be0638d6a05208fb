"""Tests for LLM factory and auto-detection."""

from unittest.mock import MagicMock, patch

import pytest

from llm import LLMError, create_cheap_provider, create_llm_provider
from llm.factory import _auto_detect_provider

ALL_KEYS = ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GOOGLE_API_KEY", "GEMINI_API_KEY")


@pytest.fixture
def no_keys(monkeypatch):
    for key in ALL_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestAutoDetection:
    def test_detects_anthropic_key(self, monkeypatch, no_keys):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        assert _auto_detect_provider() == "claude"

    def test_detects_openai_key(self, monkeypatch, no_keys):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert _auto_detect_provider() == "openai"

    def test_detects_google_key(self, monkeypatch, no_keys):
        monkeypatch.setenv("GOOGLE_API_KEY", "AIza-test")
        assert _auto_detect_provider() == "gemini"

    def test_detects_gemini_alias(self, monkeypatch, no_keys):
        monkeypatch.setenv("GEMINI_API_KEY", "AIza-test")
        assert _auto_detect_provider() == "gemini"

    def test_prefers_gemini_when_multiple(self, monkeypatch, no_keys):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.setenv("GOOGLE_API_KEY", "AIza-test")
        assert _auto_detect_provider() == "gemini"

    def test_explicit_key_prefix_wins(self, monkeypatch, no_keys):
        monkeypatch.setenv("GOOGLE_API_KEY", "AIza-test")
        assert _auto_detect_provider("sk-ant-abc") == "claude"

    def test_no_keys_raises(self, no_keys):
        with pytest.raises(LLMError, match="No LLM API key found"):
            _auto_detect_provider()


class TestCreateProvider:
    def test_explicit_claude_with_client(self):
        mock_client = MagicMock()
        provider = create_llm_provider(provider="claude", client=mock_client)
        assert provider.provider_name == "claude"
        assert provider.client is mock_client

    def test_explicit_openai_with_client(self):
        mock_client = MagicMock()
        provider = create_llm_provider(provider="openai", client=mock_client)
        assert provider.provider_name == "openai"
        assert provider.client is mock_client

    def test_explicit_gemini_with_client(self):
        mock_client = MagicMock()
        provider = create_llm_provider(provider="gemini", client=mock_client)
        assert provider.provider_name == "gemini"
        assert provider.client is mock_client

    def test_unknown_provider_raises(self):
        with pytest.raises(LLMError, match="Unknown provider"):
            create_llm_provider(provider="llama", client=MagicMock())

    def test_explicit_provider_without_key_raises(self, no_keys):
        with pytest.raises(LLMError, match="No API key configured for provider: claude"):
            create_llm_provider(provider="claude")

    def test_auto_with_anthropic_key(self, monkeypatch, no_keys):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        with patch("anthropic.Anthropic"):
            provider = create_llm_provider()
            assert provider.provider_name == "claude"

    def test_custom_model(self):
        provider = create_llm_provider(provider="claude", client=MagicMock(), model="claude-opus-4-20250514")
        assert provider.model == "claude-opus-4-20250514"

    def test_default_models(self):
        mock_client = MagicMock()
        assert create_llm_provider(provider="claude", client=mock_client).model == "claude-sonnet-4-20250514"
        assert create_llm_provider(provider="openai", client=mock_client).model == "gpt-4o"
        assert create_llm_provider(provider="gemini", client=mock_client).model_name == "gemini-2.5-flash"


class TestCheapProvider:
    def test_cheap_models(self):
        mock_client = MagicMock()
        assert create_cheap_provider(provider="claude", client=mock_client).model == "claude-3-5-haiku-latest"
        assert create_cheap_provider(provider="openai", client=mock_client).model == "gpt-4o-mini"
        assert create_cheap_provider(provider="gemini", client=mock_client).model_name == "gemini-2.0-flash"

    def test_model_override(self):
        provider = create_cheap_provider(provider="openai", client=MagicMock(), model="gpt-4.1-nano")
        assert provider.model == "gpt-4.1-nano"
