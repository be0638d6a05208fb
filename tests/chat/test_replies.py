"""Tests for reply generation and the canned fallback pool."""

import random
import time

import pytest

from chat import CannedReplyPool, ModelReplyGenerator
from chat.replies import history_to_messages
from classifier.prompts import CANNED_REPLIES, PromptTemplates
from errors import ConfigurationError, TransientServiceError
from llm import LLMAuthError, LLMError, LLMRateLimitError
from shared_types import Sender
from wellness import ChatMessage


def msg(text, sender):
    return ChatMessage(text=text, sender=sender)


class TestHistoryToMessages:
    def test_starts_at_first_user_message(self):
        history = [
            msg("Hello! How are you feeling today?", Sender.BOT),
            msg("tired", Sender.USER),
            msg("• That sounds hard.", Sender.BOT),
        ]
        assert history_to_messages(history, "work is a lot") == [
            {"role": "user", "content": "tired"},
            {"role": "assistant", "content": "• That sounds hard."},
            {"role": "user", "content": "work is a lot"},
        ]

    def test_only_greeting(self):
        history = [msg("Hello!", Sender.BOT)]
        assert history_to_messages(history, "hi") == [{"role": "user", "content": "hi"}]

    def test_consecutive_roles_merged(self):
        history = [
            msg("first", Sender.USER),
            msg("a", Sender.BOT),
            msg("b", Sender.BOT),
            msg("second", Sender.USER),
        ]
        messages = history_to_messages(history, "third")
        assert [m["role"] for m in messages] == ["user", "assistant", "user"]
        assert messages[1]["content"] == "a\n\nb"
        assert messages[2]["content"] == "second\n\nthird"


class TestModelReplyGenerator:
    @pytest.mark.asyncio
    async def test_generates_with_persona_and_sampling(self, mock_provider):
        mock_provider.generate.return_value = "  • Let's take a breath together.  "
        generator = ModelReplyGenerator(mock_provider, temperature=0.6, top_p=0.9, max_tokens=256)
        reply = await generator.generate([], "I'm anxious")

        assert reply == "• Let's take a breath together."
        kwargs = mock_provider.generate.call_args.kwargs
        assert kwargs["system"] == PromptTemplates.SYSTEM
        assert kwargs["temperature"] == 0.6
        assert kwargs["top_p"] == 0.9
        assert kwargs["max_tokens"] == 256
        assert mock_provider.generate.call_args.args[0] == [{"role": "user", "content": "I'm anxious"}]

    @pytest.mark.asyncio
    async def test_no_provider(self):
        with pytest.raises(ConfigurationError):
            await ModelReplyGenerator(None).generate([], "hi")

    @pytest.mark.asyncio
    async def test_auth_error(self, mock_provider):
        mock_provider.generate.side_effect = LLMAuthError("invalid key")
        with pytest.raises(ConfigurationError):
            await ModelReplyGenerator(mock_provider).generate([], "hi")

    @pytest.mark.asyncio
    async def test_service_error(self, mock_provider):
        mock_provider.generate.side_effect = LLMError("503")
        with pytest.raises(TransientServiceError):
            await ModelReplyGenerator(mock_provider).generate([], "hi")

    @pytest.mark.asyncio
    async def test_empty_reply(self, mock_provider):
        mock_provider.generate.return_value = "   "
        with pytest.raises(TransientServiceError, match="empty"):
            await ModelReplyGenerator(mock_provider).generate([], "hi")

    @pytest.mark.asyncio
    async def test_rate_limit_retried(self, mock_provider):
        mock_provider.generate.side_effect = [LLMRateLimitError("429"), "• Here for you."]
        generator = ModelReplyGenerator(mock_provider, min_wait=0, max_wait=0)
        assert await generator.generate([], "hi") == "• Here for you."
        assert mock_provider.generate.call_count == 2

    @pytest.mark.asyncio
    async def test_rate_limit_exhausted(self, mock_provider):
        mock_provider.generate.side_effect = LLMRateLimitError("429")
        generator = ModelReplyGenerator(mock_provider, max_attempts=2, min_wait=0, max_wait=0)
        with pytest.raises(TransientServiceError):
            await generator.generate([], "hi")
        assert mock_provider.generate.call_count == 2

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self, mock_provider):
        mock_provider.generate.side_effect = LLMError("bad request")
        generator = ModelReplyGenerator(mock_provider, min_wait=0, max_wait=0)
        with pytest.raises(TransientServiceError):
            await generator.generate([], "hi")
        assert mock_provider.generate.call_count == 1

    @pytest.mark.asyncio
    async def test_timeout(self, mock_provider):
        def slow(*args, **kwargs):
            time.sleep(0.5)
            return "late"

        mock_provider.generate.side_effect = slow
        generator = ModelReplyGenerator(mock_provider, timeout=0.05)
        with pytest.raises(TransientServiceError, match="timed out"):
            await generator.generate([], "hi")


class TestCannedReplyPool:
    def test_picks_from_pool(self):
        pool = CannedReplyPool()
        for _ in range(20):
            assert pool.pick() in CANNED_REPLIES

    def test_seeded_pool_is_repeatable(self):
        a = CannedReplyPool(rng=random.Random(3))
        b = CannedReplyPool(rng=random.Random(3))
        assert [a.pick() for _ in range(5)] == [b.pick() for _ in range(5)]

    def test_custom_replies(self):
        assert CannedReplyPool(replies=["• Breathe."]).pick() == "• Breathe."
