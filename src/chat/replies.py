"""Conversational reply generation: model-backed, with a canned fallback pool."""

import asyncio
import random
from typing import Protocol, Sequence

import structlog

from classifier.prompts import CANNED_REPLIES, PromptTemplates
from cli.retry import llm_retry
from errors import ConfigurationError, TransientServiceError
from llm import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError
from shared_types import Sender
from wellness.models import ChatMessage

logger = structlog.get_logger()

DEFAULT_REPLY_TIMEOUT = 20.0


class ReplyGenerator(Protocol):
    async def generate(self, history: Sequence[ChatMessage], user_text: str) -> str:
        """Reply to ``user_text`` given the messages that came before it."""
        ...


def history_to_messages(history: Sequence[ChatMessage], user_text: str) -> list[dict]:
    """Ordered role/content pairs, starting at the first user message.

    Consecutive messages from the same side are merged so roles alternate.
    """
    first_user = next((i for i, m in enumerate(history) if m.sender == Sender.USER), len(history))
    messages: list[dict] = []
    turns = [(m.sender, m.text) for m in history[first_user:]] + [(Sender.USER, user_text)]
    for sender, text in turns:
        role = "user" if sender == Sender.USER else "assistant"
        if messages and messages[-1]["role"] == role:
            messages[-1]["content"] += "\n\n" + text
        else:
            messages.append({"role": role, "content": text})
    return messages


class ModelReplyGenerator:
    """Persona-prompted replies from the configured model provider."""

    def __init__(
        self,
        provider: LLMProvider | None,
        timeout: float = DEFAULT_REPLY_TIMEOUT,
        temperature: float = 0.6,
        top_p: float = 0.9,
        max_tokens: int = 512,
        max_attempts: int = 3,
        min_wait: float = 1.0,
        max_wait: float = 8.0,
        system: str = PromptTemplates.SYSTEM,
    ):
        self.provider = provider
        self.timeout = timeout
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens
        self.system = system
        self._generate_with_retry = llm_retry(
            max_attempts=max_attempts,
            min_wait=min_wait,
            max_wait=max_wait,
            exceptions=(LLMRateLimitError,),
        )(self._generate_once)

    def _generate_once(self, messages: list[dict]) -> str:
        return self.provider.generate(
            messages,
            system=self.system,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
        )

    async def generate(self, history: Sequence[ChatMessage], user_text: str) -> str:
        if self.provider is None:
            raise ConfigurationError("No model service credential configured")

        messages = history_to_messages(history, user_text)
        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(self._generate_with_retry, messages),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransientServiceError(f"Reply timed out after {self.timeout}s") from e
        except LLMAuthError as e:
            raise ConfigurationError(str(e)) from e
        except LLMError as e:
            raise TransientServiceError(str(e)) from e

        if not text or not text.strip():
            raise TransientServiceError("Model returned an empty reply")
        return text.strip()


class CannedReplyPool:
    """Supportive replies used when generation fails."""

    def __init__(self, replies: Sequence[str] = CANNED_REPLIES, rng: random.Random | None = None):
        self.replies = tuple(replies)
        self.rng = rng or random.Random()

    def pick(self) -> str:
        return self.rng.choice(self.replies)
