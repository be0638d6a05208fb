"""Shared test fixtures for PeacePulse."""

import json
import random
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from chat import CannedReplyPool, ConversationOrchestrator  # noqa: E402
from classifier import ModelBackedClassifier, RuleBasedClassifier  # noqa: E402
from observability import Metrics  # noqa: E402
from wellness import WellnessStore  # noqa: E402


@pytest.fixture
def store():
    """Seeded store: Morning Meditation, Daily Exercise, Journal Writing."""
    return WellnessStore()


@pytest.fixture
def empty_store():
    return WellnessStore(seed=False)


@pytest.fixture
def collector():
    return Metrics()


@pytest.fixture
def mock_provider():
    """Provider whose generate() returns whatever the test sets."""
    provider = MagicMock()
    provider.provider_name = "mock"
    provider.generate.return_value = ""
    return provider


@pytest.fixture
def json_reply():
    """Builds a model-style reply wrapping a JSON object in prose and fences."""

    def _reply(**data) -> str:
        return "Here you go:\n```json\n" + json.dumps(data) + "\n```"

    return _reply


@pytest.fixture
def reply_generator():
    """Reply generator returning a plain supportive bullet."""
    generator = MagicMock()
    generator.generate = AsyncMock(return_value="• I hear you. What would help right now?")
    return generator


@pytest.fixture
def make_orchestrator(collector):
    """Factory: orchestrator over a store with a rule-based classifier by default."""

    def _make(store, classifier=None, reply_generator=None, **kwargs):
        if reply_generator is None:
            reply_generator = MagicMock()
            reply_generator.generate = AsyncMock(return_value="• I hear you. What would help right now?")
        return ConversationOrchestrator(
            store,
            classifier or RuleBasedClassifier(),
            reply_generator,
            canned=CannedReplyPool(rng=random.Random(7)),
            collector=collector,
            **kwargs,
        )

    return _make


@pytest.fixture
def model_classifier(mock_provider, collector):
    return ModelBackedClassifier(
        mock_provider,
        classify_timeout=1.0,
        intent_timeout=1.0,
        collector=collector,
    )
