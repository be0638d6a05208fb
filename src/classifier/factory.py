"""Select a classifier strategy from explicit configuration."""

import structlog

from llm import LLMProvider
from observability import Metrics

from .base import Classifier
from .model import ModelBackedClassifier
from .rules import RuleBasedClassifier

logger = structlog.get_logger()


def create_classifier(
    config: dict,
    provider: LLMProvider | None = None,
    collector: Metrics | None = None,
) -> Classifier:
    """Build the classifier named by ``config["strategy"]``.

    Args:
        config: The ``classifier`` config section as a dict
        provider: Model provider, or None when no credential is configured
        collector: Metrics collector (default: module singleton)

    ``strategy`` is "model", "rules" or "auto" (model when a provider exists).
    A model strategy without a provider still works: every call falls back to
    rules and reports a ConfigurationError.
    """
    strategy = config.get("strategy", "auto")
    if strategy == "auto":
        strategy = "model" if provider is not None else "rules"

    if strategy == "rules":
        logger.debug("classifier_selected", strategy="rules")
        return RuleBasedClassifier()
    if strategy == "model":
        logger.debug("classifier_selected", strategy="model", has_provider=provider is not None)
        return ModelBackedClassifier(
            provider,
            classify_timeout=config.get("classify_timeout", 10.0),
            intent_timeout=config.get("intent_timeout", 8.0),
            confidence_threshold=config.get("confidence_threshold", 0.7),
            max_activities=config.get("max_activities", 5),
            collector=collector,
        )
    raise ValueError(f"Unknown classifier strategy: {strategy}. Use: auto, model, rules")
