"""Shared CLI utilities."""

import random

import structlog
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from chat import CannedReplyPool, ConversationOrchestrator, ModelReplyGenerator, TurnResult
from classifier import create_classifier
from db import BlobStore
from llm import LLMError, create_cheap_provider, create_llm_provider
from shared_types import NotificationKind
from wellness import DebouncedPersister, WellnessStore

console = Console()
logger = structlog.get_logger()


def _build_providers(llm_cfg):
    """(reply provider, classifier provider), or (None, None) without a credential."""
    try:
        reply_provider = create_llm_provider(
            provider=llm_cfg.provider,
            api_key=llm_cfg.api_key,
            model=llm_cfg.model,
        )
        classifier_provider = create_cheap_provider(
            provider=reply_provider.provider_name,
            api_key=llm_cfg.api_key,
            model=llm_cfg.classifier_model,
        )
    except LLMError as e:
        logger.info("llm_unavailable", error=str(e))
        return None, None
    return reply_provider, classifier_provider


def get_components(offline: bool = False):
    """Initialize all components from config.

    Args:
        offline: If True, skip provider setup (rule-based classifier, canned replies)
    """
    from cli.config import get_paths, load_config_model

    config_model = load_config_model()
    config = config_model.to_dict()
    paths = get_paths(config)

    store = WellnessStore(
        overlap_threshold=config_model.similarity.overlap_threshold,
        seed=config_model.seed_defaults,
    )
    blobs = BlobStore(paths["db"])
    persister = DebouncedPersister(store, blobs, config_model.persistence.debounce_seconds)
    persister.hydrate()
    persister.attach()

    if offline:
        reply_provider, classifier_provider = None, None
    else:
        reply_provider, classifier_provider = _build_providers(config_model.llm)

    classifier = create_classifier(config["classifier"], classifier_provider)
    replies_cfg = config_model.replies
    reply_generator = ModelReplyGenerator(
        reply_provider,
        timeout=replies_cfg.timeout,
        temperature=config_model.llm.temperature,
        top_p=config_model.llm.top_p,
        max_tokens=config_model.llm.max_tokens,
        max_attempts=replies_cfg.max_attempts,
        min_wait=replies_cfg.min_wait,
        max_wait=replies_cfg.max_wait,
    )
    rng = random.Random(replies_cfg.seed) if replies_cfg.seed is not None else None

    orchestrator = ConversationOrchestrator(
        store,
        classifier,
        reply_generator,
        canned=CannedReplyPool(rng=rng),
        confidence_threshold=config_model.classifier.confidence_threshold,
        max_activities=config_model.classifier.max_activities,
        off_topic_filter=config_model.classifier.off_topic_filter,
        notification_ttl=config_model.notifications.ttl_seconds,
    )

    return {
        "config": config,
        "config_model": config_model,
        "paths": paths,
        "store": store,
        "persister": persister,
        "classifier": classifier,
        "reply_generator": reply_generator,
        "orchestrator": orchestrator,
    }


def render_turn(result: TurnResult) -> None:
    """Print banner, reply and notifications for one turn."""
    if result.banner:
        console.print(Panel(result.banner.message, style="yellow"))
    console.print(Markdown(result.reply))
    for note in result.notifications:
        color = "green" if note.kind == NotificationKind.SUCCESS else "blue"
        console.print(f"[{color}]● {note.message}[/]")
