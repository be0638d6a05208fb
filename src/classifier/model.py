"""Model-backed classifier with rule-based fallback.

Both operations fail closed: a missing credential, provider error, timeout,
non-JSON reply or schema violation yields the rule-based result. The reason is
kept in ``last_failure`` for banner decisions.
"""

import asyncio
import json
import re
from typing import Callable, TypeVar

import structlog

from errors import ConfigurationError, TransientServiceError, ValidationError, WellnessError
from llm import LLMAuthError, LLMError, LLMProvider
from observability import Metrics, metrics
from shared_types import ActivityCategory, HabitAction, StressLevel
from wellness.models import ActivitySuggestion

from .base import Classifier
from .models import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    MAX_ACTIVITIES,
    ClassificationResult,
    HabitIntent,
)
from .prompts import PromptTemplates
from .rules import (
    classify_fallback,
    classify_habit_intent_fallback,
    clean_habit_name,
    has_explicit_cause,
    has_severe_distress,
)

logger = structlog.get_logger()

T = TypeVar("T")

DEFAULT_CLASSIFY_TIMEOUT = 10.0
DEFAULT_INTENT_TIMEOUT = 8.0
CLASSIFY_MAX_TOKENS = 512

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def extract_json_object(raw: str) -> dict:
    """Parse the span from the first ``{`` to the last ``}`` as a JSON object."""
    text = _FENCE.sub("", raw or "")
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end < start:
        raise ValidationError("No JSON object in model response")
    try:
        data = json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in model response: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("Model response JSON is not an object")
    return data


def _coerce_category(value) -> ActivityCategory:
    try:
        return ActivityCategory(str(value).strip().lower())
    except ValueError:
        return ActivityCategory.HEALTH


def coerce_activities(items) -> list[ActivitySuggestion]:
    """Keep items with a non-empty string title; unknown categories become health."""
    activities = []
    for item in items:
        if not isinstance(item, dict):
            continue
        title = item.get("title")
        if not isinstance(title, str) or not title.strip():
            continue
        activities.append(ActivitySuggestion(title, _coerce_category(item.get("category"))))
    return activities


def _is_confidence(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and 0.0 <= value <= 1.0


class ModelBackedClassifier(Classifier):
    """Asks the model service first, falls back to rules on any failure."""

    name = "model"

    def __init__(
        self,
        provider: LLMProvider | None,
        classify_timeout: float = DEFAULT_CLASSIFY_TIMEOUT,
        intent_timeout: float = DEFAULT_INTENT_TIMEOUT,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        max_activities: int = MAX_ACTIVITIES,
        collector: Metrics | None = None,
    ):
        super().__init__()
        self.provider = provider
        self.classify_timeout = classify_timeout
        self.intent_timeout = intent_timeout
        self.confidence_threshold = confidence_threshold
        self.max_activities = max_activities
        self.metrics = collector or metrics

    async def classify(self, text: str) -> ClassificationResult:
        fallback = classify_fallback(text)
        return await self._first_valid(
            task="classify",
            prompt=PromptTemplates.stress(text),
            timeout=self.classify_timeout,
            parse=lambda raw: self._parse_classification(raw, text, fallback),
            fallback=fallback,
        )

    async def classify_habit_intent(self, text: str) -> HabitIntent:
        return await self._first_valid(
            task="habit_intent",
            prompt=PromptTemplates.habit_intent(text),
            timeout=self.intent_timeout,
            parse=self._parse_habit_intent,
            fallback=classify_habit_intent_fallback(text),
        )

    async def _first_valid(
        self,
        task: str,
        prompt: str,
        timeout: float,
        parse: Callable[[str], T],
        fallback: T,
    ) -> T:
        """Model result when a credential exists, the call succeeds and the output validates."""
        self.last_failure = None
        try:
            if self.provider is None:
                raise ConfigurationError("No model service credential configured")
            raw = await self._call(prompt, timeout)
            return parse(raw)
        except WellnessError as e:
            self.last_failure = e
            self.metrics.fallback(task, type(e).__name__)
            log = logger.debug if isinstance(e, ConfigurationError) else logger.warning
            log("classifier_fallback", task=task, reason=type(e).__name__, error=str(e))
            return fallback

    async def _call(self, prompt: str, timeout: float) -> str:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(
                    self.provider.generate,
                    [{"role": "user", "content": prompt}],
                    max_tokens=CLASSIFY_MAX_TOKENS,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransientServiceError(f"Model call timed out after {timeout}s") from e
        except LLMAuthError as e:
            raise ConfigurationError(str(e)) from e
        except LLMError as e:
            raise TransientServiceError(str(e)) from e
        except Exception as e:
            raise TransientServiceError(f"Model call failed: {e}") from e

    def _parse_classification(
        self, raw: str, text: str, fallback: ClassificationResult
    ) -> ClassificationResult:
        data = extract_json_object(raw)

        try:
            level = StressLevel(data.get("stressLevel"))
        except ValueError as e:
            raise ValidationError(f"Invalid stressLevel: {data.get('stressLevel')!r}") from e

        items = data.get("todos", data.get("activities"))
        if not isinstance(items, list):
            raise ValidationError("todos must be a list")

        activities = coerce_activities(items)[: self.max_activities]
        if not activities:
            activities = list(fallback.activities)

        if level.is_elevated and not has_explicit_cause(text) and not has_severe_distress(text):
            logger.info("model_stress_downgraded", level=str(level))
            level = StressLevel.MODERATE

        return ClassificationResult(stress_level=level, activities=tuple(activities))

    def _parse_habit_intent(self, raw: str) -> HabitIntent:
        data = extract_json_object(raw)

        try:
            action = HabitAction(data.get("action"))
        except ValueError as e:
            raise ValidationError(f"Invalid action: {data.get('action')!r}") from e

        confidence = data.get("confidence")
        if not _is_confidence(confidence):
            raise ValidationError(f"Invalid confidence: {confidence!r}")
        if confidence <= self.confidence_threshold:
            raise ValidationError(f"Confidence {confidence} not above {self.confidence_threshold}")

        if action == HabitAction.NONE:
            return HabitIntent.none(confidence)

        if action == HabitAction.ADD:
            habits = data.get("habits")
            activities = coerce_activities(habits) if isinstance(habits, list) else []
            if not activities:
                raise ValidationError("add intent without valid habits")
            return HabitIntent.add(activities, confidence)

        if action == HabitAction.REMOVE:
            target = data.get("habitToRemove")
            target = clean_habit_name(target) if isinstance(target, str) else ""
            if not target:
                raise ValidationError("remove intent without habitToRemove")
            return HabitIntent.remove(target, confidence)

        update = data.get("habitToUpdate")
        if not isinstance(update, dict):
            raise ValidationError("update intent without habitToUpdate")
        old_name = update.get("oldTitle")
        new_name = update.get("newTitle")
        if not (isinstance(old_name, str) and isinstance(new_name, str)):
            raise ValidationError("habitToUpdate needs oldTitle and newTitle")
        old_name, new_name = clean_habit_name(old_name), clean_habit_name(new_name)
        if not old_name or not new_name:
            raise ValidationError("habitToUpdate needs oldTitle and newTitle")
        category = update.get("category")
        return HabitIntent.update(
            old_name,
            new_name,
            confidence,
            category=_coerce_category(category) if category else None,
        )
