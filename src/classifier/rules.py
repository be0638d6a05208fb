"""Deterministic keyword classifier, also the fallback for the model-backed one.

Every function here is pure: the same text always gives an equal result.
"""

from shared_types import ActivityCategory, StressLevel
from wellness.models import ActivitySuggestion

from .base import Classifier
from .lexicons import (
    ADD_INTENT,
    AFFECT_TABLE,
    CAUSE_TABLE,
    CRISIS,
    EXERCISE_VOCABULARY,
    HABIT_DOMAIN_TABLE,
    NEGATIVE,
    OFF_TOPIC_TABLE,
    REMOVE_PATTERNS,
    REQUEST_PHRASE,
    SEVERE,
    TARGET_SUFFIX,
    UPDATE_INTENT,
)
from .models import ClassificationResult, HabitIntent

ADD_CONFIDENCE = 0.8
REMOVE_CONFIDENCE = 0.85
UPDATE_CONFIDENCE = 0.8
NONE_CONFIDENCE = 0.9

# Minimal activities offered when stress is high and nothing better is known
FALLBACK_ACTIVITIES = (
    ActivitySuggestion("Take 3 deep breaths slowly", ActivityCategory.MINDFULNESS),
    ActivitySuggestion("Step outside for fresh air", ActivityCategory.HEALTH),
)

STRESS_RELIEF_ACTIVITIES = (
    ActivitySuggestion("Deep breathing exercise (4-7-8 technique)", ActivityCategory.MINDFULNESS),
    ActivitySuggestion("10-minute gentle stretching", ActivityCategory.EXERCISE),
    ActivitySuggestion("Mindful journaling for 5 minutes", ActivityCategory.REFLECTION),
    ActivitySuggestion("Progressive muscle relaxation", ActivityCategory.MINDFULNESS),
    ActivitySuggestion("Take a 15-minute walk outside", ActivityCategory.EXERCISE),
)

_QUOTES = "\"'`“”‘’"
_TRAILING = ".,!?;:"


# --- predicates ---


def has_affect_signal(text: str) -> bool:
    """True when the text carries any affect-lexicon word."""
    lowered = text.lower()
    return any(pattern.search(lowered) for pattern, _ in AFFECT_TABLE)


def explicit_causes(text: str) -> list[str]:
    lowered = text.lower()
    return [label for pattern, label in CAUSE_TABLE if pattern.search(lowered)]


def has_explicit_cause(text: str) -> bool:
    return bool(explicit_causes(text))


def has_severe_distress(text: str) -> bool:
    return bool(SEVERE.search(text.lower()))


def is_crisis(text: str) -> bool:
    return bool(CRISIS.search(text.lower()))


def off_topic_category(text: str) -> str | None:
    lowered = text.lower()
    for pattern, label in OFF_TOPIC_TABLE:
        if pattern.search(lowered):
            return label
    return None


def is_off_topic(text: str) -> bool:
    return off_topic_category(text) is not None


def is_exercise_request(text: str) -> bool:
    """A request phrase together with exercise vocabulary ("suggest some exercises")."""
    lowered = text.lower()
    return bool(REQUEST_PHRASE.search(lowered) and EXERCISE_VOCABULARY.search(lowered))


# --- classification ---


def classify_fallback(text: str) -> ClassificationResult:
    lowered = text.lower()
    level = StressLevel.MODERATE
    for pattern, mapped in AFFECT_TABLE:
        if pattern.search(lowered):
            level = mapped
            if pattern is NEGATIVE and not has_explicit_cause(lowered):
                level = StressLevel.MODERATE
            break

    activities = FALLBACK_ACTIVITIES if level.is_elevated else ()
    return ClassificationResult(stress_level=level, activities=activities)


def clean_habit_name(name: str) -> str:
    """Strip quotes, trailing punctuation and "from my habits" tails."""
    cleaned = name.strip()
    previous = None
    while cleaned != previous:
        previous = cleaned
        cleaned = TARGET_SUFFIX.sub("", cleaned)
        cleaned = cleaned.rstrip(_TRAILING).strip().strip(_QUOTES).strip()
    return cleaned


def classify_habit_intent_fallback(text: str) -> HabitIntent:
    lowered = text.lower()

    if ADD_INTENT.search(lowered):
        habits = [suggestion for pattern, suggestion in HABIT_DOMAIN_TABLE if pattern.search(lowered)]
        if habits:
            return HabitIntent.add(habits, ADD_CONFIDENCE)

    for pattern in REMOVE_PATTERNS:
        match = pattern.search(text)
        if match:
            target = clean_habit_name(match.group(1))
            if target:
                return HabitIntent.remove(target, REMOVE_CONFIDENCE)

    match = UPDATE_INTENT.search(text)
    if match:
        old_name = clean_habit_name(match.group(1))
        new_name = clean_habit_name(match.group(2))
        if old_name and new_name:
            return HabitIntent.update(old_name, new_name, UPDATE_CONFIDENCE)

    return HabitIntent.none(NONE_CONFIDENCE)


class RuleBasedClassifier(Classifier):
    """Keyword strategy. Never fails, never suspends for long."""

    name = "rules"

    async def classify(self, text: str) -> ClassificationResult:
        return classify_fallback(text)

    async def classify_habit_intent(self, text: str) -> HabitIntent:
        return classify_habit_intent_fallback(text)
