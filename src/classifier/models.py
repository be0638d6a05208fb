"""Per-turn classification results."""

from dataclasses import dataclass

from shared_types import ActivityCategory, HabitAction, StressLevel
from wellness.models import ActivitySuggestion

# Habit intents at or below this confidence are ignored
DEFAULT_CONFIDENCE_THRESHOLD = 0.7
MAX_ACTIVITIES = 5


@dataclass(frozen=True)
class ClassificationResult:
    stress_level: StressLevel
    activities: tuple[ActivitySuggestion, ...] = ()


@dataclass(frozen=True)
class HabitIntent:
    """What the user wants done to their habit list.

    Which fields are populated depends on ``action``:
    ADD uses ``habits``, REMOVE uses ``target_name``, UPDATE uses
    ``old_name``/``new_name`` and optionally ``category``.
    """

    action: HabitAction = HabitAction.NONE
    confidence: float = 0.9
    habits: tuple[ActivitySuggestion, ...] = ()
    target_name: str | None = None
    old_name: str | None = None
    new_name: str | None = None
    category: ActivityCategory | None = None

    def is_actionable(self, threshold: float = DEFAULT_CONFIDENCE_THRESHOLD) -> bool:
        return self.action != HabitAction.NONE and self.confidence > threshold

    @classmethod
    def none(cls, confidence: float = 0.9) -> "HabitIntent":
        return cls(action=HabitAction.NONE, confidence=confidence)

    @classmethod
    def add(cls, habits, confidence: float) -> "HabitIntent":
        return cls(action=HabitAction.ADD, confidence=confidence, habits=tuple(habits))

    @classmethod
    def remove(cls, target_name: str, confidence: float) -> "HabitIntent":
        return cls(action=HabitAction.REMOVE, confidence=confidence, target_name=target_name)

    @classmethod
    def update(
        cls,
        old_name: str,
        new_name: str,
        confidence: float,
        category: ActivityCategory | None = None,
    ) -> "HabitIntent":
        return cls(
            action=HabitAction.UPDATE,
            confidence=confidence,
            old_name=old_name,
            new_name=new_name,
            category=category,
        )
