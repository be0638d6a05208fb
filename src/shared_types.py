"""Shared enums and types for peacepulse."""

from enum import StrEnum


class StressLevel(StrEnum):
    VERY_LOW = "very-low"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very-high"

    @property
    def is_elevated(self) -> bool:
        return self in (StressLevel.HIGH, StressLevel.VERY_HIGH)

    @property
    def is_relaxed(self) -> bool:
        return self in (StressLevel.VERY_LOW, StressLevel.LOW)


class ActivityCategory(StrEnum):
    MINDFULNESS = "mindfulness"
    HEALTH = "health"
    REFLECTION = "reflection"
    EXERCISE = "exercise"
    LEARNING = "learning"


class HabitAction(StrEnum):
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"
    NONE = "none"


class NotificationKind(StrEnum):
    SUCCESS = "success"
    INFO = "info"


class BannerKind(StrEnum):
    CONFIGURATION = "configuration"
    FALLBACK = "fallback"


class Sender(StrEnum):
    USER = "user"
    BOT = "bot"


class TurnState(StrEnum):
    IDLE = "idle"
    CLASSIFYING = "classifying"
    APPLYING = "applying"
    REPLYING = "replying"


class TurnBranch(StrEnum):
    OFF_TOPIC = "off_topic"
    HABIT_MANAGEMENT = "habit_management"
    WELLBEING = "wellbeing"
    ERROR = "error"
