"""Wellness state: habits, stress history, fuzzy dedup and persistence."""

from .models import (
    ActivitySuggestion,
    ChatMessage,
    HabitRecord,
    Notification,
    StressEntry,
)
from .persistence import DebouncedPersister
from .similarity import is_same_habit
from .store import WellnessStore

__all__ = [
    "ActivitySuggestion",
    "ChatMessage",
    "HabitRecord",
    "Notification",
    "StressEntry",
    "DebouncedPersister",
    "WellnessStore",
    "is_same_habit",
]
