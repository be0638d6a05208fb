"""In-memory wellness state: habits, stress history, chat log, notifications.

All mutations are synchronous and single-threaded. The conversation
orchestrator serializes turns, so dedup-guarded inserts never race.
"""

import copy
from datetime import date, datetime, timedelta
from typing import Callable, Iterable

import structlog

from shared_types import ActivityCategory, Sender, StressLevel

from .models import (
    ActivitySuggestion,
    ChatMessage,
    HabitRecord,
    Notification,
    StressEntry,
    new_id,
)
from .similarity import DEFAULT_OVERLAP_THRESHOLD, is_same_habit, name_tokens

logger = structlog.get_logger()

GREETING = "Hello! I'm here to support you on your wellness journey. How are you feeling today?"

SEED_HABITS = [
    ("Morning Meditation", ActivityCategory.MINDFULNESS, 5),
    ("Daily Exercise", ActivityCategory.EXERCISE, 3),
    ("Journal Writing", ActivityCategory.REFLECTION, 7),
]

# Blob keys, one JSON document each
HABITS_KEY = "pp_habits"
STRESS_HISTORY_KEY = "pp_stress_history"
TODAY_STRESS_KEY = "pp_today_stress_level"
CHAT_MESSAGES_KEY = "pp_chat_messages"
NOTIFICATIONS_KEY = "pp_notifications"

MAX_NOTIFICATION_LOG = 100


class WellnessStore:
    """Habit collection plus the per-user history the chat engine mutates."""

    def __init__(
        self,
        overlap_threshold: float = DEFAULT_OVERLAP_THRESHOLD,
        seed: bool = True,
    ):
        self.overlap_threshold = overlap_threshold
        self._habits: list[HabitRecord] = []
        self._stress_history: list[StressEntry] = []
        self.today_stress_level: StressLevel | None = None
        self._chat_messages: list[ChatMessage] = []
        self._notifications: list[Notification] = []
        self._listeners: list[Callable[[], None]] = []
        if seed:
            self._seed()

    def _seed(self):
        today = date.today()
        for name, category, streak in SEED_HABITS:
            completions = [(today - timedelta(days=d)).isoformat() for d in range(streak, 0, -1)]
            self._habits.append(
                HabitRecord(
                    id=new_id(),
                    name=name,
                    category=category,
                    streak=streak,
                    daily_completions=completions,
                )
            )
        self._chat_messages.append(ChatMessage(text=GREETING, sender=Sender.BOT))

    # --- change listeners ---

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback fired after every mutation (used for persistence)."""
        self._listeners.append(listener)

    def _changed(self):
        for listener in self._listeners:
            listener()

    # --- habits ---

    def list_habits(self) -> list[HabitRecord]:
        return list(self._habits)

    def get_habit(self, habit_id: str) -> HabitRecord | None:
        return next((h for h in self._habits if h.id == habit_id), None)

    def find_similar(self, name: str, exclude_id: str | None = None) -> HabitRecord | None:
        """First habit the similarity matcher considers the same as ``name``."""
        for habit in self._habits:
            if habit.id == exclude_id:
                continue
            if is_same_habit(name, habit.name, self.overlap_threshold):
                return habit
        return None

    def add_habit(self, name: str, category: ActivityCategory = ActivityCategory.HEALTH) -> bool:
        """Add a habit unless an equivalent one exists. Returns True if added."""
        name = name.strip()
        if not name:
            return False
        existing = self.find_similar(name)
        if existing:
            logger.debug("habit_duplicate_skipped", name=name, existing=existing.name)
            return False
        self._habits.append(HabitRecord(id=new_id(), name=name, category=ActivityCategory(category)))
        logger.info("habit_added", name=name, category=str(category))
        self._changed()
        return True

    def add_habits_dedup(self, items: Iterable[ActivitySuggestion]) -> list[str]:
        """Dedup-guarded insert of each item, in order. Returns names actually added."""
        added = []
        for item in items:
            if self.add_habit(item.title, item.category):
                added.append(item.title)
        return added

    def delete_habit(self, habit_id: str) -> bool:
        before = len(self._habits)
        self._habits = [h for h in self._habits if h.id != habit_id]
        deleted = len(self._habits) < before
        if deleted:
            logger.info("habit_deleted", habit_id=habit_id)
            self._changed()
        return deleted

    def find_habit_by_fuzzy_name(self, name: str) -> HabitRecord | None:
        """Find a habit by similarity, then by whole-word containment in either direction.

        Only words of three or more letters count, so "it" never matches "meditation".
        """
        name = name.strip()
        if not name:
            return None
        match = self.find_similar(name)
        if match:
            return match
        wanted = set(name_tokens(name))
        if not wanted:
            return None
        for habit in self._habits:
            have = set(name_tokens(habit.name))
            if have and (wanted <= have or have <= wanted):
                return habit
        return None

    def toggle_habit(self, habit_id: str, on: date | None = None) -> HabitRecord | None:
        """Flip today's completion; completing extends the streak."""
        habit = self.get_habit(habit_id)
        if not habit:
            return None
        day = (on or date.today()).isoformat()
        if habit.completed:
            habit.completed = False
        else:
            habit.completed = True
            habit.streak += 1
            if day not in habit.daily_completions:
                habit.daily_completions.append(day)
        self._changed()
        return habit

    # --- stress ---

    def record_stress_entry(self, level: StressLevel, note: str | None = None) -> StressEntry:
        entry = StressEntry(date=datetime.now().isoformat(), stress_level=StressLevel(level), note=note)
        self._stress_history.insert(0, entry)
        self.today_stress_level = entry.stress_level
        logger.info("stress_recorded", level=str(level), note=note)
        self._changed()
        return entry

    @property
    def stress_history(self) -> list[StressEntry]:
        return list(self._stress_history)

    # --- chat + notifications ---

    def add_chat_message(self, message: ChatMessage) -> None:
        self._chat_messages.append(message)
        self._changed()

    @property
    def chat_messages(self) -> list[ChatMessage]:
        return list(self._chat_messages)

    def record_notifications(self, notifications: Iterable[Notification]) -> None:
        notifications = list(notifications)
        if not notifications:
            return
        self._notifications.extend(notifications)
        del self._notifications[:-MAX_NOTIFICATION_LOG]
        self._changed()

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    def active_notifications(self, now: datetime | None = None) -> list[Notification]:
        return [n for n in self._notifications if not n.is_expired(now)]

    # --- snapshot / persistence ---

    def snapshot(self) -> dict:
        """Deep copy of mutable state, for rollback of a failed turn."""
        return {
            "habits": copy.deepcopy(self._habits),
            "stress_history": copy.deepcopy(self._stress_history),
            "today_stress_level": self.today_stress_level,
            "notifications": list(self._notifications),
        }

    def restore(self, snapshot: dict) -> None:
        self._habits = snapshot["habits"]
        self._stress_history = snapshot["stress_history"]
        self.today_stress_level = snapshot["today_stress_level"]
        self._notifications = snapshot["notifications"]
        logger.warning("store_restored_from_snapshot")
        self._changed()

    def to_blobs(self) -> dict[str, object]:
        """Keyed JSON-ready documents for the blob store."""
        return {
            HABITS_KEY: [h.to_dict() for h in self._habits],
            STRESS_HISTORY_KEY: [e.to_dict() for e in self._stress_history],
            TODAY_STRESS_KEY: str(self.today_stress_level) if self.today_stress_level else "",
            CHAT_MESSAGES_KEY: [m.to_dict() for m in self._chat_messages],
            NOTIFICATIONS_KEY: [n.to_dict() for n in self._notifications],
        }

    def load_blobs(self, blobs: dict[str, object]) -> None:
        """Hydrate from stored documents. Malformed keys are skipped, not fatal."""
        loaders = {
            HABITS_KEY: self._load_habits,
            STRESS_HISTORY_KEY: self._load_stress_history,
            TODAY_STRESS_KEY: self._load_today_stress,
            CHAT_MESSAGES_KEY: self._load_chat_messages,
        }
        for key, loader in loaders.items():
            if key not in blobs:
                continue
            try:
                loader(blobs[key])
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("blob_load_failed", key=key, error=str(e))

    def _load_habits(self, data):
        if isinstance(data, list):
            self._habits = [HabitRecord.from_dict(d) for d in data]

    def _load_stress_history(self, data):
        if isinstance(data, list):
            self._stress_history = [StressEntry.from_dict(d) for d in data]

    def _load_today_stress(self, data):
        self.today_stress_level = StressLevel(data) if data else None

    def _load_chat_messages(self, data):
        if isinstance(data, list) and data:
            self._chat_messages = [ChatMessage.from_dict(d) for d in data]
