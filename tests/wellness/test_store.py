"""Tests for the in-memory wellness store."""

from datetime import date, datetime, timedelta

from shared_types import ActivityCategory, NotificationKind, Sender, StressLevel
from wellness import ActivitySuggestion, ChatMessage, Notification, WellnessStore
from wellness.store import GREETING, HABITS_KEY, NOTIFICATIONS_KEY, TODAY_STRESS_KEY


class TestSeed:
    def test_seed_habits(self, store):
        habits = store.list_habits()
        assert [h.name for h in habits] == ["Morning Meditation", "Daily Exercise", "Journal Writing"]
        assert [h.streak for h in habits] == [5, 3, 7]
        assert habits[0].category == ActivityCategory.MINDFULNESS
        assert len(habits[2].daily_completions) == 7
        assert not any(h.completed for h in habits)

    def test_seed_greeting(self, store):
        messages = store.chat_messages
        assert len(messages) == 1
        assert messages[0].sender == Sender.BOT
        assert messages[0].text == GREETING

    def test_unseeded_is_empty(self, empty_store):
        assert empty_store.list_habits() == []
        assert empty_store.chat_messages == []
        assert empty_store.today_stress_level is None


class TestAddHabit:
    def test_adds_new_habit(self, store):
        assert store.add_habit("Evening walk", ActivityCategory.EXERCISE)
        added = store.list_habits()[-1]
        assert added.name == "Evening walk"
        assert added.streak == 0
        assert added.daily_completions == []

    def test_rejects_similar_habit(self, store):
        assert not store.add_habit("Daily Meditation")
        assert len(store.list_habits()) == 3

    def test_rejects_blank(self, store):
        assert not store.add_habit("   ")

    def test_add_habits_dedup_within_batch(self, empty_store):
        added = empty_store.add_habits_dedup(
            [
                ActivitySuggestion("Deep breathing", ActivityCategory.MINDFULNESS),
                ActivitySuggestion("Deep breathing exercise", ActivityCategory.MINDFULNESS),
                ActivitySuggestion("Read before bed", ActivityCategory.LEARNING),
            ]
        )
        assert added == ["Deep breathing", "Read before bed"]
        assert len(empty_store.list_habits()) == 2

    def test_no_pair_of_similar_habits_after_inserts(self, empty_store):
        for name in ["Morning walk", "Evening walk", "Walking", "Drink water", "Hydrate", "Journal"]:
            empty_store.add_habit(name)
        names = [h.name for h in empty_store.list_habits()]
        assert names == ["Morning walk", "Drink water", "Journal"]


class TestFindAndDelete:
    def test_fuzzy_find_by_synonym(self, store):
        assert store.find_habit_by_fuzzy_name("meditation").name == "Morning Meditation"

    def test_fuzzy_find_by_containment(self, store):
        assert store.find_habit_by_fuzzy_name("writing").name == "Journal Writing"

    def test_fuzzy_find_ignores_word_fragments(self, store):
        assert store.find_habit_by_fuzzy_name("it") is None
        assert store.find_habit_by_fuzzy_name("medit") is None
        assert store.find_habit_by_fuzzy_name("my journal writing routine").name == "Journal Writing"

    def test_fuzzy_find_missing(self, store):
        assert store.find_habit_by_fuzzy_name("swimming") is None
        assert store.find_habit_by_fuzzy_name("") is None

    def test_find_similar_excludes_id(self, store):
        meditation = store.list_habits()[0]
        assert store.find_similar("Daily meditation", exclude_id=meditation.id) is None

    def test_delete(self, store):
        habit = store.list_habits()[1]
        assert store.delete_habit(habit.id)
        assert store.get_habit(habit.id) is None
        assert not store.delete_habit(habit.id)


class TestToggle:
    def test_complete_extends_streak(self, store):
        habit = store.list_habits()[0]
        toggled = store.toggle_habit(habit.id)
        assert toggled.completed
        assert toggled.streak == 6
        assert date.today().isoformat() in toggled.daily_completions

    def test_uncomplete_keeps_streak(self, store):
        habit = store.list_habits()[0]
        store.toggle_habit(habit.id)
        toggled = store.toggle_habit(habit.id)
        assert not toggled.completed
        assert toggled.streak == 6

    def test_unknown_id(self, store):
        assert store.toggle_habit("nope") is None


class TestStress:
    def test_record_prepends_and_sets_today(self, store):
        store.record_stress_entry(StressLevel.LOW, note="first")
        store.record_stress_entry(StressLevel.HIGH, note="second")
        history = store.stress_history
        assert [e.note for e in history] == ["second", "first"]
        assert store.today_stress_level == StressLevel.HIGH


class TestNotifications:
    def test_active_excludes_expired(self, store):
        old = Notification("old", created_at=datetime.now() - timedelta(seconds=10))
        fresh = Notification("fresh", kind=NotificationKind.SUCCESS)
        store.record_notifications([old, fresh])
        assert [n.message for n in store.active_notifications()] == ["fresh"]
        assert len(store.notifications) == 2

    def test_log_is_capped(self, store):
        store.record_notifications(Notification(f"n{i}") for i in range(150))
        assert len(store.notifications) == 100
        assert store.notifications[-1].message == "n149"


class TestSnapshot:
    def test_restore_undoes_changes(self, store):
        snap = store.snapshot()
        store.add_habit("Evening walk")
        store.list_habits()[0].streak = 99
        store.record_stress_entry(StressLevel.HIGH)
        store.restore(snap)

        assert len(store.list_habits()) == 3
        assert store.list_habits()[0].streak == 5
        assert store.stress_history == []
        assert store.today_stress_level is None

    def test_restore_keeps_chat(self, store):
        snap = store.snapshot()
        store.add_chat_message(ChatMessage(text="hi", sender=Sender.USER))
        store.restore(snap)
        assert len(store.chat_messages) == 2


class TestListeners:
    def test_mutations_notify(self, store):
        calls = []
        store.subscribe(lambda: calls.append(1))
        store.add_habit("Evening walk")
        store.record_stress_entry(StressLevel.LOW)
        store.add_chat_message(ChatMessage(text="hi", sender=Sender.USER))
        assert len(calls) == 3

    def test_rejected_insert_does_not_notify(self, store):
        calls = []
        store.subscribe(lambda: calls.append(1))
        store.add_habit("Morning meditation")
        assert calls == []


class TestBlobs:
    def test_round_trip_through_blobs(self, store):
        store.add_habit("Evening walk", ActivityCategory.EXERCISE)
        store.record_stress_entry(StressLevel.MODERATE, note="Auto-detected from chat")
        blobs = store.to_blobs()

        restored = WellnessStore(seed=False)
        restored.load_blobs(blobs)
        assert [h.name for h in restored.list_habits()] == [h.name for h in store.list_habits()]
        assert restored.list_habits()[-1].category == ActivityCategory.EXERCISE
        assert restored.today_stress_level == StressLevel.MODERATE
        assert restored.stress_history[0].note == "Auto-detected from chat"
        assert len(restored.chat_messages) == 1

    def test_blob_values_are_plain(self, store):
        blobs = store.to_blobs()
        assert blobs[TODAY_STRESS_KEY] == ""
        assert blobs[HABITS_KEY][0]["category"] == "mindfulness"
        assert blobs[NOTIFICATIONS_KEY] == []

    def test_malformed_key_skipped(self, store):
        store.load_blobs({HABITS_KEY: [{"name": "no id"}], TODAY_STRESS_KEY: "high"})
        assert len(store.list_habits()) == 3
        assert store.today_stress_level == StressLevel.HIGH

    def test_empty_chat_keeps_greeting(self, store):
        store.load_blobs({"pp_chat_messages": []})
        assert store.chat_messages[0].text == GREETING
