"""Conversation orchestrator: one user message in, one reply out.

A turn moves Idle -> Classifying -> Applying -> Replying -> Idle. Turns are
serialized with a lock so dedup-guarded inserts never interleave.
"""

import asyncio

import structlog

from classifier.base import Classifier
from classifier.extractor import extract_activities
from classifier.models import DEFAULT_CONFIDENCE_THRESHOLD, MAX_ACTIVITIES, ClassificationResult, HabitIntent
from classifier.prompts import GENERIC_ERROR_REPLY, HABIT_ERROR_REPLY, REDIRECT_REPLY, SAFETY_PREFACE
from classifier.rules import (
    STRESS_RELIEF_ACTIVITIES,
    has_affect_signal,
    is_crisis,
    is_exercise_request,
    is_off_topic,
    off_topic_category,
)
from errors import ApplicationError, ConfigurationError, TransientServiceError, WellnessError
from observability import Metrics, metrics
from shared_types import BannerKind, HabitAction, Sender, StressLevel, TurnBranch, TurnState
from wellness.models import NOTIFICATION_TTL_SECONDS, ActivitySuggestion, ChatMessage, Notification
from wellness.store import WellnessStore

from . import notifications as notes
from .models import Banner, TurnResult
from .replies import CannedReplyPool, ReplyGenerator

logger = structlog.get_logger()

STRESS_NOTE = "Auto-detected from chat"


class ConversationOrchestrator:
    """Routes each message to the off-topic, habit-management or wellbeing branch."""

    def __init__(
        self,
        store: WellnessStore,
        classifier: Classifier,
        reply_generator: ReplyGenerator,
        canned: CannedReplyPool | None = None,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        max_activities: int = MAX_ACTIVITIES,
        off_topic_filter: bool = True,
        notification_ttl: float = NOTIFICATION_TTL_SECONDS,
        collector: Metrics | None = None,
    ):
        self.store = store
        self.classifier = classifier
        self.reply_generator = reply_generator
        self.canned = canned or CannedReplyPool()
        self.confidence_threshold = confidence_threshold
        self.max_activities = max_activities
        self.off_topic_filter = off_topic_filter
        self.notification_ttl = notification_ttl
        self.metrics = collector or metrics
        self.state = TurnState.IDLE
        self.banner: Banner | None = None
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """True while a turn is in flight; callers should hold new input."""
        return self._lock.locked()

    def dismiss_banner(self) -> None:
        if self.banner and self.banner.dismissible:
            self.banner = None

    async def handle_message(self, text: str) -> TurnResult:
        """Run one full turn. Always ends with a bot reply appended to history."""
        text = text.strip()
        if not text:
            raise ValueError("Message must not be empty")

        async with self._lock:
            try:
                with self.metrics.timer("turn"):
                    result = await self._run_turn(text)
            finally:
                self.state = TurnState.IDLE

        self.metrics.counter(f"turn.{result.branch}")
        logger.info(
            "turn_completed",
            branch=str(result.branch),
            stress_recorded=result.stress_recorded,
            notifications=len(result.notifications),
            crisis=result.crisis,
            banner=str(result.banner.kind) if result.banner else None,
        )
        return result

    async def _run_turn(self, text: str) -> TurnResult:
        prior = self.store.chat_messages
        self.store.add_chat_message(ChatMessage(text=text, sender=Sender.USER))
        failures: list[WellnessError] = []
        snapshot = self.store.snapshot()

        if self.off_topic_filter and is_off_topic(text):
            logger.info("turn_off_topic", category=off_topic_category(text))
            result = TurnResult(reply=REDIRECT_REPLY, branch=TurnBranch.OFF_TOPIC)
            service_called = False
        else:
            service_called = True
            result = await self._classified_turn(text, prior, failures, snapshot)

        if is_crisis(text):
            logger.warning("crisis_language_detected", branch=str(result.branch))
            result.reply = SAFETY_PREFACE + result.reply
            result.crisis = True

        result.banner = self._update_banner(failures, service_called)
        self.store.record_notifications(result.notifications)
        self.store.add_chat_message(ChatMessage(text=result.reply, sender=Sender.BOT))
        return result

    async def _classified_turn(
        self,
        text: str,
        prior: list[ChatMessage],
        failures: list[WellnessError],
        snapshot: dict,
    ) -> TurnResult:
        self.state = TurnState.CLASSIFYING
        intent = await self.classifier.classify_habit_intent(text)
        self._collect_failure(failures)

        branch = TurnBranch.WELLBEING
        try:
            if intent.is_actionable(self.confidence_threshold):
                branch = TurnBranch.HABIT_MANAGEMENT
                return self._habit_turn(intent)
            return await self._wellbeing_turn(text, prior, intent, failures)
        except ApplicationError as e:
            self.store.restore(snapshot)
            logger.error("turn_rolled_back", branch=str(branch), error=str(e))
            reply = HABIT_ERROR_REPLY if branch == TurnBranch.HABIT_MANAGEMENT else GENERIC_ERROR_REPLY
            return TurnResult(reply=reply, branch=TurnBranch.ERROR, intent=intent)

    def _collect_failure(self, failures: list[WellnessError]) -> None:
        if self.classifier.last_failure is not None:
            failures.append(self.classifier.last_failure)

    # --- habit management ---

    def _habit_turn(self, intent: HabitIntent) -> TurnResult:
        self.state = TurnState.APPLYING
        try:
            if intent.action == HabitAction.ADD:
                reply, emitted = self._add_habits(intent)
            elif intent.action == HabitAction.REMOVE:
                reply, emitted = self._remove_habit(intent)
            else:
                reply, emitted = self._update_habit(intent)
        except Exception as e:
            raise ApplicationError(f"Failed to apply {intent.action} intent: {e}") from e

        logger.info("habit_intent_applied", action=str(intent.action), confidence=intent.confidence)
        return TurnResult(
            reply=reply,
            branch=TurnBranch.HABIT_MANAGEMENT,
            notifications=emitted,
            intent=intent,
        )

    def _add_habits(self, intent: HabitIntent) -> tuple[str, list[Notification]]:
        added = self.store.add_habits_dedup(intent.habits)
        if not added:
            return notes.ALREADY_TRACKED_REPLY, []
        return notes.added_reply(added), [notes.habits_added(added, self.notification_ttl)]

    def _remove_habit(self, intent: HabitIntent) -> tuple[str, list[Notification]]:
        habit = self.store.find_habit_by_fuzzy_name(intent.target_name)
        if not habit:
            return notes.not_found_reply(intent.target_name), []
        self.store.delete_habit(habit.id)
        return notes.removed_reply(habit.name), [notes.habit_removed(habit.name, self.notification_ttl)]

    def _update_habit(self, intent: HabitIntent) -> tuple[str, list[Notification]]:
        habit = self.store.find_habit_by_fuzzy_name(intent.old_name)
        if not habit:
            return notes.not_found_reply(intent.old_name), []

        conflict = self.store.find_similar(intent.new_name, exclude_id=habit.id)
        if conflict:
            return notes.rename_conflict_reply(intent.new_name, conflict.name), []

        # Renaming starts a fresh habit; streak and completions are not carried over
        self.store.delete_habit(habit.id)
        self.store.add_habit(intent.new_name, intent.category or habit.category)
        return (
            notes.updated_reply(habit.name, intent.new_name),
            [notes.habit_updated(habit.name, intent.new_name, self.notification_ttl)],
        )

    # --- wellbeing ---

    async def _wellbeing_turn(
        self,
        text: str,
        prior: list[ChatMessage],
        intent: HabitIntent,
        failures: list[WellnessError],
    ) -> TurnResult:
        classification = await self.classifier.classify(text)
        self._collect_failure(failures)

        self.state = TurnState.APPLYING
        emitted = self._apply_stress(text, classification)
        recorded = emitted is not None
        emitted = emitted or []

        self.state = TurnState.REPLYING
        reply, generated = await self._generate_reply(prior, text, failures)

        suggestions = extract_activities(reply)[: self.max_activities] if generated else []
        if not suggestions and is_exercise_request(text):
            suggestions = list(STRESS_RELIEF_ACTIVITIES)
        if suggestions:
            self.state = TurnState.APPLYING
            emitted.append(
                self._insert_suggestions(
                    suggestions,
                    notes.exercises_added,
                    notes.exercises_existing,
                    notes.exercises_failed,
                )
            )

        return TurnResult(
            reply=reply,
            branch=TurnBranch.WELLBEING,
            notifications=emitted,
            intent=intent,
            classification=classification,
            stress_recorded=recorded,
        )

    def _apply_stress(self, text: str, classification: ClassificationResult) -> list[Notification] | None:
        """Record the stress level unless it is a bare moderate default.

        A moderate result counts only when the text carries an affect word.
        Returns the notifications raised, or None when nothing was recorded.
        """
        level = classification.stress_level
        if level == StressLevel.MODERATE and not has_affect_signal(text):
            logger.debug("stress_not_recorded", reason="no_affect_signal")
            return None

        try:
            self.store.record_stress_entry(level, STRESS_NOTE)
        except Exception as e:
            raise ApplicationError(f"Failed to record stress entry: {e}") from e

        if level.is_elevated:
            activities = list(classification.activities) or list(STRESS_RELIEF_ACTIVITIES)
            return [
                self._insert_suggestions(
                    activities,
                    notes.stress_relief_added,
                    notes.stress_relief_existing,
                    notes.suggestions_failed,
                )
            ]
        if level.is_relaxed:
            return [notes.relaxed(level, self.notification_ttl)]
        return [notes.moderate_stress(self.notification_ttl)]

    def _insert_suggestions(self, items: list[ActivitySuggestion], added_note, existing_note, failed_note) -> Notification:
        """Dedup-guarded insert of all items, or none of them."""
        snapshot = self.store.snapshot()
        try:
            added = self.store.add_habits_dedup(items)
        except Exception as e:
            self.store.restore(snapshot)
            logger.warning("suggestion_insert_failed", count=len(items), error=str(e))
            return failed_note(len(items), self.notification_ttl)
        if added:
            return added_note(added, self.notification_ttl)
        return existing_note(len(items), self.notification_ttl)

    async def _generate_reply(
        self,
        prior: list[ChatMessage],
        text: str,
        failures: list[WellnessError],
    ) -> tuple[str, bool]:
        """Model reply, or a canned one on failure. Second value: was it generated."""
        try:
            return await self.reply_generator.generate(prior, text), True
        except WellnessError as e:
            failures.append(e)
            reason = type(e).__name__
        except Exception as e:
            logger.exception("reply_generator_crashed")
            failures.append(TransientServiceError(str(e)))
            reason = "unexpected"
        self.metrics.fallback("reply", reason)
        logger.warning("reply_fallback", reason=reason)
        return self.canned.pick(), False

    # --- banner ---

    def _update_banner(self, failures: list[WellnessError], service_called: bool) -> Banner | None:
        if any(isinstance(f, ConfigurationError) for f in failures):
            self.banner = Banner.configuration()
        elif any(isinstance(f, TransientServiceError) for f in failures):
            if not self.banner or self.banner.kind != BannerKind.CONFIGURATION:
                self.banner = Banner.fallback()
        elif service_called:
            self.dismiss_banner()
        return self.banner
