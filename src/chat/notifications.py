"""Notification and confirmation texts for each branch of a turn."""

from shared_types import NotificationKind, StressLevel
from wellness.models import NOTIFICATION_TTL_SECONDS, Notification


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _note(message: str, kind: NotificationKind, ttl: float) -> Notification:
    return Notification(message=message, kind=kind, ttl_seconds=ttl)


# --- habit management ---


def habits_added(names: list[str], ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(
        f"Added {len(names)} new habit{'' if len(names) == 1 else 's'} to your tracker: {', '.join(names)}",
        NotificationKind.SUCCESS,
        ttl,
    )


def habit_removed(name: str, ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(f'Removed "{name}" from your habit tracker', NotificationKind.SUCCESS, ttl)


def habit_updated(old_name: str, new_name: str, ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(f'Updated habit from "{old_name}" to "{new_name}"', NotificationKind.SUCCESS, ttl)


def added_reply(names: list[str]) -> str:
    bullets = "\n".join(f"• {name}" for name in names)
    return (
        f"✅ I've added {_plural(len(names), 'habit')} to your tracker:\n{bullets}\n\n"
        "These are now part of your daily wellness routine!"
    )


ALREADY_TRACKED_REPLY = "All the habits you mentioned are already in your tracker. Great job staying consistent!"


def removed_reply(name: str) -> str:
    return f'✅ I\'ve removed "{name}" from your habit tracker.'


def updated_reply(old_name: str, new_name: str) -> str:
    return f'✅ I\'ve updated your habit from "{old_name}" to "{new_name}". It starts a fresh streak today.'


def not_found_reply(name: str) -> str:
    return f'I couldn\'t find a habit matching "{name}" in your tracker. Could you check the exact name?'


def rename_conflict_reply(new_name: str, existing_name: str) -> str:
    return (
        f'You already track "{existing_name}", which matches "{new_name}", '
        "so I left your habits unchanged."
    )


# --- stress ---


def stress_relief_added(names: list[str], ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(
        f"I've added {len(names)} stress relief activities to your habit tracker "
        f"to help you manage your stress: {', '.join(names)}",
        NotificationKind.SUCCESS,
        ttl,
    )


def stress_relief_existing(count: int, ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(
        f"I suggested {count} stress relief activities, but they were already in your tracker",
        NotificationKind.INFO,
        ttl,
    )


def suggestions_failed(count: int, ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(
        f"I suggested {_plural(count, 'supportive habit')}, but there was an issue adding them to your tracker",
        NotificationKind.INFO,
        ttl,
    )


def relaxed(level: StressLevel, ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    feeling = "very relaxed" if level == StressLevel.VERY_LOW else "relaxed"
    return _note(
        f"Great to hear you're feeling {feeling}! Keep up the positive energy.",
        NotificationKind.SUCCESS,
        ttl,
    )


def moderate_stress(ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(
        "I notice you might be experiencing some stress. Remember to take care of yourself today.",
        NotificationKind.INFO,
        ttl,
    )


# --- exercises found in the reply ---


def exercises_added(names: list[str], ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(
        f"I've automatically added {_plural(len(names), 'exercise')} to your habit tracker: {', '.join(names)}",
        NotificationKind.SUCCESS,
        ttl,
    )


def exercises_existing(count: int, ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(
        f"I suggested {_plural(count, 'exercise')}, but they were already in your tracker",
        NotificationKind.INFO,
        ttl,
    )


def exercises_failed(count: int, ttl: float = NOTIFICATION_TTL_SECONDS) -> Notification:
    return _note(
        f"I suggested {_plural(count, 'exercise')}, but there was an issue adding them to your tracker",
        NotificationKind.INFO,
        ttl,
    )
