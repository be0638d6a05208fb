"""Data models for habits, stress history, chat messages and notifications."""

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta

from shared_types import ActivityCategory, NotificationKind, Sender, StressLevel

MAX_TITLE_LENGTH = 100
NOTIFICATION_TTL_SECONDS = 5


def new_id() -> str:
    return uuid.uuid4().hex[:16]


@dataclass(frozen=True)
class ActivitySuggestion:
    """A candidate habit produced by classification or extraction."""

    title: str
    category: ActivityCategory = ActivityCategory.HEALTH

    def __post_init__(self):
        title = self.title.strip()
        if not title:
            raise ValueError("Activity title must not be empty")
        object.__setattr__(self, "title", title[:MAX_TITLE_LENGTH])
        object.__setattr__(self, "category", ActivityCategory(self.category))


@dataclass
class HabitRecord:
    id: str
    name: str
    category: ActivityCategory = ActivityCategory.HEALTH
    completed: bool = False
    streak: int = 0
    daily_completions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = str(self.category)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "HabitRecord":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category=ActivityCategory(data.get("category", "health")),
            completed=bool(data.get("completed", False)),
            streak=int(data.get("streak", 0)),
            daily_completions=list(data.get("daily_completions", [])),
        )


@dataclass
class StressEntry:
    date: str  # ISO timestamp
    stress_level: StressLevel
    note: str | None = None

    def to_dict(self) -> dict:
        return {"date": self.date, "stress_level": str(self.stress_level), "note": self.note}

    @classmethod
    def from_dict(cls, data: dict) -> "StressEntry":
        return cls(
            date=data["date"],
            stress_level=StressLevel(data["stress_level"]),
            note=data.get("note"),
        )


@dataclass
class ChatMessage:
    text: str
    sender: Sender
    id: str = field(default_factory=new_id)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text, "sender": str(self.sender), "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        return cls(
            text=data["text"],
            sender=Sender(data["sender"]),
            id=data.get("id") or new_id(),
            timestamp=data.get("timestamp") or datetime.now().isoformat(),
        )


@dataclass
class Notification:
    """Transient UI notice. Expires ``ttl_seconds`` after creation."""

    message: str
    kind: NotificationKind = NotificationKind.INFO
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=datetime.now)
    ttl_seconds: float = NOTIFICATION_TTL_SECONDS

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(seconds=self.ttl_seconds)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now()) >= self.expires_at

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "message": self.message,
            "kind": str(self.kind),
            "created_at": self.created_at.isoformat(),
        }
