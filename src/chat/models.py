"""Turn results and banner state returned to the caller."""

from dataclasses import dataclass, field

from classifier.models import ClassificationResult, HabitIntent
from shared_types import BannerKind, TurnBranch
from wellness.models import Notification

MISSING_KEY_BANNER = (
    "Live AI is disabled because no API key is configured. "
    "Set GOOGLE_API_KEY, ANTHROPIC_API_KEY or OPENAI_API_KEY (or llm.api_key in config.yaml) and restart."
)
FALLBACK_BANNER = "Using supportive fallback responses due to a connection issue. Retrying on your next message."


@dataclass(frozen=True)
class Banner:
    kind: BannerKind
    message: str
    dismissible: bool

    @classmethod
    def configuration(cls) -> "Banner":
        return cls(BannerKind.CONFIGURATION, MISSING_KEY_BANNER, dismissible=False)

    @classmethod
    def fallback(cls) -> "Banner":
        return cls(BannerKind.FALLBACK, FALLBACK_BANNER, dismissible=True)


@dataclass
class TurnResult:
    reply: str
    branch: TurnBranch
    notifications: list[Notification] = field(default_factory=list)
    banner: Banner | None = None
    intent: HabitIntent | None = None
    classification: ClassificationResult | None = None
    stress_recorded: bool = False
    crisis: bool = False
