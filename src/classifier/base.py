"""Classifier strategy interface."""

from abc import ABC, abstractmethod

from errors import WellnessError

from .models import ClassificationResult, HabitIntent


class Classifier(ABC):
    """Decides stress level and habit intent for one user message.

    Implementations never raise on model or network trouble; they return a
    rule-based result and leave the reason in ``last_failure``.
    """

    name: str = "base"

    def __init__(self):
        self.last_failure: WellnessError | None = None

    @abstractmethod
    async def classify(self, text: str) -> ClassificationResult:
        """Stress level plus 0-5 suggested activities."""
        ...

    @abstractmethod
    async def classify_habit_intent(self, text: str) -> HabitIntent:
        """Add/remove/update/none with a confidence score."""
        ...
