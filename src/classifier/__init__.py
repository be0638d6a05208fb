"""Stress and habit-intent classification: rule-based and model-backed strategies."""

from .base import Classifier
from .extractor import extract_activities
from .factory import create_classifier
from .model import ModelBackedClassifier
from .models import ClassificationResult, HabitIntent
from .rules import RuleBasedClassifier, classify_fallback, classify_habit_intent_fallback

__all__ = [
    "Classifier",
    "ClassificationResult",
    "HabitIntent",
    "ModelBackedClassifier",
    "RuleBasedClassifier",
    "classify_fallback",
    "classify_habit_intent_fallback",
    "create_classifier",
    "extract_activities",
]
