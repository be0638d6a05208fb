"""Tests for activity extraction from bot replies."""

import pytest

from classifier import extract_activities
from classifier.extractor import categorize
from shared_types import ActivityCategory


def test_two_bullets():
    activities = extract_activities("• Deep breathing: inhale 4, hold 4\n• Go for a walk")
    assert [a.title for a in activities] == ["Deep breathing", "Go for a walk"]
    assert [a.category for a in activities] == [ActivityCategory.MINDFULNESS, ActivityCategory.EXERCISE]


def test_numbered_and_arrow_markers():
    text = "Here are some ideas:\n1. Write three things you're grateful for\n2) Read a chapter tonight\n→ Drink a glass of water"
    activities = extract_activities(text)
    assert [a.title for a in activities] == [
        "Write three things you're grateful for",
        "Read a chapter tonight",
        "Drink a glass of water",
    ]
    assert [a.category for a in activities] == [
        ActivityCategory.REFLECTION,
        ActivityCategory.LEARNING,
        ActivityCategory.HEALTH,
    ]


def test_prose_lines_ignored():
    assert extract_activities("I hear you. That sounds hard.\nTake care.") == []


def test_emphasis_stripped():
    activities = extract_activities("- **Box breathing**: 4 counts each side")
    assert activities[0].title == "Box breathing"


def test_first_sentence_used_when_no_colon():
    activities = extract_activities("* Stretching for ten minutes. It loosens tight shoulders and helps you reset.")
    assert activities[0].title == "Stretching for ten minutes"
    assert activities[0].category == ActivityCategory.EXERCISE


def test_long_line_truncated():
    line = "- " + "Spend some quiet time outdoors noticing sounds around you and the sky above"
    activities = extract_activities(line)
    assert activities[0].title.endswith("...")
    assert len(activities[0].title) == 50


@pytest.mark.parametrize(
    "line",
    [
        "• Try this: breathe slowly",
        "• Repeat this a few times",
        "• You can do this",
        "• What feels right today?",
        "• and",
    ],
)
def test_filler_skipped(line):
    assert extract_activities(line) == []


def test_no_upper_bound():
    text = "\n".join(f"- Walk around the block {i} times" for i in range(8))
    assert len(extract_activities(text)) == 8


@pytest.mark.parametrize(
    "text,category",
    [
        ("Yoga and breathing", ActivityCategory.MINDFULNESS),
        ("Yoga flow", ActivityCategory.EXERCISE),
        ("Gratitude list", ActivityCategory.REFLECTION),
        ("Learn a new skill", ActivityCategory.LEARNING),
        ("Go to bed early", ActivityCategory.HEALTH),
    ],
)
def test_category_precedence(text, category):
    assert categorize(text) == category
