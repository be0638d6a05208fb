"""Pull trackable activities out of bullet points in bot-authored prose."""

import re

from shared_types import ActivityCategory
from wellness.models import ActivitySuggestion

from .lexicons import CATEGORY_TABLE

_BULLET = re.compile(r"^\s*[•→\-*]\s*(.+)$")
_NUMBERED = re.compile(r"^\s*\d+[.)]\s*(.+)$")
_EMPHASIS = re.compile(r"\*+")
_NAMED = re.compile(r"^([^:]+?)\s*:")
_FIRST_CLAUSE = re.compile(r"[.!?]")

MIN_CLAUSE_LENGTH = 5
MAX_CLAUSE_LENGTH = 50
TRUNCATE_AT = 47

# Openers that mark conversational filler rather than an activity
_SKIP = re.compile(
    r"^(?:repeat this|try this|do this|which of these|you don't have|i'm sorry|that sounds|remember|"
    r"what|how|why|when|where|this|these|they|and|but|or|so|the|a|an|is|are|was|were|be|been|being|"
    r"have|has|had|do|does|did|will|would|could|should|may|might|can|cannot|"
    r"i|i'm|i've|i'd|i'll|you|you're|you've|your|it|it's|that|that's|there|here|thank|thanks|"
    r"if|please|let's|we|we're)\b",
    re.IGNORECASE,
)


def _item_text(line: str) -> str | None:
    match = _BULLET.match(line) or _NUMBERED.match(line)
    if not match:
        return None
    return _EMPHASIS.sub("", match.group(1)).strip()


def _activity_name(text: str) -> str:
    named = _NAMED.match(text)
    if named:
        return named.group(1).strip()
    clause = _FIRST_CLAUSE.split(text, maxsplit=1)[0].strip()
    if MIN_CLAUSE_LENGTH < len(clause) < MAX_CLAUSE_LENGTH:
        return clause
    return text[:TRUNCATE_AT] + "..." if len(text) > MAX_CLAUSE_LENGTH else text


def categorize(text: str) -> ActivityCategory:
    lowered = text.lower()
    for pattern, category in CATEGORY_TABLE:
        if pattern.search(lowered):
            return category
    return ActivityCategory.HEALTH


def extract_activities(free_text: str) -> list[ActivitySuggestion]:
    """One suggestion per qualifying bullet or numbered line, in order.

    No upper bound is applied; callers cap the list.
    """
    activities = []
    for line in free_text.splitlines():
        text = _item_text(line)
        if not text:
            continue
        name = _activity_name(text)
        if not 3 < len(name) < 80:
            continue
        if _SKIP.match(name):
            continue
        activities.append(ActivitySuggestion(name, categorize(text)))
    return activities
