"""Static keyword tables used by the rule-based classifier and the extractor.

Every table is an ordered list of ``(pattern, label)`` pairs. Order matters:
the first matching row wins wherever a single label is chosen.
"""

import re

from shared_types import ActivityCategory, StressLevel
from wellness.models import ActivitySuggestion


def _stems(*words: str) -> re.Pattern:
    """Words anchored at a word start; inflected endings still match."""
    return re.compile(r"\b(?:" + "|".join(words) + ")")


def _whole(*words: str) -> re.Pattern:
    """Whole words or phrases, with an optional plural ``s``."""
    return re.compile(r"\b(?:" + "|".join(words) + r")s?\b")


# --- affect ---

POSITIVE = _stems("great", "awesome", "fantastic", "amazing", "grateful", "happy", "joyful", "calm", "relaxed", "peaceful")
MILD_POSITIVE = _stems("good", "fine", "better", "optimistic", "content", "satisfied")
NEGATIVE = _stems("stressed", "anxious", "worried", "tense", "overwhelmed", "frustrated")
SEVERE = _stems("awful", "terrible", "horrible", "depressed", r"can[’']?t cope", "panic", "extreme")

# Checked in this order. The NEGATIVE row is held to MODERATE unless the text
# also names an explicit cause.
AFFECT_TABLE: list[tuple[re.Pattern, StressLevel]] = [
    (POSITIVE, StressLevel.VERY_LOW),
    (MILD_POSITIVE, StressLevel.LOW),
    (NEGATIVE, StressLevel.HIGH),
    (SEVERE, StressLevel.VERY_HIGH),
]

# --- explicit stress causes ---

CAUSE_TABLE: list[tuple[re.Pattern, str]] = [
    (_stems("work", "job", "deadline", "meeting", "project", "boss", "colleague"), "work"),
    (_stems("relationship", "partner", "family", "friend"), "relationships"),
    (_stems("health", "medical", "doctor", "hospital"), "health"),
    (_stems("finances", "money", "bill", "debt", "rent", "mortgage"), "finances"),
    (_stems("school", "exam", "test", "assignment", "homework"), "school"),
    (_stems("traffic", "commute", "weather", "noise", "crowd", "social", "party", "event"), "environment"),
]

# --- crisis / self-harm ---

CRISIS = re.compile(r"\b(?:suicid(?:e|al)|kill myself|end it|can[’']?t go on|self[- ]?harm|hurt myself)\b")

# --- off-topic ---

# Words that double as stress causes or learning habits ("money", "study",
# "research") are left out so wellbeing messages about them stay on topic.
OFF_TOPIC_TABLE: list[tuple[re.Pattern, str]] = [
    (
        _whole(
            "code", "coding", "programming", "software", "app", "website", "ui", "ux", "design",
            "frontend", "backend", "database", "api", "javascript", "python", "react", "node",
            "html", "css", "git", "github", "deployment", "server",
        ),
        "technology",
    ),
    (
        _whole(
            "news", "politics", "election", "president", "government", "congress", "senate",
            "vote", "campaign", "republican", "democrat", "world news", "breaking news",
            "current events", "international", "foreign policy",
        ),
        "politics",
    ),
    (
        _whole(
            "stock", "stock market", "investment", "finance", "banking", "economy", "business",
            "company", "startup", "entrepreneur", "cryptocurrency", "bitcoin", "trading",
            "portfolio", "retirement", "insurance",
        ),
        "finance",
    ),
    (
        _whole(
            "sports", "football", "basketball", "baseball", "soccer", "tennis", "golf",
            "olympics", "championship", "tournament", "movie", "film", "actor", "actress",
            "celebrity", "celebrities", "music", "song", "album", "concert", "tv show", "television",
        ),
        "entertainment",
    ),
    (
        _whole(
            "car", "vehicle", "automobile", "truck", "motorcycle", "bicycle", "public transport",
            "subway", "bus", "train", "airplane", "flight", "travel", "vacation", "trip", "destination",
        ),
        "transport",
    ),
    (
        _whole(
            "math", "mathematics", "science", "physics", "chemistry", "biology", "history",
            "geography", "literature", "philosophy", "art", "architecture", "engineering",
            "law", "education",
        ),
        "academic",
    ),
    (
        _whole(
            "dating", "relationship advice", "marriage", "wedding", "parenting", "childcare",
            "cooking", "recipe", "fashion", "clothing", "shopping", "home improvement",
            "gardening", "pet", "animal",
        ),
        "personal",
    ),
]

# --- activity categories (extractor), first match wins, HEALTH is the default ---

CATEGORY_TABLE: list[tuple[re.Pattern, ActivityCategory]] = [
    (
        re.compile(
            r"breathing|meditation|mindfulness|calm|relax|breathe|inhale|exhale|box breathing|"
            r"4-7-8|progressive muscle|focus|centering|grounding"
        ),
        ActivityCategory.MINDFULNESS,
    ),
    (
        re.compile(
            r"walk|run|exercise|workout|gym|sport|stretching|yoga|pose|movement|physical|dance|"
            r"swim|bike|jog|hike"
        ),
        ActivityCategory.EXERCISE,
    ),
    (
        re.compile(r"journal|reflect|gratitude|writing|write|think about|consider|contemplate|meditate on|express"),
        ActivityCategory.REFLECTION,
    ),
    (
        re.compile(r"learn|read|study|class|course|skill|research|explore|discover|try new|experiment"),
        ActivityCategory.LEARNING,
    ),
    (
        re.compile(r"sleep|eat|drink|water|nutrition|health|bedtime|routine|self-care|rest|recharge|nourish|music|listen"),
        ActivityCategory.HEALTH,
    ),
]

# --- habit intent ---

ADD_INTENT = re.compile(
    r"(?:want|need|start|begin|add|create|make)\s+(?:to\s+)?(?:a\s+)?(?:new\s+)?(?:[a-z-]+\s+)?(?:habit|routine|practice)"
)

# One canned habit per matched domain, in this order
HABIT_DOMAIN_TABLE: list[tuple[re.Pattern, ActivitySuggestion]] = [
    (re.compile(r"meditation|meditate|mindfulness"), ActivitySuggestion("Daily meditation", ActivityCategory.MINDFULNESS)),
    (re.compile(r"walk|exercise|workout|gym"), ActivitySuggestion("Daily exercise", ActivityCategory.EXERCISE)),
    (re.compile(r"journal|write|reflect"), ActivitySuggestion("Daily journaling", ActivityCategory.REFLECTION)),
    (re.compile(r"read|learn|study"), ActivitySuggestion("Daily reading", ActivityCategory.LEARNING)),
    (re.compile(r"sleep|eat|drink|water"), ActivitySuggestion("Healthy habits", ActivityCategory.HEALTH)),
]

# "stop"/"quit" only count as removal when aimed at a habit, so
# "I can't stop worrying" is not read as a request to delete something.
# Removal needs a habit noun around the target; a bare "drop out of school"
# or "drop it" is conversation, not a command. Group 1 is the target.
REMOVE_PATTERNS: list[re.Pattern] = [
    # "remove the habit of X", "quit my habit of X"
    re.compile(
        r"\b(?:remove|delete|drop|stop|quit)\s+(?:the|my)\s+(?:habit|routine)\s+(?:of\s+)?(.+)",
        re.IGNORECASE,
    ),
    # "remove X from my habits"
    re.compile(
        r"\b(?:remove|delete|drop)\s+(?:the\s+|my\s+)?(.+?)\s+(?:from|off)\s+(?:my|the)\s+"
        r"(?:habits?|list|tracker|habit tracker|routine)\b",
        re.IGNORECASE,
    ),
    # "drop my reading habit"
    re.compile(
        r"\b(?:remove|delete|drop)\s+(?:the\s+|my\s+)?(.+?)\s+habit\s*[.!?]*$",
        re.IGNORECASE,
    ),
]

UPDATE_INTENT = re.compile(
    r"\b(?:change|modify|update|edit)\s+(?:the\s+)?(?:habit\s+)?(?:of\s+)?(.+?)\s+(?:to|into)\s+(.+)",
    re.IGNORECASE,
)

# Trailing "from my habits" style phrases dropped from captured names
TARGET_SUFFIX = re.compile(
    r"\s+(?:from|in|on|off)\s+(?:my|the)\s+(?:habits?|list|tracker|habit tracker|routine)\s*$",
    re.IGNORECASE,
)

# --- explicit exercise request: request phrase AND exercise vocabulary ---

REQUEST_PHRASE = re.compile(
    r"\b(?:give me|need|want|looking for|suggest|recommend|provide|show me|tell me|what are|how to)\b"
)
EXERCISE_VOCABULARY = re.compile(r"\b(?:exercises?|workouts?|activit(?:y|ies)|routines?|practices?|stretch(?:es|ing)?)\b")
