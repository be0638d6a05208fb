"""Fuzzy habit-name matching used to keep the habit list free of duplicates.

Three stages, checked in order, first hit wins:

1. exact match after lower-casing and trimming
2. both names open with a phrase from the same synonym group
   ("Morning Meditation" / "daily meditating")
3. token overlap: share of long tokens that contain or are contained in a
   token of the other name, over the longer token list
"""

import re

DEFAULT_OVERLAP_THRESHOLD = 0.7
MIN_TOKEN_LENGTH = 3

# Optional run of qualifiers that may precede a group stem
_LEADING = (
    r"^(?:(?:daily|morning|evening|night|nightly|weekly|quick|short|long|gentle|"
    r"mindful|slow|deep|regular|\d+[- ]?(?:min|mins|minute|minutes))\s+)*"
)

SYNONYM_GROUPS: list[tuple[str, re.Pattern]] = [
    ("reading", re.compile(_LEADING + r"(?:read(?:s|ing)?\b(?:\s+(?:a\s+)?books?)?|books?\b)")),
    ("walking", re.compile(_LEADING + r"walk(?:s|ing)?\b")),
    ("meditation", re.compile(_LEADING + r"meditat(?:e|es|ion|ions|ing)\b")),
    ("journaling", re.compile(_LEADING + r"journal(?:s|ing|ling)?\b")),
    ("breathing", re.compile(_LEADING + r"breath(?:e|s|ing)?\b")),
    ("hydration", re.compile(_LEADING + r"(?:hydrat(?:e|ion|ing)\b|drink(?:ing)?\s+(?:more\s+)?water\b)")),
    ("exercise", re.compile(_LEADING + r"(?:exercis(?:e|es|ing)|workouts?)\b")),
    ("learning", re.compile(_LEADING + r"learn(?:s|ing)?\b")),
]


def _normalize(name: str) -> str:
    return name.lower().strip()


def synonym_group(name: str) -> str | None:
    """Return the first synonym group whose pattern matches ``name``."""
    normalized = _normalize(name)
    for label, pattern in SYNONYM_GROUPS:
        if pattern.search(normalized):
            return label
    return None


def _same_group(a: str, b: str) -> bool:
    for _, pattern in SYNONYM_GROUPS:
        if pattern.search(a) and pattern.search(b):
            return True
    return False


def _tokens(name: str) -> list[str]:
    return [w for w in name.split() if len(w) >= MIN_TOKEN_LENGTH]


def name_tokens(name: str) -> list[str]:
    """Lower-cased words of ``name`` long enough to compare."""
    return _tokens(_normalize(name))


def token_overlap(a: str, b: str) -> float:
    """Overlap ratio of the tokens of ``a`` against ``b`` (0.0 when either is empty)."""
    a_tokens = _tokens(_normalize(a))
    b_tokens = _tokens(_normalize(b))
    if not a_tokens or not b_tokens:
        return 0.0
    common = [w for w in a_tokens if any(o in w or w in o for o in b_tokens)]
    return len(common) / max(len(a_tokens), len(b_tokens))


def is_same_habit(a: str, b: str, overlap_threshold: float = DEFAULT_OVERLAP_THRESHOLD) -> bool:
    """True when two habit names describe the same habit."""
    na, nb = _normalize(a), _normalize(b)
    if na == nb:
        return True
    if _same_group(na, nb):
        return True
    return token_overlap(na, nb) > overlap_threshold
