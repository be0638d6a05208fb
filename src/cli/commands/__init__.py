"""CLI command modules."""

from .chat import chat, say
from .classify import classify
from .habits import habits
from .stress import stress

__all__ = [
    "chat",
    "say",
    "classify",
    "habits",
    "stress",
]
