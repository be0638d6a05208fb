"""Conversation turns: orchestration, reply generation and notifications."""

from .models import Banner, TurnResult
from .orchestrator import ConversationOrchestrator
from .replies import CannedReplyPool, ModelReplyGenerator, ReplyGenerator

__all__ = [
    "Banner",
    "CannedReplyPool",
    "ConversationOrchestrator",
    "ModelReplyGenerator",
    "ReplyGenerator",
    "TurnResult",
]
