"""Session state for quickask.

Module structure:
- models.py: Message, auth state and change events
- formatting.py: Reply normalization
- recent.py: Recent-questions list and its persistence
- conversation.py: Message log, pending input and submit
- state.py: ChatSession, the object every view observes
"""

from .conversation import ConversationStore
from .formatting import normalize_reply
from .models import AuthState, Message, Role, SessionEvent, SubmitStatus
from .recent import (
    MAX_RECENT_QUESTIONS,
    RECENT_QUESTIONS_KEY,
    RecentQuestionsStore,
    deserialize_questions,
    serialize_questions,
)
from .state import ChatSession, SessionListener

__all__ = [
    "AuthState",
    "ChatSession",
    "ConversationStore",
    "MAX_RECENT_QUESTIONS",
    "Message",
    "RECENT_QUESTIONS_KEY",
    "RecentQuestionsStore",
    "Role",
    "SessionEvent",
    "SessionListener",
    "SubmitStatus",
    "deserialize_questions",
    "normalize_reply",
    "serialize_questions",
]
