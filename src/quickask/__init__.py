"""
quickask: A terminal chat client for text-generation APIs.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .llm import AnswerProvider, create_answer_provider
from .session import AuthState, ChatSession, Message, SessionEvent, normalize_reply
from .storage import LocalStorage, create_local_storage

__all__ = [
    "AnswerProvider",
    "AuthState",
    "ChatSession",
    "LocalStorage",
    "Message",
    "SessionEvent",
    "create_answer_provider",
    "create_local_storage",
    "normalize_reply",
]
