"""Data models for the chat session.

These models define the conversation transcript, auth identity and the
change notifications views subscribe to, independent of how they are shown.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]

DEFAULT_DISPLAY_NAME = "User"


class Message(BaseModel):
    """One turn of the conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who produced the message: 'user' or 'assistant'")
    text: str = Field(description="Message text, as displayed")
    timestamp: datetime = Field(default_factory=datetime.now)


class SubmitStatus(str, Enum):
    """Whether any provider request is outstanding."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class SessionEvent(str, Enum):
    """Kinds of state change a view can observe."""

    MESSAGES = "messages"
    RECENT = "recent"
    INPUT = "input"
    STATUS = "status"
    AUTH = "auth"


class AuthState(BaseModel):
    """Identity as reported by the auth collaborator.

    Treated as an opaque signed-in flag plus an optional display name.
    """

    model_config = ConfigDict(frozen=True)

    signed_in: bool = False
    display_name: str | None = None

    @property
    def greeting(self) -> str:
        if not self.signed_in:
            return "Please sign in to ask questions."
        return f"Welcome, {self.display_name or DEFAULT_DISPLAY_NAME}! Ask me anything."
