"""Explicit session state shared by every view.

A ChatSession owns the conversation, the recent-questions list and the auth
state. Views read from it, call its mutation entry points and subscribe to
SessionEvent notifications instead of sharing ambient variables.
"""

from collections.abc import Callable
from typing import Any

from ..llm import AnswerProvider
from ..storage import LocalStorage
from .conversation import ConversationStore
from .models import AuthState, Message, SessionEvent, SubmitStatus
from .recent import MAX_RECENT_QUESTIONS, RecentQuestionsStore

SessionListener = Callable[[SessionEvent], None]


class ChatSession:
    """Session state for one chat client.

    Usage:
        async with ChatSession(provider, storage) as session:
            session.subscribe(on_change)
            await session.submit("capital of France")
    """

    def __init__(
        self,
        provider: AnswerProvider,
        storage: LocalStorage,
        auth: AuthState | None = None,
        recent_limit: int = MAX_RECENT_QUESTIONS,
    ) -> None:
        self._provider = provider
        self._storage = storage
        self._auth = auth or AuthState()
        self._listeners: list[SessionListener] = []
        self.recent = RecentQuestionsStore(storage, limit=recent_limit, notify=self._emit)
        self.conversation = ConversationStore(provider, recent=self.recent, notify=self._emit)

    # Lifecycle

    async def start(self) -> None:
        """Connect storage and rehydrate the recent-questions list."""
        await self._storage.connect()
        await self.recent.load()

    async def close(self) -> None:
        """Release storage and provider resources."""
        try:
            await self._storage.disconnect()
        finally:
            await self._provider.close()

    async def __aenter__(self) -> "ChatSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def storage_backend(self) -> str:
        return self._storage.backend_type

    # Observation

    def subscribe(self, listener: SessionListener) -> None:
        """Register a listener called with the SessionEvent after each change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def set_debug_callback(self, callback: Any) -> None:
        """Route debug output of every component to one callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self.conversation.set_debug_callback(callback)
        self.recent.set_debug_callback(callback)
        self._provider.set_debug_callback(callback)

    # Conversation

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.conversation.messages

    @property
    def pending_input(self) -> str:
        return self.conversation.pending_input

    @pending_input.setter
    def pending_input(self, value: str) -> None:
        self.conversation.pending_input = value

    @property
    def status(self) -> SubmitStatus:
        return self.conversation.status

    @property
    def last_error(self) -> Exception | None:
        return self.conversation.last_error

    async def submit(self, question: str | None = None) -> Message | None:
        """Submit a question (defaults to the pending input)."""
        return await self.conversation.submit(question)

    # Recent questions

    @property
    def recent_questions(self) -> tuple[str, ...]:
        return self.recent.questions

    async def record(self, question: str) -> None:
        await self.recent.record(question)

    async def clear_recent(self) -> None:
        await self.recent.clear()

    def select_recent(self, question: str) -> str:
        """Load a previously asked question into the pending input."""
        selected = self.recent.select(question)
        self.pending_input = selected
        return selected

    # Auth

    @property
    def auth(self) -> AuthState:
        return self._auth

    @property
    def greeting(self) -> str:
        return self._auth.greeting

    def sign_in(self, display_name: str | None = None) -> None:
        name = display_name.strip() if display_name else None
        self._auth = AuthState(signed_in=True, display_name=name or None)
        self._emit(SessionEvent.AUTH)

    def sign_out(self) -> None:
        self._auth = AuthState()
        self._emit(SessionEvent.AUTH)
