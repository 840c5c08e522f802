"""Conversation store.

Owns the append-only message log and the pending input, and turns a
submitted question into one provider request.
"""

from collections.abc import Callable
from typing import Any

from ..llm import AnswerProvider
from .formatting import normalize_reply
from .models import Message, SessionEvent, SubmitStatus
from .recent import RecentQuestionsStore


class ConversationStore:
    """Message log plus pending input for a single chat.

    Hidden design decisions:
    - When the user message is appended relative to the network call
    - How provider replies are normalized for display
    - What a failed request leaves behind (the unanswered user turn stays)

    Overlapping submits are not serialized: each reply is appended when it
    arrives.
    """

    def __init__(
        self,
        provider: AnswerProvider,
        recent: RecentQuestionsStore | None = None,
        notify: Callable[[SessionEvent], None] | None = None,
    ) -> None:
        self._provider = provider
        self._recent = recent
        self._notify = notify
        self._messages: list[Message] = []
        self._pending_input = ""
        self._in_flight = 0
        self._last_error: Exception | None = None
        self._debug_callback: Any = None

    @property
    def messages(self) -> tuple[Message, ...]:
        """The transcript in insertion order."""
        return tuple(self._messages)

    @property
    def pending_input(self) -> str:
        return self._pending_input

    @pending_input.setter
    def pending_input(self, value: str) -> None:
        if value != self._pending_input:
            self._pending_input = value
            self._changed(SessionEvent.INPUT)

    @property
    def in_flight(self) -> int:
        """Number of provider requests still outstanding."""
        return self._in_flight

    @property
    def status(self) -> SubmitStatus:
        return SubmitStatus.AWAITING_REPLY if self._in_flight else SubmitStatus.IDLE

    @property
    def last_error(self) -> Exception | None:
        """The most recent provider failure, cleared by the next successful reply."""
        return self._last_error

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback: Callable(level, component, message)."""
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Session", message)

    def _changed(self, event: SessionEvent) -> None:
        if self._notify:
            self._notify(event)

    def _append(self, message: Message) -> None:
        self._messages.append(message)
        self._changed(SessionEvent.MESSAGES)

    async def submit(self, question: str | None = None) -> Message | None:
        """Submit a question and append the provider's reply.

        The user message is appended before the first await, so it is
        visible before any network round trip completes. The question is
        recorded in the recent list whether or not the provider succeeds.

        Args:
            question: Text to submit; defaults to the pending input

        Returns:
            The appended assistant message, or None for blank input or a
            failed request
        """
        text = self._pending_input if question is None else question
        if not text.strip():
            return None

        self._append(Message(role="user", text=text))
        self._in_flight += 1
        self._changed(SessionEvent.STATUS)

        try:
            if self._recent is not None:
                try:
                    await self._recent.record(text)
                except Exception as e:
                    self._debug("error", f"Failed to record recent question: {e}")

            preview = text[:50] + "..." if len(text) > 50 else text
            self._debug("info", f"Asking: '{preview}'")
            try:
                response = await self._provider.generate_content(text)
            except Exception as e:
                self._last_error = e
                self._debug("error", f"Error fetching answer: {type(e).__name__}: {e}")
                return None

            reply = normalize_reply(response.reply_text)
            if not reply.strip():
                self._debug("warning", "Provider returned an empty reply")

            answer = Message(role="assistant", text=reply)
            self._last_error = None
            self._append(answer)
            self.pending_input = ""
            return answer
        finally:
            self._in_flight -= 1
            self._changed(SessionEvent.STATUS)
