"""Recent-questions store.

Keeps a bounded, de-duplicated, most-recent-first list of submitted
questions and mirrors it to local storage under a single key. Every
mutation rewrites the whole serialized list.
"""

from collections.abc import Callable, Iterable
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..storage import LocalStorage
from .models import SessionEvent

RECENT_QUESTIONS_KEY = "recentSearches"
MAX_RECENT_QUESTIONS = 10

_QUESTIONS_ADAPTER = TypeAdapter(list[str])


def serialize_questions(questions: Iterable[str]) -> str:
    """Serialize questions to a JSON array string."""
    return _QUESTIONS_ADAPTER.dump_json(list(questions)).decode("utf-8")


def deserialize_questions(raw: str | None) -> list[str]:
    """Parse a JSON array of strings.

    Absent or empty content yields an empty list.

    Raises:
        ValidationError: If raw is not a JSON array of strings
    """
    if not raw or not raw.strip():
        return []
    return _QUESTIONS_ADAPTER.validate_json(raw)


class RecentQuestionsStore:
    """Most-recent-first history of asked questions, persisted on every mutation."""

    def __init__(
        self,
        storage: LocalStorage,
        key: str = RECENT_QUESTIONS_KEY,
        limit: int = MAX_RECENT_QUESTIONS,
        notify: Callable[[SessionEvent], None] | None = None,
    ) -> None:
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self._storage = storage
        self._key = key
        self._limit = limit
        self._notify = notify
        self._questions: list[str] = []
        self._debug_callback: Any = None

    @property
    def questions(self) -> tuple[str, ...]:
        """Current questions, newest first."""
        return tuple(self._questions)

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._questions)

    def __contains__(self, question: object) -> bool:
        return question in self._questions

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback: Callable(level, component, message)."""
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Recent", message)

    def _changed(self) -> None:
        if self._notify:
            self._notify(SessionEvent.RECENT)

    async def load(self) -> None:
        """Rehydrate the list from storage.

        Missing, empty or unreadable content leaves the list empty.
        """
        raw = await self._storage.get_item(self._key)
        try:
            questions = deserialize_questions(raw)
        except ValidationError as e:
            self._debug("warning", f"Ignoring unreadable '{self._key}' value: {e.error_count()} error(s)")
            questions = []

        # dict.fromkeys keeps first occurrence order
        questions = list(dict.fromkeys(q for q in questions if q.strip()))
        if len(questions) > self._limit:
            self._debug("warning", f"Truncating {len(questions)} stored questions to {self._limit}")
        self._questions = questions[:self._limit]
        self._debug("info", f"Loaded {len(self._questions)} recent question(s)")
        self._changed()

    async def record(self, question: str) -> None:
        """Prepend a question unless it is already present, then persist.

        Blank questions are ignored entirely. The in-memory list only
        changes once the storage write succeeds.
        """
        if not question.strip():
            return
        if question in self._questions:
            await self._persist(self._questions)
            return
        questions = [question, *self._questions][:self._limit]
        await self._persist(questions)
        self._questions = questions
        self._changed()

    async def clear(self) -> None:
        """Empty the list and persist the empty state."""
        await self._persist([])
        self._questions = []
        self._changed()

    def select(self, question: str) -> str:
        """Return the question to load into the input. Does not touch the list."""
        return question

    async def _persist(self, questions: list[str]) -> None:
        await self._storage.set_item(self._key, serialize_questions(questions))
        self._debug("debug", f"Persisted {len(questions)} recent question(s)")
