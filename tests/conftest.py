"""Pytest configuration and shared fixtures."""
import asyncio
import os

import pytest

from quickask.llm import AnswerProvider, GenerateContentResponse
from quickask.session import AuthState, ChatSession
from quickask.storage import InMemoryLocalStorage


class FakeProvider(AnswerProvider):
    """Answer provider returning canned replies without any network access.

    - replies: question -> raw reply text (default: "Answer: <question>")
    - gates: question -> Event the request waits on before answering
    - error: exception raised instead of answering
    """

    def __init__(self, replies: dict[str, str] | None = None) -> None:
        self.replies = dict(replies or {})
        self.gates: dict[str, asyncio.Event] = {}
        self.error: Exception | None = None
        self.raw_payload: object | None = None
        self.questions: list[str] = []
        self.closed = False

    async def generate_content(self, question: str) -> GenerateContentResponse:
        self.questions.append(question)
        gate = self.gates.get(question)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        if self.raw_payload is not None:
            return GenerateContentResponse.parse_lenient(self.raw_payload)
        text = self.replies.get(question, f"Answer: {question}")
        return GenerateContentResponse.parse_lenient(
            {"candidates": [{"content": {"parts": [{"text": text}]}}]}
        )

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def fake_provider():
    """Provider with default echo replies."""
    return FakeProvider()


@pytest.fixture
def memory_storage():
    """Empty in-memory local storage."""
    return InMemoryLocalStorage()


@pytest.fixture
async def session(fake_provider, memory_storage):
    """Started, signed-in session backed by the fake provider and memory storage."""
    chat_session = ChatSession(
        provider=fake_provider,
        storage=memory_storage,
        auth=AuthState(signed_in=True, display_name="Ada"),
    )
    await chat_session.start()
    yield chat_session
    await chat_session.close()
