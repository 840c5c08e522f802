"""Unit tests for the conversation store and chat session."""
import asyncio

import httpx
import pytest
from hypothesis import given
from hypothesis import strategies as st

from conftest import FakeProvider
from quickask.session import (
    AuthState,
    ChatSession,
    ConversationStore,
    Message,
    SessionEvent,
    SubmitStatus,
)
from quickask.storage import InMemoryLocalStorage


class FailingStorage(InMemoryLocalStorage):
    """Storage whose writes always fail."""

    async def set_item(self, key: str, value: str) -> None:
        raise OSError("disk full")


def _pairs(messages) -> list[tuple[str, str]]:
    return [(m.role, m.text) for m in messages]


class TestMessage:
    """Tests for the Message model."""

    def test_message_is_immutable(self):
        message = Message(role="user", text="hi")
        with pytest.raises(ValueError):
            message.text = "changed"  # type: ignore[misc]

    def test_role_is_validated(self):
        with pytest.raises(ValueError):
            Message(role="system", text="hi")  # type: ignore[arg-type]


class TestSubmit:
    """Tests for ChatSession.submit / ConversationStore.submit."""

    @pytest.mark.asyncio
    async def test_capital_of_france_scenario(self, session, fake_provider):
        fake_provider.replies["capital of France"] = " Paris "

        answer = await session.submit("capital of France")

        assert answer is not None and answer.text == "Paris"
        assert _pairs(session.messages) == [
            ("user", "capital of France"),
            ("assistant", "Paris"),
        ]
        assert session.recent_questions == ("capital of France",)
        assert fake_provider.questions == ["capital of France"]

    @pytest.mark.asyncio
    async def test_reply_is_normalized(self, session, fake_provider):
        fake_provider.replies["list"] = "A*B*C"
        await session.submit("list")
        assert session.messages[-1].text == "A\nB\nC"

    @pytest.mark.asyncio
    async def test_raw_question_text_is_kept(self, session, fake_provider):
        await session.submit("  padded question ")
        assert session.messages[0].text == "  padded question "
        assert fake_provider.questions == ["  padded question "]
        assert session.recent_questions == ("  padded question ",)

    @pytest.mark.asyncio
    async def test_blank_input_is_noop(self, session, fake_provider):
        events: list[SessionEvent] = []
        session.subscribe(events.append)

        assert await session.submit("") is None
        assert await session.submit("   \t\n") is None

        assert session.messages == ()
        assert session.recent_questions == ()
        assert fake_provider.questions == []
        assert events == []

    @given(st.text(alphabet=" \t\n\r\x0b\x0c"))
    def test_whitespace_only_never_submits(self, text: str):
        """Property test: whitespace-only input never reaches the log or the provider."""
        provider = FakeProvider()

        async def _run() -> ChatSession:
            chat_session = ChatSession(provider, InMemoryLocalStorage())
            await chat_session.start()
            await chat_session.submit(text)
            return chat_session

        chat_session = asyncio.run(_run())
        assert chat_session.messages == ()
        assert chat_session.recent_questions == ()
        assert provider.questions == []

    @pytest.mark.asyncio
    async def test_user_message_appended_before_reply(self, session, fake_provider):
        gate = asyncio.Event()
        fake_provider.gates["slow"] = gate

        task = asyncio.create_task(session.submit("slow"))
        await asyncio.sleep(0)

        assert _pairs(session.messages) == [("user", "slow")]
        assert session.status == SubmitStatus.AWAITING_REPLY
        assert session.conversation.in_flight == 1

        gate.set()
        await task

        assert _pairs(session.messages) == [("user", "slow"), ("assistant", "Answer: slow")]
        assert session.status == SubmitStatus.IDLE

    @pytest.mark.asyncio
    async def test_malformed_response_yields_empty_assistant_message(self, session, fake_provider):
        fake_provider.raw_payload = {"error": {"message": "quota"}}

        answer = await session.submit("q")

        assert answer is not None
        assert _pairs(session.messages) == [("user", "q"), ("assistant", "")]
        assert session.last_error is None

    @pytest.mark.asyncio
    async def test_provider_failure_keeps_unanswered_turn(self, session, fake_provider):
        error = httpx.ConnectError("connection refused")
        fake_provider.error = error
        session.pending_input = "will fail"

        answer = await session.submit()

        assert answer is None
        assert _pairs(session.messages) == [("user", "will fail")]
        assert session.recent_questions == ("will fail",)
        assert session.pending_input == "will fail"
        assert session.last_error is error
        assert session.status == SubmitStatus.IDLE

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, session, fake_provider):
        logs: list[tuple[str, str, str]] = []
        session.set_debug_callback(lambda *args: logs.append(args))
        fake_provider.error = RuntimeError("boom")

        await session.submit("q")

        assert ("error", "Session") in [(level, component) for level, component, _ in logs]

    @pytest.mark.asyncio
    async def test_session_usable_after_failure(self, session, fake_provider):
        fake_provider.error = RuntimeError("boom")
        await session.submit("first")

        fake_provider.error = None
        answer = await session.submit("second")

        assert answer is not None
        assert session.last_error is None
        assert _pairs(session.messages) == [
            ("user", "first"),
            ("user", "second"),
            ("assistant", "Answer: second"),
        ]
        assert session.recent_questions == ("second", "first")

    @pytest.mark.asyncio
    async def test_pending_input_cleared_after_success(self, session):
        session.pending_input = "what is 2+2"
        await session.submit()
        assert session.pending_input == ""
        assert session.messages[0].text == "what is 2+2"

    @pytest.mark.asyncio
    async def test_recording_failure_does_not_abort_submit(self, fake_provider):
        logs: list[tuple[str, str, str]] = []
        chat_session = ChatSession(fake_provider, FailingStorage())
        chat_session.set_debug_callback(lambda *args: logs.append(args))
        await chat_session.start()

        answer = await chat_session.submit("q")

        assert answer is not None
        assert _pairs(chat_session.messages) == [("user", "q"), ("assistant", "Answer: q")]
        assert chat_session.recent_questions == ()
        assert any(level == "error" and "disk full" in message for level, _, message in logs)

    @pytest.mark.asyncio
    async def test_overlapping_submits_append_in_arrival_order(self, session, fake_provider):
        gate_a = asyncio.Event()
        gate_b = asyncio.Event()
        fake_provider.gates.update({"a": gate_a, "b": gate_b})

        task_a = asyncio.create_task(session.submit("a"))
        task_b = asyncio.create_task(session.submit("b"))
        await asyncio.sleep(0)
        assert session.conversation.in_flight == 2

        gate_b.set()
        await task_b
        gate_a.set()
        await task_a

        assert _pairs(session.messages) == [
            ("user", "a"),
            ("user", "b"),
            ("assistant", "Answer: b"),
            ("assistant", "Answer: a"),
        ]
        assert session.recent_questions == ("b", "a")
        assert session.conversation.in_flight == 0

    @pytest.mark.asyncio
    async def test_store_without_recent_list(self, fake_provider):
        store = ConversationStore(fake_provider)
        await store.submit("standalone")
        assert [m.role for m in store.messages] == ["user", "assistant"]


class TestSessionEvents:
    """Tests for change notifications."""

    @pytest.mark.asyncio
    async def test_submit_event_sequence(self, session):
        events: list[SessionEvent] = []
        session.subscribe(events.append)
        session.pending_input = "q"

        await session.submit()

        assert events == [
            SessionEvent.INPUT,
            SessionEvent.MESSAGES,
            SessionEvent.STATUS,
            SessionEvent.RECENT,
            SessionEvent.MESSAGES,
            SessionEvent.INPUT,
            SessionEvent.STATUS,
        ]

    @pytest.mark.asyncio
    async def test_unchanged_input_emits_nothing(self, session):
        events: list[SessionEvent] = []
        session.subscribe(events.append)
        session.pending_input = ""
        assert events == []

    @pytest.mark.asyncio
    async def test_unsubscribe(self, session):
        events: list[SessionEvent] = []
        session.subscribe(events.append)
        session.subscribe(events.append)
        session.unsubscribe(events.append)
        session.pending_input = "x"
        assert events == []


class TestRecentThroughSession:
    """Tests for the recent-question entry points on ChatSession."""

    @pytest.mark.asyncio
    async def test_select_recent_sets_pending_input(self, session):
        await session.record("earlier question")
        assert session.select_recent("earlier question") == "earlier question"
        assert session.pending_input == "earlier question"
        assert session.recent_questions == ("earlier question",)

    @pytest.mark.asyncio
    async def test_clear_recent(self, session, memory_storage):
        await session.submit("q")
        await session.clear_recent()
        assert session.recent_questions == ()
        assert await memory_storage.get_item("recentSearches") == "[]"
        assert len(session.messages) == 2

    @pytest.mark.asyncio
    async def test_recent_survives_restart(self, memory_storage):
        async with ChatSession(FakeProvider(), memory_storage) as first:
            await first.submit("remember me")

        async with ChatSession(FakeProvider(), memory_storage) as second:
            assert second.recent_questions == ("remember me",)
            assert second.messages == ()


class TestAuth:
    """Tests for auth state and greeting."""

    def test_signed_out_greeting(self):
        assert AuthState().greeting == "Please sign in to ask questions."

    def test_signed_in_greeting_defaults_name(self):
        assert AuthState(signed_in=True).greeting == "Welcome, User! Ask me anything."

    @pytest.mark.asyncio
    async def test_sign_in_and_out(self, session):
        events: list[SessionEvent] = []
        session.subscribe(events.append)

        session.sign_out()
        assert not session.auth.signed_in
        session.sign_in("  Grace ")
        assert session.greeting == "Welcome, Grace! Ask me anything."
        session.sign_in("")
        assert session.auth.display_name is None

        assert events == [SessionEvent.AUTH] * 3

    @pytest.mark.asyncio
    async def test_close_releases_provider(self, fake_provider, memory_storage):
        chat_session = ChatSession(fake_provider, memory_storage)
        await chat_session.start()
        await chat_session.close()
        assert fake_provider.closed
