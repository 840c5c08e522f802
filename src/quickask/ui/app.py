"""Main Textual TUI application.

Renders a ChatSession and forwards user actions to its mutation entry
points. All state lives in the session; widgets are redrawn from
SessionEvent notifications.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, Static

from ..session import ChatSession, SessionEvent, SubmitStatus
from .config import NOTIFY_ERROR, NOTIFY_SHORT, LogLevel
from .screens import SignInScreen
from .styles import APP_CSS
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    RecentQuestionsPanel,
)


class QuickAskApp(App):
    """Textual TUI for a ChatSession."""

    CSS = APP_CSS
    TITLE = "quickask"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+b", "toggle_sidebar", "Recent", priority=True),
        Binding("ctrl+l", "clear_recent", "Clear Recent", priority=True),
        Binding("ctrl+o", "toggle_auth", "Sign In/Out", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        session: ChatSession,
        log_level: str | None = None,
        subtitle: str | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._subtitle = subtitle

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="body"):
            yield RecentQuestionsPanel(id="sidebar")
            with Vertical(id="main"):
                yield Static("", id="greeting")
                yield ChatHistoryWidget(id="chat-history")
                yield ChatInputBar(id="chat-input-bar")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Wire the session to the widgets and draw the initial state."""
        if self._subtitle:
            self.sub_title = self._subtitle

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._session.set_debug_callback(self._debug_callback)
        self._session.subscribe(self._on_session_event)

        self.query_one("#chat-history", ChatHistoryWidget).sync(self._session.messages)
        self.query_one("#sidebar", RecentQuestionsPanel).update_questions(
            self._session.recent_questions
        )
        self.query_one("#chat-input-bar", ChatInputBar).set_value(self._session.pending_input)
        self._apply_auth()

    def on_unmount(self) -> None:
        self._session.unsubscribe(self._on_session_event)
        self._session.set_debug_callback(None)

    def _debug_callback(self, level: str, component: str, message: str) -> None:
        """Route component debug output to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log_entry(component, message, LogLevel.from_string(level))

    def _on_session_event(self, event: SessionEvent) -> None:
        if event == SessionEvent.MESSAGES:
            self.query_one("#chat-history", ChatHistoryWidget).sync(self._session.messages)
        elif event == SessionEvent.RECENT:
            self.query_one("#sidebar", RecentQuestionsPanel).update_questions(
                self._session.recent_questions
            )
        elif event == SessionEvent.INPUT:
            self.query_one("#chat-input-bar", ChatInputBar).set_value(self._session.pending_input)
        elif event == SessionEvent.STATUS:
            self.query_one("#chat-history", ChatHistoryWidget).set_waiting(
                self._session.status == SubmitStatus.AWAITING_REPLY
            )
        elif event == SessionEvent.AUTH:
            self._apply_auth()

    def _apply_auth(self) -> None:
        signed_in = self._session.auth.signed_in
        self.query_one("#greeting", Static).update(self._session.greeting)
        self.query_one("#chat-history", ChatHistoryWidget).display = signed_in
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.disabled = not signed_in
        if signed_in:
            input_bar.focus_input()

    # Input

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "chat-input":
            self._session.pending_input = event.value

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if not self._session.auth.signed_in:
            return
        self._session.pending_input = event.value
        if not event.value.strip():
            return
        self._submit()

    @work(group="submit")
    async def _submit(self) -> None:
        """Run one submit round trip; overlapping submits each get a worker."""
        answer = await self._session.submit()
        error = self._session.last_error
        if answer is None and error is not None:
            self.notify(f"Error: {str(error)[:50]}", severity="error", timeout=NOTIFY_ERROR)

    # Recent questions

    def on_recent_questions_panel_question_selected(
        self, event: RecentQuestionsPanel.QuestionSelected
    ) -> None:
        self._session.select_recent(event.question)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_recent_questions_panel_clear_requested(
        self, event: RecentQuestionsPanel.ClearRequested
    ) -> None:
        self._clear_recent()

    @work(group="recent")
    async def _clear_recent(self) -> None:
        try:
            await self._session.clear_recent()
        except Exception as e:
            self._debug_callback("error", "TUI", f"Failed to clear recent questions: {e}")
            self.notify("Could not clear recent questions", severity="error", timeout=NOTIFY_ERROR)
            return
        self.notify("Recent questions cleared", timeout=NOTIFY_SHORT)

    # Actions

    def action_clear_recent(self) -> None:
        self._clear_recent()

    def action_toggle_sidebar(self) -> None:
        """Toggle the recent-questions sidebar."""
        self.query_one("#sidebar", RecentQuestionsPanel).toggle()

    def action_toggle_auth(self) -> None:
        """Sign out, or open the sign-in dialog when signed out."""
        if self._session.auth.signed_in:
            self._session.sign_out()
            self.notify("Signed out", timeout=NOTIFY_SHORT)
            return

        def _on_dismiss(name: str | None) -> None:
            if name is not None:
                self._session.sign_in(name)

        self.push_screen(SignInScreen(), _on_dismiss)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=NOTIFY_SHORT)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        for message in reversed(self._session.messages):
            if message.role == "assistant":
                self.copy_to_clipboard(message.text)
                self.notify("Response copied", timeout=NOTIFY_SHORT)
                return
        self.notify("No response to copy", severity="warning", timeout=NOTIFY_SHORT)


async def run_textual_tui(
    session: ChatSession,
    log_level: str | None = None,
    subtitle: str | None = None,
) -> None:
    """Run the Textual TUI.

    Starts the session (connects storage, loads recent questions), runs the
    app and closes the session on exit.

    Args:
        session: Session to display and drive
        log_level: Log level for panel (debug/info/warning/error), None to hide
        subtitle: Header subtitle, e.g. provider and storage description
    """
    await session.start()
    app = QuickAskApp(session=session, log_level=log_level, subtitle=subtitle)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await session.close()
