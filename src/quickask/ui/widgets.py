"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering
- Recent-questions list rendering
- Input bar composition
- Log rendering and level filtering
"""

from collections.abc import Sequence
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, OptionList, RichLog, Static
from textual.widgets.option_list import Option

from ..session import Message
from .config import (
    CHAT_TIMESTAMP_FORMAT,
    EMPTY_REPLY_PLACEHOLDER,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    NOTIFY_SHORT,
    LogLevel,
)


class ClickableMessage(Vertical):
    """A chat message container that copies its text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=NOTIFY_SHORT)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable conversation transcript.

    The session log is append-only, so syncing only mounts messages past
    the ones already rendered.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "No messages yet"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered = 0
        self._waiting = False

    @property
    def rendered_count(self) -> int:
        return self._rendered

    def sync(self, messages: Sequence[Message]) -> None:
        """Render any messages not shown yet and scroll to the newest."""
        new_messages = messages[self._rendered:]
        for msg in new_messages:
            self._render_message(msg)
        self._rendered = len(messages)
        self._update_subtitle()
        if new_messages:
            self.scroll_end(animate=False)

    def set_waiting(self, waiting: bool) -> None:
        self._waiting = waiting
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self._waiting:
            self.border_subtitle = "Waiting for reply..."
        elif self._rendered:
            self.border_subtitle = f"{self._rendered} messages"
        else:
            self.border_subtitle = "No messages yet"

    def _render_message(self, msg: Message) -> None:
        if msg.role == "user":
            header = f"> You [{msg.timestamp.strftime(CHAT_TIMESTAMP_FORMAT)}]"
            border_class = "user-message"
        else:
            header = f"< Assistant [{msg.timestamp.strftime(CHAT_TIMESTAMP_FORMAT)}]"
            border_class = "assistant-message"

        if msg.text:
            body = Text(msg.text)
        else:
            body = Text(EMPTY_REPLY_PLACEHOLDER, style="dim italic")

        container = ClickableMessage(content=msg.text, classes=f"chat-message {border_class}")
        container.compose_add_child(Static(header, classes="message-header"))
        container.compose_add_child(Static(body, classes="message-content"))
        self.mount(container)


class RecentQuestionsPanel(Vertical):
    """Sidebar listing recent questions, newest first."""

    BORDER_TITLE = "Recent Searches"

    class QuestionSelected(TextualMessage):
        """Posted when the user picks a recent question."""

        def __init__(self, question: str) -> None:
            super().__init__()
            self.question = question

    class ClearRequested(TextualMessage):
        """Posted when the user asks to clear the list."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._questions: list[str] = []

    def compose(self):
        yield Static("No recent questions", id="recent-empty")
        yield OptionList(id="recent-list")
        yield Button("Clear Recent", id="clear-recent-btn", variant="error")

    def on_mount(self) -> None:
        self._refresh_visibility()

    @property
    def questions(self) -> list[str]:
        return list(self._questions)

    def update_questions(self, questions: Sequence[str]) -> None:
        """Replace the displayed list."""
        self._questions = list(questions)
        option_list = self.query_one("#recent-list", OptionList)
        option_list.clear_options()
        option_list.add_options([Option(f"• {question}") for question in self._questions])
        self._refresh_visibility()

    def _refresh_visibility(self) -> None:
        has_items = bool(self._questions)
        self.query_one("#recent-empty", Static).display = not has_items
        self.query_one("#recent-list", OptionList).display = has_items
        self.query_one("#clear-recent-btn", Button).display = has_items

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        if 0 <= event.option_index < len(self._questions):
            self.post_message(self.QuestionSelected(self._questions[event.option_index]))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "clear-recent-btn":
            event.stop()
            self.post_message(self.ClearRequested())

    def toggle(self) -> bool:
        """Toggle visibility. Returns True when now visible."""
        self.toggle_class("-hidden")
        return not self.has_class("-hidden")


class ChatInputBar(Horizontal):
    """Single-line question input with an Ask button.

    The input is not cleared here: the session clears its pending input
    only after a successful reply, and the app mirrors that back.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield Input(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Ask", id="ask-btn", variant="primary")

    @property
    def value(self) -> str:
        return self.query_one("#chat-input", Input).value

    def set_value(self, value: str) -> None:
        """Show value in the input unless it is already shown."""
        text_input = self.query_one("#chat-input", Input)
        if text_input.value != value:
            text_input.value = value
            text_input.cursor_position = len(value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "ask-btn":
            event.stop()
            self.post_message(self.Submitted(self.value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", Input).focus()


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Session": "green",
        "Recent": "bright_green",
        "LLM": "magenta",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Session, Recent, LLM, ...)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text.assemble(
            (f"{timestamp} ", "dim"),
            (f"{LogLevel.name(level):<7} ", level_color),
            (f"[{component}] ", comp_color),
            message,
        )
        self.write(line)

    def info(self, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.INFO)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
