"""Modal screens for the TUI.

This module hides the design decisions about:
- Sign-in dialog appearance (CSS, layout)
- Keyboard shortcuts for dialogs

To change how sign-in looks, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static


class SignInScreen(ModalScreen[str | None]):
    """Modal dialog asking for a display name.

    Dismisses with the entered name ("" when left blank) on sign-in,
    or None when cancelled.
    """

    CSS = """
    SignInScreen {
        align: center middle;
        background: $background 70%;
    }

    #signin-dialog {
        width: 50;
        height: auto;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #signin-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    #signin-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #signin-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="signin-dialog"):
            yield Static("Sign In", id="signin-title")
            yield Input(placeholder="Display name (optional)", id="signin-name")
            with Horizontal(id="signin-buttons"):
                yield Button("Sign In", id="btn-signin", variant="success")
                yield Button("Cancel", id="btn-cancel", variant="error")

    def on_mount(self) -> None:
        self.query_one("#signin-name", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-signin":
            self.dismiss(self.query_one("#signin-name", Input).value)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
