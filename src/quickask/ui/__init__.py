"""Terminal UI module for quickask.

Provides a Textual-based TUI for a ChatSession.

Module structure (Parnas principle - each module hides a design decision):
- config.py: Constants and log levels
- widgets.py: Custom widgets (chat transcript, recent sidebar, input bar, log)
- styles.py: CSS styling (layout decisions)
- screens.py: Modal dialogs (sign-in)
- app.py: Application orchestration (user interaction flow)
"""

from .app import QuickAskApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, RecentQuestionsPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "QuickAskApp",
    "RecentQuestionsPanel",
    "run_textual_tui",
]
