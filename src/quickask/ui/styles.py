"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Sidebar on the left, conversation on the right, input pinned to the bottom.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#body {
    height: 1fr;
}

/* ============================================
   Recent Questions Sidebar
   ============================================ */
#sidebar {
    width: 36;
    height: 100%;
    background: $panel;
    border: round $border;
    border-title-color: $accent;
    border-title-style: bold;
    padding: 0 1;

    &.-hidden {
        display: none;
    }
}

#recent-title {
    text-style: bold;
    padding: 1 0;
}

#recent-list {
    height: 1fr;
    background: transparent;
    border: none;
}

#recent-empty {
    color: $text-muted;
}

#clear-recent-btn {
    width: 100%;
    margin-top: 1;
}

/* ============================================
   Main Column
   ============================================ */
#main {
    width: 1fr;
    height: 100%;
}

#greeting {
    width: 100%;
    content-align: center middle;
    text-style: bold;
    color: $accent;
    padding: 1 0;
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $accent;
    background: $accent 10%;
}

.assistant-message {
    border-left: thick $success;
    background: $surface;
}

.message-header {
    color: $text-muted;
    text-style: italic;
}

.message-content {
    height: auto;
}

/* ============================================
   Input Bar
   ============================================ */
#chat-input-bar {
    height: auto;
    padding: 0 1;
    margin: 1 0;
}

#chat-input {
    width: 1fr;
}

#ask-btn {
    min-width: 8;
    margin-left: 1;
}

/* ============================================
   Log Panel
   ============================================ */
#debug-panel {
    height: 10;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}
"""
