"""Provider factory functions for CLI.

Centralizes creation of the answer provider, local storage and session from
environment variables. Hides configuration details from command
implementations.
"""

import os
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from ..llm import AnswerProvider, create_answer_provider, gemini_endpoint
from ..session import AuthState, ChatSession
from ..storage import LocalStorage, create_local_storage

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_STORAGE_PATH = Path.home() / ".quickask" / "local_storage.db"

# Default console for output
_console = Console()

_LEVEL_STYLES = {
    "debug": "dim",
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
}
_LEVEL_ORDER = ["debug", "info", "warning", "error"]


def get_provider(console: Console | None = None) -> AnswerProvider:
    """Create the answer provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Answer provider instance

    Raises:
        typer.Exit: If the provider is unknown or missing required config

    Environment variables:
        QUICKASK_PROVIDER: Provider type (http, gemini; default: http)
        QUICKASK_API_URL: Endpoint for the http provider
            (default: Gemini generateContent URL for GEMINI_MODEL)
        GEMINI_API_KEY: API key (required for gemini, optional for http)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    con = console or _console
    provider_name = os.getenv("QUICKASK_PROVIDER", "http").lower()
    api_key = os.getenv("GEMINI_API_KEY")
    model = os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)

    if provider_name == "http":
        url = os.getenv("QUICKASK_API_URL") or gemini_endpoint(model)
        if not api_key and not os.getenv("QUICKASK_API_URL"):
            con.print("[yellow]Warning: GEMINI_API_KEY not set, requests will likely be rejected[/yellow]")
        return create_answer_provider("http", url=url, api_key=api_key)

    if provider_name == "gemini":
        if not api_key:
            con.print("[red]Error: GEMINI_API_KEY not set in environment[/red]")
            raise typer.Exit(code=1)
        return create_answer_provider("gemini", api_key=api_key, model=model)

    con.print(f"[red]Error: Unknown provider: {provider_name}[/red]")
    raise typer.Exit(code=1)


def describe_provider() -> str:
    """Short description of the configured provider for headers."""
    provider_name = os.getenv("QUICKASK_PROVIDER", "http").lower()
    model = os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
    if provider_name == "http" and os.getenv("QUICKASK_API_URL"):
        return "http | custom endpoint"
    return f"{provider_name} | {model}"


def get_storage(backend: str | None = None, path: Path | None = None) -> LocalStorage:
    """Create local storage from options or environment variables.

    Environment variables:
        QUICKASK_STORAGE: Backend type (sqlite, memory; default: sqlite)
        QUICKASK_STORAGE_PATH: SQLite file (default: ~/.quickask/local_storage.db)
    """
    backend = (backend or os.getenv("QUICKASK_STORAGE", "sqlite")).lower()
    if backend == "sqlite":
        db_path = path or Path(os.getenv("QUICKASK_STORAGE_PATH", str(DEFAULT_STORAGE_PATH)))
        return create_local_storage("sqlite", path=db_path)
    return create_local_storage(backend)


def get_auth(user: str | None = None, signed_out: bool = False) -> AuthState:
    """Build the initial auth state.

    Environment variables:
        QUICKASK_USER: Display name used when --user is not given
    """
    if signed_out:
        return AuthState()
    name = user or os.getenv("QUICKASK_USER")
    return AuthState(signed_in=True, display_name=name or None)


def get_session(
    console: Console | None = None,
    storage_backend: str | None = None,
    storage_path: Path | None = None,
    auth: AuthState | None = None,
) -> ChatSession:
    """Create a ChatSession wired to the configured provider and storage."""
    return ChatSession(
        provider=get_provider(console),
        storage=get_storage(storage_backend, storage_path),
        auth=auth,
    )


def console_debug_callback(console: Console | None = None, min_level: str = "debug") -> Any:
    """Build a debug callback printing to a Rich console.

    Args:
        console: Console to print to
        min_level: Lowest level printed (debug, info, warning, error)
    """
    con = console or _console
    threshold = _LEVEL_ORDER.index(min_level) if min_level in _LEVEL_ORDER else 0

    def _callback(level: str, component: str, message: str) -> None:
        if level in _LEVEL_ORDER and _LEVEL_ORDER.index(level) < threshold:
            return
        style = _LEVEL_STYLES.get(level, "white")
        con.print(f"[{style}]{level.upper():<7}[/{style}] [bold]\\[{component}][/bold] {escape(message)}", highlight=False)

    return _callback
