"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..session import RecentQuestionsStore
from .providers import (
    console_debug_callback,
    describe_provider,
    get_auth,
    get_session,
    get_storage,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="quickask",
    help="Terminal chat client for text-generation APIs",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def chat(
    user: str = typer.Option(
        None,
        "--user",
        "-u",
        help="Display name to sign in with (default: $QUICKASK_USER)"
    ),
    signed_out: bool = typer.Option(
        False,
        "--signed-out",
        help="Start signed out (sign in with Ctrl+O)"
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level: debug, info, warning, error"
    ),
    storage: str = typer.Option(
        None,
        "--storage",
        "-s",
        help="Storage backend: sqlite or memory (default: $QUICKASK_STORAGE or sqlite)"
    ),
    storage_path: Path = typer.Option(
        None,
        "--storage-path",
        help="SQLite file for recent questions"
    ),
):
    """Start the interactive chat TUI."""
    async def _chat():
        from ..ui import run_textual_tui

        session = get_session(
            console,
            storage_backend=storage,
            storage_path=storage_path,
            auth=get_auth(user, signed_out),
        )
        subtitle = f"{describe_provider()} | {session.storage_backend}"
        await run_textual_tui(session, log_level=log_level, subtitle=subtitle)

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to ask"),
    storage: str = typer.Option(
        None,
        "--storage",
        "-s",
        help="Storage backend: sqlite or memory"
    ),
    storage_path: Path = typer.Option(
        None,
        "--storage-path",
        help="SQLite file for recent questions"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print debug output"
    ),
):
    """Ask a single question and print the reply."""
    async def _ask() -> int:
        session = get_session(console, storage_backend=storage, storage_path=storage_path)
        session.set_debug_callback(
            console_debug_callback(console, "debug" if verbose else "warning")
        )
        async with session:
            answer = await session.submit(question)
            if answer is None:
                error = session.last_error
                if error is not None:
                    console.print(f"[red]Error: {error}[/red]")
                else:
                    console.print("[yellow]Nothing to ask: question is blank[/yellow]")
                return 1

            console.print(Panel(
                Text(answer.text) if answer.text else Text("(empty reply)", style="dim"),
                title="Assistant",
                border_style="green",
            ))
            return 0

    try:
        code = asyncio.run(_ask())
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    if code:
        raise typer.Exit(code=code)


@app.command()
def recent(
    storage_path: Path = typer.Option(
        None,
        "--storage-path",
        help="SQLite file for recent questions"
    ),
):
    """Show recently asked questions, newest first."""
    async def _recent():
        local_storage = get_storage("sqlite", storage_path)
        await local_storage.connect()
        try:
            store = RecentQuestionsStore(local_storage)
            await store.load()
            return store.questions
        finally:
            await local_storage.disconnect()

    try:
        questions = asyncio.run(_recent())
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if not questions:
        console.print("[dim]No recent questions[/dim]")
        return

    table = Table(title="Recent Searches")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Question", style="cyan")
    for i, question in enumerate(questions, 1):
        table.add_row(str(i), question)
    console.print(table)


@app.command(name="clear-recent")
def clear_recent(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
    storage_path: Path = typer.Option(
        None,
        "--storage-path",
        help="SQLite file for recent questions"
    ),
):
    """Clear the recent-questions list."""
    if not yes:
        confirm = typer.confirm("Clear all recent questions?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    async def _clear():
        local_storage = get_storage("sqlite", storage_path)
        await local_storage.connect()
        try:
            store = RecentQuestionsStore(local_storage)
            await store.clear()
        finally:
            await local_storage.disconnect()

    try:
        asyncio.run(_clear())
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]Recent questions cleared.[/green]")


if __name__ == "__main__":
    app()
