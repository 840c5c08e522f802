"""Tests for the Typer CLI."""
import asyncio

import pytest
from typer.testing import CliRunner

from conftest import FakeProvider
from quickask.cli import providers
from quickask.cli.app import app
from quickask.session import RecentQuestionsStore
from quickask.storage.sqlite import SQLiteLocalStorage

runner = CliRunner()


def _seed(db_path, questions: list[str]) -> None:
    async def _run():
        storage = SQLiteLocalStorage(db_path)
        await storage.connect()
        try:
            store = RecentQuestionsStore(storage)
            for question in reversed(questions):
                await store.record(question)
        finally:
            await storage.disconnect()

    asyncio.run(_run())


def _read(db_path) -> tuple[str, ...]:
    async def _run():
        storage = SQLiteLocalStorage(db_path)
        await storage.connect()
        try:
            store = RecentQuestionsStore(storage)
            await store.load()
            return store.questions
        finally:
            await storage.disconnect()

    return asyncio.run(_run())


@pytest.fixture
def fake_cli_provider(monkeypatch):
    provider = FakeProvider({"capital of France": " Paris "})
    monkeypatch.setattr(providers, "get_provider", lambda console=None: provider)
    return provider


class TestRecentCommands:
    """Tests for recent and clear-recent."""

    def test_recent_empty(self, tmp_path):
        result = runner.invoke(app, ["recent", "--storage-path", str(tmp_path / "s.db")])
        assert result.exit_code == 0
        assert "No recent questions" in result.output

    def test_recent_lists_questions(self, tmp_path):
        db_path = tmp_path / "s.db"
        _seed(db_path, ["newest", "oldest"])

        result = runner.invoke(app, ["recent", "--storage-path", str(db_path)])

        assert result.exit_code == 0
        assert result.output.index("newest") < result.output.index("oldest")

    def test_clear_recent(self, tmp_path):
        db_path = tmp_path / "s.db"
        _seed(db_path, ["a", "b"])

        result = runner.invoke(app, ["clear-recent", "--yes", "--storage-path", str(db_path)])

        assert result.exit_code == 0
        assert _read(db_path) == ()

    def test_clear_recent_aborts_without_confirmation(self, tmp_path):
        db_path = tmp_path / "s.db"
        _seed(db_path, ["a"])

        result = runner.invoke(app, ["clear-recent", "--storage-path", str(db_path)], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert _read(db_path) == ("a",)


class TestAskCommand:
    """Tests for the one-shot ask command."""

    def test_ask_prints_reply_and_records(self, tmp_path, fake_cli_provider):
        db_path = tmp_path / "s.db"

        result = runner.invoke(app, ["ask", "capital of France", "--storage-path", str(db_path)])

        assert result.exit_code == 0
        assert "Paris" in result.output
        assert fake_cli_provider.questions == ["capital of France"]
        assert _read(db_path) == ("capital of France",)

    def test_ask_failure_exits_nonzero_but_records(self, tmp_path, fake_cli_provider):
        db_path = tmp_path / "s.db"
        fake_cli_provider.error = RuntimeError("network down")

        result = runner.invoke(app, ["ask", "q", "--storage-path", str(db_path)])

        assert result.exit_code == 1
        assert "network down" in result.output
        assert _read(db_path) == ("q",)

    def test_ask_blank_question(self, tmp_path, fake_cli_provider):
        result = runner.invoke(app, ["ask", "   ", "--storage", "memory"])

        assert result.exit_code == 1
        assert "blank" in result.output
        assert fake_cli_provider.questions == []


class TestProviderConfig:
    """Tests for environment-driven configuration."""

    def test_http_provider_default_endpoint(self, monkeypatch):
        monkeypatch.setenv("QUICKASK_PROVIDER", "http")
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
        monkeypatch.delenv("QUICKASK_API_URL", raising=False)

        provider = providers.get_provider()

        assert provider.url.endswith("/models/gemini-test:generateContent")

    def test_custom_endpoint(self, monkeypatch):
        monkeypatch.setenv("QUICKASK_PROVIDER", "http")
        monkeypatch.setenv("QUICKASK_API_URL", "http://localhost:9999/generate")

        assert providers.get_provider().url == "http://localhost:9999/generate"

    def test_gemini_without_key_exits(self, monkeypatch):
        import typer

        monkeypatch.setenv("QUICKASK_PROVIDER", "gemini")
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        with pytest.raises(typer.Exit):
            providers.get_provider()

    def test_auth_from_env(self, monkeypatch):
        monkeypatch.setenv("QUICKASK_USER", "Grace")
        assert providers.get_auth().display_name == "Grace"
        assert providers.get_auth("Ada").display_name == "Ada"
        assert not providers.get_auth(signed_out=True).signed_in
