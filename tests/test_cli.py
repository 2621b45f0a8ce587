"""Tests for the Typer CLI."""
import json

import httpx
import pytest
from typer.testing import CliRunner

from parley.cli import app
from parley.cli import providers as cli_providers
from parley.llm import HttpxChatTransport

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch, restore_logging):
    """Point the CLI at a temporary data directory."""
    monkeypatch.setenv("PARLEY_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PARLEY_STORAGE", "file")
    monkeypatch.setenv("PARLEY_LOG_LEVEL", "warning")
    return tmp_path


@pytest.fixture
def mock_api(monkeypatch):
    """Route CLI requests to a handler instead of the network."""
    def _install(handler):
        def _create_transport(kind="httpx", **config):
            return HttpxChatTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        monkeypatch.setattr(cli_providers, "create_transport", _create_transport)

    return _install


def add_provider(name: str = "Local") -> None:
    result = runner.invoke(app, ["providers", "add", name, "http://llm.test/v1/chat", "key", "llama"])
    assert result.exit_code == 0, result.output


class TestProviderCommands:
    """Tests for 'parley providers'."""

    def test_add_and_list(self, data_dir):
        """Test that added providers are stored and listed."""
        add_provider()

        stored = json.loads((data_dir / "api_list.json").read_text())
        assert stored == [{"api_name": "Local", "api_url": "http://llm.test/v1/chat", "api_key": "key", "model": "llama"}]

        result = runner.invoke(app, ["providers", "list"])
        assert result.exit_code == 0
        assert "Local" in result.output
        assert "llama" in result.output

    def test_list_empty(self, data_dir):
        """Test listing with nothing configured."""
        result = runner.invoke(app, ["providers", "list"])
        assert result.exit_code == 0
        assert "No APIs configured" in result.output


class TestSessionCommands:
    """Tests for 'parley sessions'."""

    def test_new_and_list(self, data_dir):
        """Test creating sessions with and without a name."""
        assert runner.invoke(app, ["sessions", "new", "Work"]).exit_code == 0
        assert runner.invoke(app, ["sessions", "new"]).exit_code == 0

        stored = json.loads((data_dir / "sessions.json").read_text())
        assert [(s["id"], s["name"]) for s in stored] == [(0, "Default Session"), (1, "Work"), (2, "Session 3")]

        result = runner.invoke(app, ["sessions", "list"])
        assert "Work" in result.output

    def test_remove_last_session_resets_it(self, data_dir):
        """Test that removing the only session clears it instead."""
        result = runner.invoke(app, ["sessions", "remove"])
        assert result.exit_code == 0
        assert "cleared instead" in result.output

    def test_remove_by_index(self, data_dir):
        """Test removing a chosen session."""
        runner.invoke(app, ["sessions", "new", "Work"])
        result = runner.invoke(app, ["sessions", "remove", "1"])
        assert result.exit_code == 0

        stored = json.loads((data_dir / "sessions.json").read_text())
        assert [s["name"] for s in stored] == ["Default Session"]

    def test_remove_bad_index(self, data_dir):
        """Test that an unknown index is an error."""
        result = runner.invoke(app, ["sessions", "remove", "9"])
        assert result.exit_code == 1

    def test_clear_requires_confirmation(self, data_dir):
        """Test that clear asks first unless --yes is given."""
        runner.invoke(app, ["sessions", "new", "Work"])

        result = runner.invoke(app, ["sessions", "clear"], input="n\n")
        assert "Aborted" in result.output
        assert len(json.loads((data_dir / "sessions.json").read_text())) == 2

        result = runner.invoke(app, ["sessions", "clear", "--yes"])
        assert result.exit_code == 0
        assert json.loads((data_dir / "sessions.json").read_text()) == [
            {"id": 0, "name": "Default Session", "messages": []}
        ]


class TestSendCommand:
    """Tests for 'parley send'."""

    def test_send_without_provider(self, data_dir, mock_api):
        """Test that sending without an API configured fails cleanly."""
        mock_api(lambda request: httpx.Response(200, json={}))
        result = runner.invoke(app, ["send", "hi"])
        assert result.exit_code == 1
        assert "No API configured" in result.output

    def test_send_success(self, data_dir, mock_api):
        """Test a successful one-shot exchange."""
        mock_api(lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "Hello!"}}]}))
        add_provider()

        result = runner.invoke(app, ["send", "hi"])

        assert result.exit_code == 0, result.output
        assert "Hello!" in result.output
        stored = json.loads((data_dir / "sessions.json").read_text())
        assert stored[0]["messages"] == [
            {"sender": "user", "content": "hi"},
            {"sender": "assistant", "content": "Hello!"},
        ]

    def test_send_failure_is_persisted(self, data_dir, mock_api):
        """Test that a failed exchange exits non-zero and is still saved."""
        mock_api(lambda request: httpx.Response(200, json={"unexpected": True}))
        add_provider()

        result = runner.invoke(app, ["send", "hi"])

        assert result.exit_code == 1
        assert "Invalid response format" in result.output
        stored = json.loads((data_dir / "sessions.json").read_text())
        assert [m["sender"] for m in stored[0]["messages"]] == ["user", "system"]


class TestChatCommand:
    """Tests for the interactive 'parley chat' loop."""

    def test_chat_session(self, data_dir, mock_api):
        """Test chatting, creating a session and leaving."""
        mock_api(lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "Hi there"}}]}))
        add_provider()

        result = runner.invoke(app, ["chat"], input="hello\n/new Side\n/sessions\nexit\n")

        assert result.exit_code == 0, result.output
        assert "Hi there" in result.output
        assert "Started Side" in result.output
        assert "Goodbye" in result.output
        stored = json.loads((data_dir / "sessions.json").read_text())
        assert [s["name"] for s in stored] == ["Default Session", "Side"]
        assert len(stored[0]["messages"]) == 2

    def test_retry_after_failure(self, data_dir, mock_api):
        """Test that /retry resends the message kept after a failure."""
        responses = iter([
            httpx.Response(200, json={"nope": 1}),
            httpx.Response(200, json={"choices": [{"message": {"content": "Second time lucky"}}]}),
        ])
        mock_api(lambda request: next(responses))
        add_provider()

        result = runner.invoke(app, ["chat"], input="hello\n/retry\n/retry\n")

        assert result.exit_code == 0, result.output
        assert "Second time lucky" in result.output
        assert "Nothing to retry" in result.output
        stored = json.loads((data_dir / "sessions.json").read_text())
        assert [m["sender"] for m in stored[0]["messages"]] == ["user", "system", "user", "assistant"]

    def test_unknown_command(self, data_dir, mock_api):
        """Test that unknown slash commands are reported."""
        mock_api(lambda request: httpx.Response(200, json={}))
        result = runner.invoke(app, ["chat"], input="/dance\n")
        assert result.exit_code == 0
        assert "Unknown command" in result.output
