from __future__ import annotations

from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from cli.app import app
from cli.config import load_config


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.calls: List[tuple] = []
        self.snapshot: Dict[str, Any] = {
            "session_id": "glasses-1",
            "view": "showing_current",
            "showing_forecast": False,
            "location": {"city": "Tokyo", "source": "voice"},
            "display": "☀️ Tokyo, JP\n\n21°C",
            "history": ["🔄 Getting weather data...", "☀️ Tokyo, JP\n\n21°C"],
        }
        self.closed = False

    def start_session(self, session_id: str | None = None) -> Dict[str, Any]:
        self.calls.append(("start", session_id))
        return {**self.snapshot, "session_id": session_id or "generated", "view": "idle"}

    def send_transcript(self, session_id: str, text: str) -> Dict[str, Any]:
        self.calls.append(("say", session_id, text))
        return self.snapshot

    def press_button(self, session_id: str, button: str) -> Dict[str, Any]:
        self.calls.append(("press", session_id, button))
        return self.snapshot

    def send_location(self, session_id: str, lat: float, lng: float) -> Dict[str, Any]:
        self.calls.append(("locate", session_id, lat, lng))
        return self.snapshot

    def get_session(self, session_id: str) -> Dict[str, Any]:
        self.calls.append(("show", session_id))
        return self.snapshot

    def end_session(self, session_id: str) -> None:
        self.calls.append(("end", session_id))

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def stub(monkeypatch) -> StubClient:
    client = StubClient(config=None)

    def factory(config):
        client.config = config
        return client

    monkeypatch.setattr("cli.app.ApiClient", factory)
    return client


def test_start_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["start", "--session-id", "glasses-1"])

    assert result.exit_code == 0
    assert "Session started. session_id=glasses-1" in result.stdout
    assert stub.calls == [("start", "glasses-1")]
    assert stub.closed is True


def test_say_command_renders_display(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["say", "glasses-1", "weather in tokyo"])

    assert result.exit_code == 0
    assert "view: showing_current" in result.stdout
    assert "location: Tokyo" in result.stdout
    assert "21°C" in result.stdout
    assert stub.calls == [("say", "glasses-1", "weather in tokyo")]


def test_press_and_locate_commands(runner: CliRunner, stub: StubClient) -> None:
    assert runner.invoke(app, ["press", "glasses-1", "forward"]).exit_code == 0
    assert runner.invoke(app, ["locate", "glasses-1", "35.5", "139.25"]).exit_code == 0

    assert stub.calls == [
        ("press", "glasses-1", "forward"),
        ("locate", "glasses-1", 35.5, 139.25),
    ]


def test_show_command_with_history(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["show", "glasses-1", "--history"])

    assert result.exit_code == 0
    assert "History" in result.stdout
    assert "Getting weather data" in result.stdout


def test_end_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["--base-url", "http://glasses.local:9000/", "end", "glasses-1"])

    assert result.exit_code == 0
    assert "Session glasses-1 ended." in result.stdout
    assert stub.config.base_url == "http://glasses.local:9000"


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://example.test/")
    monkeypatch.setenv("CLI_REQUEST_TIMEOUT", "not-a-number")

    config = load_config()

    assert config.base_url == "http://example.test"
    assert config.timeout == 30.0
