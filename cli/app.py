from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_snapshot


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Drive weather glasses sessions from the terminal.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("start")
def start_command(
    ctx: typer.Context,
    session_id: Optional[str] = typer.Option(
        None,
        "--session-id",
        "-s",
        help="Use this identifier instead of a generated one.",
    ),
) -> None:
    """Start a session and show its welcome screen."""
    state = _get_state(ctx)
    payload = state.client.start_session(session_id)
    typer.secho(f"Session started. session_id={payload.get('session_id')}", fg=typer.colors.GREEN)
    typer.echo()
    render_snapshot(payload)


@app.command("say")
def say_command(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Identifier returned from the start command."),
    text: str = typer.Argument(..., help='What the wearer said, e.g. "weather in Paris".'),
) -> None:
    """Send a final transcript to a session."""
    state = _get_state(ctx)
    render_snapshot(state.client.send_transcript(session_id, text))


@app.command("press")
def press_command(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Identifier returned from the start command."),
    button: str = typer.Argument(..., help="forward, select or back."),
) -> None:
    """Press a button on a session's device."""
    state = _get_state(ctx)
    render_snapshot(state.client.press_button(session_id, button))


@app.command("locate")
def locate_command(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Identifier returned from the start command."),
    lat: float = typer.Argument(..., min=-90, max=90, help="Latitude in degrees."),
    lng: float = typer.Argument(..., min=-180, max=180, help="Longitude in degrees."),
) -> None:
    """Send a device location sample to a session."""
    state = _get_state(ctx)
    render_snapshot(state.client.send_location(session_id, lat, lng))


@app.command("show")
def show_command(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Identifier returned from the start command."),
    history: bool = typer.Option(False, "--history/--no-history", help="Also print earlier screens."),
) -> None:
    """Print what a session currently displays."""
    state = _get_state(ctx)
    render_snapshot(state.client.get_session(session_id), show_history=history)


@app.command("end")
def end_command(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Identifier returned from the start command."),
) -> None:
    """End a session."""
    state = _get_state(ctx)
    state.client.end_session(session_id)
    typer.secho(f"Session {session_id} ended.", fg=typer.colors.GREEN)
