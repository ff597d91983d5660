from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_snapshot(payload: Dict[str, Any], show_history: bool = False) -> None:
    echo_heading("Session")
    location = payload.get("location") or {}
    echo_key_values(
        [
            ("session_id", payload.get("session_id")),
            ("view", payload.get("view")),
            ("location", location.get("city", "-")),
        ]
    )

    typer.echo()
    echo_heading("Display")
    display = payload.get("display")
    typer.echo(display if display else "(blank)")

    if not show_history:
        return
    history = payload.get("history") or []
    typer.echo()
    echo_heading("History")
    if history:
        for index, text in enumerate(history, start=1):
            typer.echo(f"[{index}]")
            typer.echo(text)
    else:
        typer.echo("No screens recorded.")
