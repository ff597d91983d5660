from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the weather glasses service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def start_session(self, session_id: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if session_id:
            body["session_id"] = session_id
        return self._request("POST", "/sessions", json=body)

    def get_session(self, session_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/sessions/{session_id}", session_id=session_id)

    def end_session(self, session_id: str) -> None:
        self._request("DELETE", f"/sessions/{session_id}", session_id=session_id)

    def send_transcript(self, session_id: str, text: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/sessions/{session_id}/transcripts",
            json={"text": text, "is_final": True},
            session_id=session_id,
        )

    def press_button(self, session_id: str, button: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/sessions/{session_id}/buttons",
            json={"button": button, "action": "press"},
            session_id=session_id,
        )

    def send_location(self, session_id: str, lat: float, lng: float) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/sessions/{session_id}/location",
            json={"lat": lat, "lng": lng},
            session_id=session_id,
        )

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        session_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path, json=json)
            if response.status_code == 404 and session_id is not None:
                raise typer.BadParameter(f"Session {session_id} was not found.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
