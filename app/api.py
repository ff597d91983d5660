"""HTTP route definitions for the wearable bridge."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.schemas import (
    ButtonEvent,
    LocationUpdate,
    SessionSnapshot,
    SessionStartRequest,
    TranscriptEvent,
)
from services.registry import SessionRegistry, build_default_registry
from services.session import WeatherSession

logger = logging.getLogger(__name__)

router = APIRouter()


def get_registry() -> SessionRegistry:
    return build_default_registry()


def _lookup(registry: SessionRegistry, session_id: str) -> WeatherSession:
    try:
        return registry.get(session_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.post(
    "/sessions",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionSnapshot,
    summary="Start a session and show the welcome screen.",
)
async def start_session(
    payload: SessionStartRequest | None = None,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionSnapshot:
    payload = payload or SessionStartRequest()
    try:
        session = registry.start(payload.session_id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    if payload.user_id:
        logger.info("Session bound to user", extra={"session_id": session.session_id})
    return SessionSnapshot.from_session(session)


@router.get(
    "/sessions/{session_id}",
    response_model=SessionSnapshot,
    summary="Fetch the current screen and navigation state of a session.",
)
async def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionSnapshot:
    return SessionSnapshot.from_session(_lookup(registry, session_id))


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="End a session and discard its state.",
)
async def end_session(
    session_id: str,
    reason: str | None = Query(default=None, description="Why the bridge stopped the session."),
    registry: SessionRegistry = Depends(get_registry),
) -> Response:
    try:
        registry.end(session_id, reason=reason)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/sessions/{session_id}/transcripts",
    response_model=SessionSnapshot,
    summary="Deliver a speech transcript to a session.",
)
async def post_transcript(
    session_id: str,
    event: TranscriptEvent,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionSnapshot:
    session = _lookup(registry, session_id)
    await session.handle_transcript(event.text, is_final=event.is_final)
    return SessionSnapshot.from_session(session)


@router.post(
    "/sessions/{session_id}/buttons",
    response_model=SessionSnapshot,
    summary="Deliver a button press to a session.",
)
async def post_button(
    session_id: str,
    event: ButtonEvent,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionSnapshot:
    session = _lookup(registry, session_id)
    await session.handle_button(event.button, action=event.action)
    return SessionSnapshot.from_session(session)


@router.post(
    "/sessions/{session_id}/location",
    response_model=SessionSnapshot,
    summary="Deliver a device location sample to a session.",
)
async def post_location(
    session_id: str,
    update: LocationUpdate,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionSnapshot:
    session = _lookup(registry, session_id)
    await session.handle_location_update(update.lat, update.lng)
    return SessionSnapshot.from_session(session)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(registry: SessionRegistry = Depends(get_registry)) -> dict[str, str | int]:
    return {"status": "ok", "sessions": len(registry)}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
