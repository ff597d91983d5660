"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from models.records import LocationSource, SessionLocation
from services.display import ScreenBuffer
from services.session import SessionView, WeatherSession


class SessionStartRequest(BaseModel):
    """Session start notification from the wearable bridge."""

    session_id: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Identifier assigned by the bridge; generated when omitted.",
    )
    user_id: Optional[str] = None


class TranscriptEvent(BaseModel):
    """A unit of speech-to-text output."""

    text: str
    is_final: bool = True


class ButtonEvent(BaseModel):
    """A hardware button interaction."""

    button: str = Field(..., min_length=1, description="forward, select or back.")
    action: str = Field(default="press")


class LocationUpdate(BaseModel):
    """One sample from the device location stream."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class LocationPayload(BaseModel):
    city: str
    source: LocationSource
    country: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @classmethod
    def from_location(cls, location: SessionLocation) -> "LocationPayload":
        return cls(
            city=location.city,
            source=location.source,
            country=location.country,
            lat=location.lat,
            lng=location.lng,
        )


class SessionSnapshot(BaseModel):
    """What a session currently shows and where it is in its navigation."""

    session_id: str
    view: SessionView
    showing_forecast: bool
    location: Optional[LocationPayload] = None
    display: Optional[str] = None
    history: List[str] = Field(default_factory=list)

    @classmethod
    def from_session(cls, session: WeatherSession) -> "SessionSnapshot":
        state = session.state
        screen = session.display if isinstance(session.display, ScreenBuffer) else None
        return cls(
            session_id=session.session_id,
            view=state.view,
            showing_forecast=state.showing_forecast,
            location=LocationPayload.from_location(state.location) if state.location else None,
            display=screen.current if screen else None,
            history=screen.history() if screen else [],
        )
