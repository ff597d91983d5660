from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.schemas import SessionSnapshot
from services.registry import SessionRegistry, build_default_registry


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_registry() -> SessionRegistry:
    return build_default_registry()


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    registry: SessionRegistry = Depends(get_registry),
) -> HTMLResponse:
    snapshots = [
        SessionSnapshot.from_session(registry.get(session_id))
        for session_id in registry.session_ids()
    ]
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {"sessions": snapshots},
    )


@router.get("/ui/sessions/{session_id}", name="ui_session_detail", response_class=HTMLResponse)
async def ui_session_detail(
    request: Request,
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> HTMLResponse:
    try:
        session = registry.get(session_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return templates.TemplateResponse(
        request,
        "ui/detail.html",
        {"session": SessionSnapshot.from_session(session)},
    )
