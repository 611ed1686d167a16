"""Health probe."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health probe")
async def health(request: Request) -> dict[str, str]:
    settings = request.app.state.container.settings
    return {"status": "ok", "version": settings.version}
