"""Health check endpoints for the feed editor API."""

from fastapi import APIRouter, Depends

from feed_editor.api.dependencies import get_session_store
from feed_editor.editor import SessionStore

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def health_check():
    return {"ok": True}


@router.get("/readyz")
async def readiness_check(store: SessionStore = Depends(get_session_store)):
    """Report readiness along with the number of live editor sessions."""
    return {"ok": True, "sessions": len(store)}
