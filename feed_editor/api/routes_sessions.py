"""Editor session endpoints backing the feed editor page."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from feed_editor.api.dependencies import get_session_store
from feed_editor.api.routes_feed import FEED_ERROR_DETAIL
from feed_editor.api.schemas import (
    LinkRequest,
    LinkResponse,
    SessionResponse,
    SlotResponse,
    SlotValueRequest,
)
from feed_editor.editor import EditorSession, SessionStore
from feed_editor.errors import (
    MalformedLinkError,
    NetworkError,
    SessionNotFoundError,
    SlotLimitError,
    SlotNotFoundError,
    XmlParseError,
)
from feed_editor.rss.models import FeedEntry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["sessions"])
limiter = Limiter(key_func=get_remote_address)


def _get_session(store: SessionStore, session_id: str) -> EditorSession:
    try:
        return store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("", response_model=SessionResponse, status_code=201)
@limiter.limit("30/minute")
async def create_session(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> SessionResponse:
    """
    Start a new editor session with ``max_channels`` empty slots.
    """
    session = store.create()
    logger.info(f"Created editor session {session.id}")
    return SessionResponse.from_session(session)


@router.get("/{session_id}", response_model=SessionResponse)
@limiter.limit("300/minute")
async def get_session(
    request: Request,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> SessionResponse:
    """Return the session's slots, link and last feed preview."""
    return SessionResponse.from_session(_get_session(store, session_id))


@router.delete("/{session_id}", status_code=204)
@limiter.limit("30/minute")
async def delete_session(
    request: Request,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> None:
    """Discard a session."""
    try:
        store.delete(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/{session_id}/slots", response_model=SlotResponse, status_code=201)
@limiter.limit("120/minute")
async def add_slot(
    request: Request,
    session_id: str,
    body: SlotValueRequest,
    background_tasks: BackgroundTasks,
    store: SessionStore = Depends(get_session_store),
) -> SlotResponse:
    """
    Append a channel slot.

    Returns 409 once the session holds ``max_channels`` slots.
    """
    session = _get_session(store, session_id)
    try:
        slot = session.add_slot(body.value)
    except SlotLimitError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if slot.value.strip():
        background_tasks.add_task(session.lookup_meta, slot.key)
    return SlotResponse.from_slot(slot)


@router.put("/{session_id}/slots/{key}", response_model=SlotResponse)
@limiter.limit("300/minute")
async def update_slot(
    request: Request,
    session_id: str,
    key: str,
    body: SlotValueRequest,
    background_tasks: BackgroundTasks,
    store: SessionStore = Depends(get_session_store),
) -> SlotResponse:
    """
    Change a slot's channel id.

    The channel's metadata is looked up after the response is sent; poll the
    session to see it resolve.
    """
    session = _get_session(store, session_id)
    try:
        slot = session.set_value(key, body.value)
    except SlotNotFoundError:
        raise HTTPException(status_code=404, detail="Slot not found")

    if slot.value.strip():
        background_tasks.add_task(session.lookup_meta, slot.key)
    return SlotResponse.from_slot(slot)


@router.delete("/{session_id}/slots/{key}", status_code=204)
@limiter.limit("120/minute")
async def remove_slot(
    request: Request,
    session_id: str,
    key: str,
    store: SessionStore = Depends(get_session_store),
) -> None:
    """Remove a slot. Other slots keep their keys."""
    session = _get_session(store, session_id)
    try:
        session.remove_slot(key)
    except SlotNotFoundError:
        raise HTTPException(status_code=404, detail="Slot not found")


@router.get("/{session_id}/link", response_model=LinkResponse)
@limiter.limit("120/minute")
async def get_link(
    request: Request,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> LinkResponse:
    """Return the merged-feed link for the session's current slots."""
    session = _get_session(store, session_id)
    return LinkResponse(link=session.aggregator_link())


@router.post("/{session_id}/link", response_model=SessionResponse)
@limiter.limit("60/minute")
async def load_link(
    request: Request,
    session_id: str,
    body: LinkRequest,
    background_tasks: BackgroundTasks,
    store: SessionStore = Depends(get_session_store),
) -> SessionResponse:
    """
    Replace the session's slots with the channels in a pasted link.

    Returns 400 if the link is not a URL; the slots are left as they were.
    """
    session = _get_session(store, session_id)
    try:
        session.load_link(body.link)
    except MalformedLinkError:
        raise HTTPException(status_code=400, detail="Invalid RSS Bridge link")

    background_tasks.add_task(session.lookup_all_meta)
    return SessionResponse.from_session(session)


@router.post("/{session_id}/refresh", response_model=list[FeedEntry])
@limiter.limit("30/minute")
async def refresh_feed(
    request: Request,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> list[FeedEntry]:
    """
    Fetch the merged feed and store its entries on the session.

    On failure a generic 502 is returned and the previous entries are kept.
    """
    session = _get_session(store, session_id)
    try:
        return await session.refresh_feed()
    except (NetworkError, XmlParseError):
        logger.error(f"Feed refresh failed for session {session.id}", exc_info=True)
        raise HTTPException(status_code=502, detail=FEED_ERROR_DETAIL)


@router.get("/{session_id}/entries", response_model=list[FeedEntry])
@limiter.limit("300/minute")
async def get_entries(
    request: Request,
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> list[FeedEntry]:
    """Return the entries from the last successful refresh."""
    return _get_session(store, session_id).entries
