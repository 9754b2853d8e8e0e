"""Stateless aggregator link encode/decode endpoints."""

from fastapi import APIRouter, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from feed_editor.api.schemas import DecodedLinkResponse, LinkResponse
from feed_editor.config import get_settings
from feed_editor.errors import MalformedLinkError
from feed_editor.link import decode, encode

router = APIRouter(prefix="/api/link", tags=["link"])
limiter = Limiter(key_func=get_remote_address)


@router.get("/encode", response_model=LinkResponse)
@limiter.limit("120/minute")
async def encode_link(
    request: Request,
    channel_id: list[str] = Query(default=[], description="Channel ids, in order"),
) -> LinkResponse:
    """
    Build the merged-feed link for a list of channel ids.

    Blank ids are skipped. At most ``max_channels`` ids are accepted.
    """
    settings = get_settings()
    if len(channel_id) > settings.max_channels:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_channels} channels are allowed",
        )
    return LinkResponse(link=encode(channel_id))


@router.get("/decode", response_model=DecodedLinkResponse)
@limiter.limit("120/minute")
async def decode_link(
    request: Request,
    link: str = Query(max_length=8192, description="Aggregator link to parse"),
) -> DecodedLinkResponse:
    """
    Recover the channel ids from a merged-feed link.

    Always returns ``max_channels`` slots; slots with no usable feed
    parameter are empty strings.
    """
    try:
        channel_ids = decode(link)
    except MalformedLinkError:
        raise HTTPException(status_code=400, detail="Invalid RSS Bridge link")
    return DecodedLinkResponse(channel_ids=channel_ids)
