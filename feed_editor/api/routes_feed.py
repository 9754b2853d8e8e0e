"""Feed preview and channel metadata endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from feed_editor.api.schemas import ChannelMetaResponse, EntriesResponse
from feed_editor.config import get_settings
from feed_editor.errors import NetworkError, XmlParseError
from feed_editor.link import encode
from feed_editor.rss import (
    fetch_channel_feed,
    fetch_merged_feed,
    parse_channel_meta,
    parse_entries,
)

logger = logging.getLogger(__name__)

FEED_ERROR_DETAIL = (
    "Error fetching feed. Please check your YouTube channel IDs and try again."
)

router = APIRouter(prefix="/api", tags=["feed"])
limiter = Limiter(key_func=get_remote_address)


@router.get("/feed", response_model=EntriesResponse)
@limiter.limit("30/minute")
async def preview_feed(
    request: Request,
    channel_id: list[str] = Query(default=[], description="Channel ids, in order"),
) -> EntriesResponse:
    """
    Fetch the merged feed for the given channel ids and return its entries.

    Entries keep the order the bridge returns them in.

    Returns:
        The aggregator link used and the parsed entries
    """
    settings = get_settings()
    if len(channel_id) > settings.max_channels:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_channels} channels are allowed",
        )

    link = encode(channel_id)
    try:
        xml = await fetch_merged_feed(channel_id)
        items = parse_entries(xml)
    except (NetworkError, XmlParseError):
        logger.error("Failed to load merged feed", exc_info=True)
        raise HTTPException(status_code=502, detail=FEED_ERROR_DETAIL)

    return EntriesResponse(link=link, items=items)


@router.get("/channels/{channel_id}", response_model=ChannelMetaResponse)
@limiter.limit("120/minute")
async def get_channel_meta(request: Request, channel_id: str) -> ChannelMetaResponse:
    """
    Look up a channel's title and links from its feed.

    This is best effort: if the feed cannot be fetched or parsed, ``meta``
    is null rather than an error.
    """
    meta = None
    try:
        xml = await fetch_channel_feed(channel_id)
        meta = parse_channel_meta(xml, channel_id)
    except (NetworkError, XmlParseError):
        logger.warning(f"Channel lookup failed for {channel_id!r}", exc_info=True)

    return ChannelMetaResponse(channel_id=channel_id, meta=meta)
