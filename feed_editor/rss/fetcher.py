"""Raw feed retrieval over HTTP."""

import logging
from typing import Sequence

import httpx

from feed_editor.config import Settings, get_settings
from feed_editor.errors import NetworkError
from feed_editor.link import channel_feed_url, encode

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache"}


async def fetch_raw(url: str, settings: Settings | None = None) -> str:
    """Fetch a URL and return its body as text.

    Redirects are followed before the status is checked. No retries are
    attempted. The timeout comes from ``fetch_timeout_seconds`` and is
    disabled by default.

    Args:
        url: Feed URL to fetch
        settings: Settings to read the timeout from

    Returns:
        Response body text

    Raises:
        NetworkError: On transport failure or a non-2xx final status
    """
    settings = settings or get_settings()

    try:
        async with httpx.AsyncClient(
            timeout=settings.fetch_timeout_seconds, follow_redirects=True
        ) as client:
            response = await client.get(url, headers=NO_CACHE_HEADERS)
            response.raise_for_status()
            return response.text
    except httpx.HTTPStatusError as exc:
        raise NetworkError(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise NetworkError(url, str(exc) or type(exc).__name__) from exc


async def fetch_channel_feed(channel_id: str, settings: Settings | None = None) -> str:
    """Fetch the Atom feed of a single channel."""
    return await fetch_raw(channel_feed_url(channel_id, settings), settings)


async def fetch_merged_feed(
    identifiers: Sequence[str], settings: Settings | None = None
) -> str:
    """Fetch the merged feed for a list of channel ids through the bridge."""
    link = encode(identifiers, settings)
    logger.debug("Fetching merged feed: %s", link)
    return await fetch_raw(link, settings)
