"""Encode channel id lists into RSS-Bridge FeedMergeBridge links and back.

A link carries one nested per-channel feed URL per ``feed_<n>`` query
parameter, numbered from 1, between the fixed bridge parameters::

    https://rss-bridge.org/bridge01/?action=display&bridge=FeedMergeBridge
        &feed_name=yt&feed_1=<quoted feed url>&feed_2=...&format=Atom
"""

import logging
from typing import Sequence
from urllib.parse import SplitResult, parse_qsl, quote, urlsplit

from feed_editor.config import Settings, get_settings
from feed_editor.errors import MalformedLinkError

logger = logging.getLogger(__name__)

# Characters left unescaped by JavaScript's encodeURIComponent
_COMPONENT_SAFE = "!~*'()"


def _quote(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def _split_absolute(url: str) -> SplitResult | None:
    """Split ``url`` if it is an absolute URL with a host, else return None."""
    try:
        parts = urlsplit(url.strip())
        # Accessing the port validates it
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return parts


def _first_param(parts: SplitResult, name: str) -> str | None:
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key == name:
            return value
    return None


def channel_feed_url(channel_id: str, settings: Settings | None = None) -> str:
    """Build the YouTube Atom feed URL for a single channel."""
    settings = settings or get_settings()
    return f"{settings.video_feed_url}?channel_id={_quote(channel_id)}"


def channel_thumbnail_url(channel_id: str, settings: Settings | None = None) -> str:
    """Build the channel page URL shown alongside a channel's metadata."""
    settings = settings or get_settings()
    return f"{settings.channel_url.rstrip('/')}/{_quote(channel_id)}"


def encode(identifiers: Sequence[str], settings: Settings | None = None) -> str:
    """Encode channel ids into a single merged-feed link.

    Blank and whitespace-only ids are dropped; the rest keep their order and
    are numbered ``feed_1`` .. ``feed_n``.

    Args:
        identifiers: Channel ids in display order
        settings: Settings to read hosts and parameter names from

    Returns:
        The aggregator link
    """
    settings = settings or get_settings()
    channel_ids = [cid for cid in identifiers if cid.strip()]

    params = [
        f"action={_quote(settings.bridge_action)}",
        f"bridge={_quote(settings.bridge_name)}",
        f"feed_name={_quote(settings.feed_name)}",
    ]
    for index, channel_id in enumerate(channel_ids, start=1):
        feed_url = channel_feed_url(channel_id, settings)
        params.append(f"{settings.feed_param_prefix}{index}={_quote(feed_url)}")
    params.append(f"format={_quote(settings.feed_format)}")

    return f"{settings.bridge_url}?{'&'.join(params)}"


def decode(link: str, settings: Settings | None = None) -> list[str]:
    """Decode an aggregator link back into a fixed-size list of channel ids.

    The result always has ``max_channels`` slots; slot ``n - 1`` holds the
    ``channel_id`` of the feed URL in ``feed_<n>``, or ``""`` when that
    parameter is absent, is not an absolute URL, or carries no
    ``channel_id``.

    Raises:
        MalformedLinkError: If ``link`` itself is not an absolute URL
    """
    settings = settings or get_settings()
    parts = _split_absolute(link)
    if parts is None:
        raise MalformedLinkError(link)

    slots = [""] * settings.max_channels
    for index in range(1, settings.max_channels + 1):
        feed_param = _first_param(parts, f"{settings.feed_param_prefix}{index}")
        if not feed_param:
            continue

        feed_parts = _split_absolute(feed_param)
        if feed_parts is None:
            logger.debug("Ignoring feed_%d: not a URL (%r)", index, feed_param)
            continue

        channel_id = _first_param(feed_parts, "channel_id")
        if channel_id:
            slots[index - 1] = channel_id

    return slots
