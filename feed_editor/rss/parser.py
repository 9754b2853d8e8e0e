"""Atom feed parsing for merged feeds and channel metadata."""

import locale
import logging
import xml.etree.ElementTree as ET
from datetime import datetime

from feed_editor.config import Settings
from feed_editor.errors import XmlParseError
from feed_editor.link import channel_thumbnail_url

from .models import ChannelMeta, FeedEntry

logger = logging.getLogger(__name__)

UNKNOWN_CHANNEL = "Unknown Channel"


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in elem if _local_name(child.tag) == name]


def _child(elem: ET.Element | None, name: str) -> ET.Element | None:
    if elem is None:
        return None
    for child in elem:
        if _local_name(child.tag) == name:
            return child
    return None


def _text(elem: ET.Element | None) -> str:
    if elem is None or elem.text is None:
        return ""
    return elem.text.strip()


def _parse_root(xml: str) -> ET.Element:
    try:
        return ET.fromstring(xml)
    except ET.ParseError as exc:
        raise XmlParseError(f"Invalid feed document: {exc}") from exc


def use_system_locale() -> bool:
    """Switch ``LC_TIME`` to the environment's locale for ``format_published``.

    Python starts in the C locale, so without this ``%c`` renders the same
    everywhere.

    Returns:
        True if the environment's locale was applied
    """
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        logger.warning("System locale unavailable, timestamps use the C locale")
        return False
    return True


def format_published(value: str) -> str:
    """Render an ISO 8601 timestamp in local time using the locale's format.

    Values that are not ISO 8601 timestamps are returned unchanged.
    """
    if not value:
        return ""
    try:
        published = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return published.astimezone().strftime("%c")


def _alternate_href(entry: ET.Element) -> str:
    for link in _children(entry, "link"):
        if link.get("rel") == "alternate":
            return link.get("href", "")
    return ""


def parse_entries(xml: str) -> list[FeedEntry]:
    """Parse an Atom feed document into display entries.

    Entries keep document order. An entry with no ``rel="alternate"`` link
    gets an empty ``link`` rather than being dropped.

    Args:
        xml: Raw feed document text

    Returns:
        List of FeedEntry objects, empty if the feed has no entries

    Raises:
        XmlParseError: If ``xml`` is not well-formed
    """
    root = _parse_root(xml)

    entries = _children(root, "entry") if _local_name(root.tag) == "feed" else []
    if not entries:
        logger.info("No entries found in feed")
        return []

    items = []
    for entry in entries:
        items.append(
            FeedEntry(
                title=_text(_child(entry, "title")),
                link=_alternate_href(entry),
                published_at=format_published(_text(_child(entry, "published"))),
                channel_title=_text(_child(_child(entry, "author"), "name")),
            )
        )
    return items


def parse_channel_meta(
    xml: str, channel_id: str, settings: Settings | None = None
) -> ChannelMeta:
    """Parse a single channel's feed into its display metadata.

    The thumbnail URL is built from ``channel_id``, not read from the feed.

    Raises:
        XmlParseError: If ``xml`` is not well-formed
    """
    root = _parse_root(xml)
    return ChannelMeta(
        title=_text(_child(root, "title")) or UNKNOWN_CHANNEL,
        link=_text(_child(_child(root, "author"), "uri")),
        thumbnail_url=channel_thumbnail_url(channel_id, settings),
    )
