"""Editor session state: channel slots, their metadata and the feed preview."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from feed_editor.config import Settings, get_settings
from feed_editor.errors import (
    NetworkError,
    SlotLimitError,
    SlotNotFoundError,
    XmlParseError,
)
from feed_editor.link import decode, encode
from feed_editor.rss.fetcher import fetch_channel_feed, fetch_merged_feed
from feed_editor.rss.models import ChannelMeta, FeedEntry
from feed_editor.rss.parser import parse_channel_meta, parse_entries

logger = logging.getLogger(__name__)


class SlotState(str, Enum):
    """Loading state of a slot's metadata lookup."""

    IDLE = "idle"
    LOADING = "loading"
    RESOLVED = "resolved"
    FAILED = "failed"


def _new_key() -> str:
    return uuid4().hex


@dataclass
class ChannelSlot:
    """One channel id input, identified by a key that survives reordering."""

    value: str = ""
    key: str = field(default_factory=_new_key)
    meta: ChannelMeta | None = None
    state: SlotState = SlotState.IDLE
    generation: int = 0


class EditorSession:
    """Mutable state behind one editor page.

    Slots are addressed by key, never by position. Every change to a slot's
    value bumps its generation, and a metadata lookup only applies its result
    if the generation it started with is still current.
    """

    def __init__(self, settings: Settings | None = None, session_id: str | None = None):
        self.settings = settings or get_settings()
        self.id = session_id or uuid4().hex
        self.slots: list[ChannelSlot] = [
            ChannelSlot() for _ in range(self.settings.max_channels)
        ]
        self.entries: list[FeedEntry] = []
        self.refreshed_at: datetime | None = None
        self._refresh_generation = 0

    def _find(self, key: str) -> ChannelSlot | None:
        for slot in self.slots:
            if slot.key == key:
                return slot
        return None

    def get_slot(self, key: str) -> ChannelSlot:
        slot = self._find(key)
        if slot is None:
            raise SlotNotFoundError(key)
        return slot

    def identifiers(self) -> list[str]:
        return [slot.value for slot in self.slots]

    def aggregator_link(self) -> str:
        return encode(self.identifiers(), self.settings)

    def add_slot(self, value: str = "") -> ChannelSlot:
        """Append a slot.

        Raises:
            SlotLimitError: If the session already holds ``max_channels`` slots
        """
        if len(self.slots) >= self.settings.max_channels:
            raise SlotLimitError(
                f"At most {self.settings.max_channels} channels are allowed"
            )
        slot = ChannelSlot(value=value)
        self.slots.append(slot)
        return slot

    def remove_slot(self, key: str) -> None:
        slot = self.get_slot(key)
        self.slots.remove(slot)

    def set_value(self, key: str, value: str) -> ChannelSlot:
        """Change a slot's channel id, invalidating any lookup in flight."""
        slot = self.get_slot(key)
        if slot.value != value:
            slot.value = value
            slot.meta = None
            slot.state = SlotState.IDLE
            slot.generation += 1
        return slot

    def load_link(self, link: str) -> list[ChannelSlot]:
        """Replace all slots with the channel ids decoded from ``link``.

        Raises:
            MalformedLinkError: If ``link`` is not a URL; slots are unchanged
        """
        channel_ids = decode(link, self.settings)
        self.slots = [ChannelSlot(value=channel_id) for channel_id in channel_ids]
        return self.slots

    async def refresh_feed(self) -> list[FeedEntry]:
        """Fetch and parse the merged feed for the current slots.

        On success the session's entries are replaced. On failure the error
        propagates and the previous entries are kept. If a newer refresh
        started while this one was in flight, its result is not applied and
        the session's current entries are returned instead.

        Raises:
            NetworkError: If the bridge cannot be reached
            XmlParseError: If the bridge returns a malformed document
        """
        self._refresh_generation += 1
        generation = self._refresh_generation

        xml = await fetch_merged_feed(self.identifiers(), self.settings)
        items = parse_entries(xml)

        if generation != self._refresh_generation:
            logger.debug(f"Discarding superseded refresh for session {self.id}")
            return self.entries

        self.entries = items
        self.refreshed_at = datetime.now(timezone.utc)
        return items

    async def lookup_meta(self, key: str) -> ChannelMeta | None:
        """Look up display metadata for one slot.

        Failures are logged and leave the slot without metadata. Results for a
        slot that was removed or changed meanwhile are discarded, and a key
        that no longer exists is ignored.
        """
        slot = self._find(key)
        if slot is None:
            logger.debug(f"Slot {key} removed before its lookup ran")
            return None

        channel_id = slot.value
        if not channel_id.strip():
            slot.meta = None
            slot.state = SlotState.IDLE
            return None

        generation = slot.generation
        slot.state = SlotState.LOADING

        meta: ChannelMeta | None = None
        try:
            xml = await fetch_channel_feed(channel_id, self.settings)
            meta = parse_channel_meta(xml, channel_id, self.settings)
        except (NetworkError, XmlParseError):
            logger.warning(f"Channel lookup failed for {channel_id!r}", exc_info=True)

        current = self._find(key)
        if current is None or current.generation != generation:
            logger.debug(f"Discarding stale lookup for {channel_id!r}")
            return None

        current.meta = meta
        current.state = SlotState.RESOLVED if meta else SlotState.FAILED
        return meta

    async def lookup_all_meta(self) -> None:
        """Run metadata lookups for every non-blank slot concurrently."""
        keys = [slot.key for slot in self.slots if slot.value.strip()]
        await asyncio.gather(*(self.lookup_meta(key) for key in keys))
