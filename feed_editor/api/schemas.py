"""Request and response models for the editor API."""

from datetime import datetime

from pydantic import BaseModel, Field

from feed_editor.editor import ChannelSlot, EditorSession, SlotState
from feed_editor.rss.models import ChannelMeta, FeedEntry


class SlotValueRequest(BaseModel):
    """Request body for creating or editing a channel slot."""

    value: str = Field(default="", max_length=256)


class LinkRequest(BaseModel):
    """Request body for pasting an aggregator link."""

    link: str = Field(max_length=8192)


class LinkResponse(BaseModel):
    link: str


class DecodedLinkResponse(BaseModel):
    channel_ids: list[str]


class ChannelMetaResponse(BaseModel):
    channel_id: str
    meta: ChannelMeta | None


class EntriesResponse(BaseModel):
    link: str
    items: list[FeedEntry]


class SlotResponse(BaseModel):
    """A channel slot as shown in the editor."""

    key: str
    value: str
    state: SlotState
    meta: ChannelMeta | None

    @classmethod
    def from_slot(cls, slot: ChannelSlot) -> "SlotResponse":
        return cls(key=slot.key, value=slot.value, state=slot.state, meta=slot.meta)


class SessionResponse(BaseModel):
    """Full editor state: slots, the derived link and the last feed preview."""

    id: str
    max_channels: int
    slots: list[SlotResponse]
    link: str
    items: list[FeedEntry]
    refreshed_at: datetime | None

    @classmethod
    def from_session(cls, session: EditorSession) -> "SessionResponse":
        return cls(
            id=session.id,
            max_channels=session.settings.max_channels,
            slots=[SlotResponse.from_slot(slot) for slot in session.slots],
            link=session.aggregator_link(),
            items=session.entries,
            refreshed_at=session.refreshed_at,
        )
