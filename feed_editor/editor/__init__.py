"""Editor session state."""

from .session import ChannelSlot, EditorSession, SlotState
from .store import SessionStore

__all__ = ["ChannelSlot", "EditorSession", "SessionStore", "SlotState"]
