"""In-memory registry of editor sessions."""

import logging
from collections import OrderedDict

from feed_editor.config import Settings, get_settings
from feed_editor.errors import SessionNotFoundError

from .session import EditorSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Holds editor sessions for the lifetime of the process.

    When ``max_sessions`` is reached the least recently used session is
    evicted.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._sessions: OrderedDict[str, EditorSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> EditorSession:
        session = EditorSession(self.settings)
        self._sessions[session.id] = session
        while len(self._sessions) > self.settings.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted editor session {evicted}")
        return session

    def get(self, session_id: str) -> EditorSession:
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
