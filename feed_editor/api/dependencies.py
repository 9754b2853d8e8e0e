"""FastAPI dependencies for API routers."""

from feed_editor.config import get_settings
from feed_editor.editor import SessionStore

_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Dependency for FastAPI routes to get the process-wide session store.

    Returns:
        The shared SessionStore instance
    """
    global _session_store

    if _session_store is None:
        _session_store = SessionStore(get_settings())

    return _session_store
