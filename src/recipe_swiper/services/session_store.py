"""In-memory arena of swiping sessions."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from recipe_swiper.domain.sessions import SwipeSession


class SessionStore(Protocol):
    """Storage for live swiping sessions keyed by id."""

    def get(self, session_id: UUID) -> SwipeSession | None:
        """Return a live session if present and not expired."""

    def put(self, session: SwipeSession) -> None:
        """Store or replace a session."""

    def delete(self, session_id: UUID) -> None:
        """Drop a session."""

    def count(self) -> int:
        """Return the number of live sessions."""


@dataclass
class _SessionEntry:
    session: SwipeSession
    expires_at: datetime


@dataclass
class InMemorySessionStore(SessionStore):
    """Session store that forgets sessions after a period of inactivity."""

    ttl_seconds: int
    _entries: dict[UUID, _SessionEntry]

    def __init__(self, ttl_seconds: int = 3600) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries = {}

    def get(self, session_id: UUID) -> SwipeSession | None:
        """Return a session and extend its expiry."""
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        now = datetime.now(tz=UTC)
        if now >= entry.expires_at:
            self._entries.pop(session_id, None)
            return None
        entry.expires_at = now + timedelta(seconds=self.ttl_seconds)
        return entry.session

    def put(self, session: SwipeSession) -> None:
        """Store a session with a fresh expiry."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=self.ttl_seconds)
        self._entries[session.id] = _SessionEntry(session=session, expires_at=expires_at)

    def delete(self, session_id: UUID) -> None:
        """Drop a session if present."""
        self._entries.pop(session_id, None)

    def count(self) -> int:
        """Return the number of sessions that have not expired."""
        now = datetime.now(tz=UTC)
        expired = [
            session_id
            for session_id, entry in self._entries.items()
            if now >= entry.expires_at
        ]
        for session_id in expired:
            self._entries.pop(session_id, None)
        return len(self._entries)
