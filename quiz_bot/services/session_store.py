import asyncio
import weakref
from typing import Optional

from quiz_bot.models import Session


class SessionStore:
    """
    In-memory quiz sessions keyed by user id.

    A missing entry means the user has no active session. Callers that
    read, transition and write back a session must hold `lock(user_id)` so
    that one user's messages are handled in order and never overlap.
    """

    def __init__(self) -> None:
        self._sessions: dict[int, Session] = {}
        # A lock lives only while some coroutine holds or waits on it
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def get(self, user_id: int) -> Optional[Session]:
        return self._sessions.get(user_id)

    def set(self, user_id: int, session: Session) -> None:
        self._sessions[user_id] = session

    def delete(self, user_id: int) -> None:
        self._sessions.pop(user_id, None)

    def lock(self, user_id: int) -> asyncio.Lock:
        """Get the lock serializing this user's messages."""
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
