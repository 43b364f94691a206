"""
MemoPad Backend — Server-Side Session Store
=============================================

What:  Holds the authenticated identity of each client between requests.
How:   An abstract SessionStore interface plus an in-memory implementation.
       Each session is addressed by an opaque random handle; the handle is
       what travels (signed) in the client's cookie.
Who:   Written by the signup / login / editProfile / logout / deleteAccount
       handlers; read by getUserData and checkSession.

Session semantics:
    - A session is a SNAPSHOT of {user_id, name, email} taken when the client
      authenticated. It is not re-read from the database on each request,
      so it can lag behind the users table until editProfile refreshes it.
    - Lifetime is fixed at creation (settings.session_max_age, 24h). Reading
      or updating a session does not extend it.
    - An absent or expired session is a normal outcome: read() returns None.
    - Expired entries are dropped when read and swept on every create(), so
      abandoned sessions do not accumulate.

Production Upgrade Path:
    InMemorySessionStore lives in one process. Multi-worker deployments need
    a shared implementation of SessionStore (e.g. a database table or Redis
    with key TTLs); handlers only depend on the abstract interface.
"""

import logging
import secrets
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionData:
    """Identity snapshot held for one client."""
    user_id: int
    name: str
    email: str
    created_at: float
    expires_at: float

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None and bool(self.name) and bool(self.email)

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class SessionStore(ABC):
    """
    Contract for server-side session storage.

    Implementations must treat expiry as absence: an expired handle behaves
    exactly like an unknown one for read(), update() and destroy().
    """

    @abstractmethod
    async def create(self, user_id: int, name: str, email: str) -> str:
        """Start a session for an authenticated user and return its handle."""
        ...

    @abstractmethod
    async def read(self, handle: str) -> Optional[SessionData]:
        """Return the live session for `handle`, or None."""
        ...

    @abstractmethod
    async def update(self, handle: str, **fields) -> Optional[SessionData]:
        """
        Overwrite identity fields (name, email) of a live session.

        Returns the updated session, or None if the handle is not live.
        Does not change the expiry.
        """
        ...

    @abstractmethod
    async def destroy(self, handle: str) -> bool:
        """Drop a session. Returns True if a live session was removed."""
        ...

    @abstractmethod
    async def purge_expired(self) -> int:
        """Remove every expired session and return how many were removed."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Number of live sessions."""
        ...


class InMemorySessionStore(SessionStore):
    """
    Dict-backed session store for a single-process deployment.

    Args:
        max_age: Session lifetime in seconds (default: settings.session_max_age)
        clock:   Returns the current time in seconds; injectable for tests
    """

    UPDATABLE_FIELDS = frozenset({"name", "email"})

    def __init__(
        self,
        max_age: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.max_age = max_age if max_age is not None else settings.session_max_age
        self.clock = clock
        self._sessions: Dict[str, SessionData] = {}

    async def create(self, user_id: int, name: str, email: str) -> str:
        await self.purge_expired()
        now = self.clock()
        handle = secrets.token_urlsafe(32)
        self._sessions[handle] = SessionData(
            user_id=user_id,
            name=name,
            email=email,
            created_at=now,
            expires_at=now + self.max_age,
        )
        logger.debug("Session created for user %s", user_id)
        return handle

    async def read(self, handle: str) -> Optional[SessionData]:
        data = self._sessions.get(handle)
        if data is None:
            return None
        if data.is_expired(self.clock()):
            del self._sessions[handle]
            logger.debug("Session for user %s expired", data.user_id)
            return None
        return data

    async def update(self, handle: str, **fields) -> Optional[SessionData]:
        unknown = set(fields) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update session fields: {sorted(unknown)}")

        data = await self.read(handle)
        if data is None:
            return None
        updated = replace(data, **fields)
        self._sessions[handle] = updated
        return updated

    async def destroy(self, handle: str) -> bool:
        data = self._sessions.pop(handle, None)
        return data is not None and not data.is_expired(self.clock())

    async def purge_expired(self) -> int:
        now = self.clock()
        expired = [h for h, data in self._sessions.items() if data.is_expired(now)]
        for handle in expired:
            del self._sessions[handle]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)

    async def count(self) -> int:
        await self.purge_expired()
        return len(self._sessions)


# Process-wide store; handlers receive it through app.sessions.get_session_store
session_store = InMemorySessionStore()
