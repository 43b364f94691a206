"""
MemoPad Backend — Session Cookie Transport
============================================

What:  Connects HTTP clients to their server-side session.
How:   The session handle is signed with itsdangerous and sent in an
       httpOnly cookie. On each request the cookie is unsigned and the
       handle looked up in the SessionStore.
Who:   Used by the account route handlers through FastAPI dependencies.

Cookie attributes:
    name      settings.session_cookie_name (default "memopad.sid")
    max_age   settings.session_max_age (24h)
    httponly  True
    secure    False (the API is served over plain HTTP behind the frontend dev server)
    samesite  lax

A cookie that fails signature verification is treated as no cookie at all.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request, Response
from itsdangerous import BadSignature, TimestampSigner

from app.config import settings
from app.services.session_store import SessionData, SessionStore, session_store

logger = logging.getLogger(__name__)

SESSION_SALT = "memopad.session.v1"


def _signer() -> TimestampSigner:
    return TimestampSigner(settings.session_secret, salt=SESSION_SALT)


def sign_handle(handle: str) -> str:
    return _signer().sign(handle).decode("utf-8")


def unsign_handle(value: Optional[str]) -> Optional[str]:
    """Return the handle inside a signed cookie value, or None if invalid."""
    if not value:
        return None
    try:
        return _signer().unsign(value, max_age=settings.session_max_age).decode("utf-8")
    except BadSignature:
        logger.info("Rejected session cookie with invalid signature")
        return None


def set_session_cookie(response: Response, handle: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_handle(handle),
        max_age=settings.session_max_age,
        httponly=True,
        secure=False,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
    )


# ══════════════════════════════════════════════════════════════════════════
# FastAPI Dependencies
# ══════════════════════════════════════════════════════════════════════════


@dataclass
class ClientSession:
    """
    The calling client's session as seen by a handler.

    handle is the unsigned cookie handle (None if no valid cookie was sent);
    data is the live session (None if absent or expired).
    """
    handle: Optional[str]
    data: Optional[SessionData]

    @property
    def is_authenticated(self) -> bool:
        return self.data is not None and self.data.is_authenticated


def get_session_store() -> SessionStore:
    """Dependency returning the process-wide session store (overridden in tests)."""
    return session_store


async def get_client_session(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> ClientSession:
    """Dependency resolving the request's cookie to its live session, if any."""
    handle = unsign_handle(request.cookies.get(settings.session_cookie_name))
    data = await store.read(handle) if handle else None
    return ClientSession(handle=handle, data=data)
