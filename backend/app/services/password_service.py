"""
MemoPad Backend — Password Hashing Service
============================================

What:  One-way salted hashing and verification of plaintext passwords.
How:   bcrypt with a fixed work factor (settings.bcrypt_rounds, default 10).
       The bcrypt calls run in a worker thread so a hash (~60ms at
       cost 10) never stalls the event loop.
Who:   Called by UserService on signup, login and profile edit.

Failure policy:
    - hash(): any bcrypt failure becomes HashingError (HTTP 500). A digest
      is never silently skipped.
    - verify(): a mismatch, an empty input, or a malformed stored digest
      all return False.
"""

import asyncio
import logging
from typing import Optional

import bcrypt

from app.config import settings
from app.exceptions import HashingError

logger = logging.getLogger(__name__)


class PasswordService:
    """bcrypt wrapper with an async interface."""

    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds if rounds is not None else settings.bcrypt_rounds

    def _hash_sync(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _verify_sync(plaintext: str, digest: str) -> bool:
        return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))

    async def hash(self, plaintext: str) -> str:
        """
        Produce a salted bcrypt digest of `plaintext`.

        Raises:
            HashingError: bcrypt failed or the input was empty
        """
        if not plaintext:
            raise HashingError(message="Password cannot be empty")
        try:
            return await asyncio.to_thread(self._hash_sync, plaintext)
        except Exception as e:
            logger.error("Password hashing failed: %s", type(e).__name__)
            raise HashingError(context={"error_type": type(e).__name__}) from e

    async def verify(self, plaintext: str, digest: str) -> bool:
        """Return True only if `plaintext` hashes to `digest`."""
        if not plaintext or not digest:
            return False
        try:
            return await asyncio.to_thread(self._verify_sync, plaintext, digest)
        except ValueError as e:
            # Stored digest is not a bcrypt hash
            logger.warning("Password verification error: %s", e)
            return False


password_service = PasswordService()
