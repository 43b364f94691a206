"""
MemoPad Backend — Password Service Unit Tests
===============================================

What:  bcrypt hashing and verification through PasswordService.
How:   Real bcrypt at the minimum cost (4) so the suite stays fast; one test
       checks the production work factor is encoded in the digest.
"""

from unittest.mock import patch

import pytest

from app.config import Settings
from app.exceptions import HashingError
from app.services.password_service import PasswordService


class TestPasswordService:

    def setup_method(self):
        self.service = PasswordService(rounds=4)

    @pytest.mark.asyncio
    async def test_hash_is_salted_and_not_plaintext(self):
        first = await self.service.hash("secret")
        second = await self.service.hash("secret")

        assert first != "secret"
        assert first != second
        assert first.startswith("$2")

    @pytest.mark.asyncio
    async def test_verify_roundtrip(self):
        digest = await self.service.hash("secret")

        assert await self.service.verify("secret", digest) is True
        assert await self.service.verify("Secret", digest) is False

    @pytest.mark.asyncio
    async def test_verify_rejects_empty_and_malformed(self):
        digest = await self.service.hash("secret")

        assert await self.service.verify("", digest) is False
        assert await self.service.verify("secret", "") is False
        assert await self.service.verify("secret", "not-a-bcrypt-hash") is False

    @pytest.mark.asyncio
    async def test_empty_password_cannot_be_hashed(self):
        with pytest.raises(HashingError):
            await self.service.hash("")

    @pytest.mark.asyncio
    async def test_bcrypt_failure_surfaces_as_hashing_error(self):
        with patch("app.services.password_service.bcrypt.hashpw", side_effect=RuntimeError("boom")):
            with pytest.raises(HashingError):
                await self.service.hash("secret")

    @pytest.mark.asyncio
    async def test_work_factor_is_encoded_in_digest(self):
        service = PasswordService(rounds=10)

        digest = await service.hash("secret")

        assert digest.split("$")[2] == "10"

    def test_default_work_factor_is_ten(self, monkeypatch):
        monkeypatch.delenv("BCRYPT_ROUNDS", raising=False)

        assert Settings(_env_file=None).bcrypt_rounds == 10
