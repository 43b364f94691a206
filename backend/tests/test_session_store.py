"""
MemoPad Backend — Session Store Unit Tests
============================================

What:  Tests for InMemorySessionStore (create, read, update, destroy, expiry).
How:   Uses the fake clock from conftest to cross the 24h boundary.
"""

import pytest

from app.services.session_store import InMemorySessionStore


class TestSessionLifecycle:

    @pytest.mark.asyncio
    async def test_create_then_read_returns_snapshot(self, session_store):
        handle = await session_store.create(1, "A", "a@x.com")

        data = await session_store.read(handle)

        assert data is not None
        assert (data.user_id, data.name, data.email) == (1, "A", "a@x.com")
        assert data.is_authenticated

    @pytest.mark.asyncio
    async def test_handles_are_unique_and_opaque(self, session_store):
        first = await session_store.create(1, "A", "a@x.com")
        second = await session_store.create(1, "A", "a@x.com")

        assert first != second
        assert "a@x.com" not in first
        assert len(first) >= 32

    @pytest.mark.asyncio
    async def test_read_unknown_handle_is_none(self, session_store):
        assert await session_store.read("no-such-handle") is None

    @pytest.mark.asyncio
    async def test_update_changes_identity_fields_only(self, session_store):
        handle = await session_store.create(1, "A", "a@x.com")
        before = await session_store.read(handle)

        updated = await session_store.update(handle, name="B", email="b@x.com")

        assert updated.name == "B"
        assert updated.email == "b@x.com"
        assert updated.user_id == 1
        assert updated.expires_at == before.expires_at

    @pytest.mark.asyncio
    async def test_update_rejects_user_id(self, session_store):
        handle = await session_store.create(1, "A", "a@x.com")

        with pytest.raises(ValueError):
            await session_store.update(handle, user_id=2)

    @pytest.mark.asyncio
    async def test_update_unknown_handle_is_none(self, session_store):
        assert await session_store.update("missing", name="B") is None

    @pytest.mark.asyncio
    async def test_destroy(self, session_store):
        handle = await session_store.create(1, "A", "a@x.com")

        assert await session_store.destroy(handle) is True
        assert await session_store.read(handle) is None
        assert await session_store.destroy(handle) is False


class TestSessionExpiry:

    @pytest.mark.asyncio
    async def test_session_lives_just_under_24_hours(self, session_store, fake_clock):
        handle = await session_store.create(1, "A", "a@x.com")

        fake_clock.advance(86_400 - 1)

        assert await session_store.read(handle) is not None

    @pytest.mark.asyncio
    async def test_session_expires_at_24_hours(self, session_store, fake_clock):
        handle = await session_store.create(1, "A", "a@x.com")

        fake_clock.advance(86_400)

        assert await session_store.read(handle) is None

    @pytest.mark.asyncio
    async def test_activity_does_not_extend_lifetime(self, session_store, fake_clock):
        handle = await session_store.create(1, "A", "a@x.com")

        for _ in range(23):
            fake_clock.advance(3_600)
            assert await session_store.read(handle) is not None
            await session_store.update(handle, name="A")

        fake_clock.advance(3_600)
        assert await session_store.read(handle) is None

    @pytest.mark.asyncio
    async def test_update_after_expiry_is_none(self, session_store, fake_clock):
        handle = await session_store.create(1, "A", "a@x.com")
        fake_clock.advance(90_000)

        assert await session_store.update(handle, name="B") is None

    @pytest.mark.asyncio
    async def test_purge_and_count(self, fake_clock):
        store = InMemorySessionStore(max_age=100, clock=fake_clock)
        await store.create(1, "A", "a@x.com")
        fake_clock.advance(50)
        await store.create(2, "B", "b@x.com")

        fake_clock.advance(60)

        assert await store.purge_expired() == 1
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_create_sweeps_abandoned_sessions(self, fake_clock):
        store = InMemorySessionStore(max_age=100, clock=fake_clock)

        for user_id in range(1000):
            await store.create(user_id, "A", "a@x.com")
            fake_clock.advance(200)

        assert len(store._sessions) <= 1
