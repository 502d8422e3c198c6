"""Tests for SessionStore: change-tracking scope and ambient transactions."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from order_book import Customer
from repokit.infrastructure.persistence.store import SessionStore


def _mock_session():
    session = AsyncMock()
    session.add = MagicMock()
    session.expunge = MagicMock()
    session.info = {}
    session.sync_session = MagicMock(autoflush=False)
    return session


# --- change tracking ---

async def test_change_tracking_enabled_inside_scope_and_disabled_after():
    session = _mock_session()
    store = SessionStore(session)

    async with store.change_tracking():
        assert session.sync_session.autoflush is True

    assert session.sync_session.autoflush is False


async def test_change_tracking_disabled_even_when_commit_fails():
    session = _mock_session()
    session.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk full"))
    store = SessionStore(session)

    with pytest.raises(OperationalError):
        async with store.change_tracking():
            await store.commit()

    assert session.sync_session.autoflush is False


async def test_queries_inside_change_tracking_see_pending_changes(session):
    store = SessionStore(session)
    store.add(Customer(name="Ada"))

    assert await store.scalars(select(Customer)) == []
    async with store.change_tracking():
        assert [c.name for c in await store.scalars(select(Customer))] == ["Ada"]


# --- commit / transactions ---

async def test_commit_outside_transaction_commits_session():
    session = _mock_session()
    await SessionStore(session).commit()
    session.commit.assert_awaited_once()
    session.flush.assert_not_awaited()


async def test_commit_inside_transaction_only_flushes():
    session = _mock_session()
    store = SessionStore(session)

    async with store.begin_transaction():
        await store.commit()
        session.flush.assert_awaited_once()
        session.commit.assert_not_awaited()

    session.commit.assert_awaited_once()


async def test_transaction_is_shared_by_stores_on_the_same_session():
    session = _mock_session()

    async with SessionStore(session).begin_transaction():
        await SessionStore(session).commit()

    session.flush.assert_awaited_once()
    session.commit.assert_awaited_once()


async def test_nested_transaction_commits_once_at_the_outermost_scope():
    session = _mock_session()
    store = SessionStore(session)

    async with store.begin_transaction():
        async with store.begin_transaction():
            pass
        session.commit.assert_not_awaited()

    session.commit.assert_awaited_once()
    assert session.info["repokit.transaction_depth"] == 0


async def test_transaction_rolls_back_and_reraises_on_error():
    session = _mock_session()
    store = SessionStore(session)

    with pytest.raises(RuntimeError):
        async with store.begin_transaction():
            raise RuntimeError("boom")

    session.rollback.assert_awaited_once()
    session.commit.assert_not_awaited()


# --- pass-through ---

async def test_find_uses_session_get():
    session = _mock_session()
    session.get.return_value = "row"
    assert await SessionStore(session).find(object, 1) == "row"
    session.get.assert_awaited_once_with(object, 1)


async def test_count_returns_zero_when_scalar_is_none():
    from sqlalchemy import select

    from order_book import Customer

    session = _mock_session()
    session.scalar.return_value = None
    assert await SessionStore(session).count(select(Customer)) == 0


def test_detach_expunges_each_entity():
    session = _mock_session()
    SessionStore(session).detach(["a", "b"])
    assert session.expunge.call_count == 2
