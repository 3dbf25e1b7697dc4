"""
Tests for DatabasePool and schema setup.
"""

import pytest

from facebook_auth.db import DatabasePool, ensure_schema


@pytest.mark.asyncio
async def test_acquire_before_open_raises():
    with pytest.raises(RuntimeError):
        await DatabasePool(dsn="postgresql://unused").acquire()


@pytest.mark.asyncio
async def test_open_without_dsn_raises():
    with pytest.raises(RuntimeError):
        await DatabasePool(dsn="").open()


@pytest.mark.asyncio
async def test_ensure_schema_releases_connection(db_pool, fake_pool):
    await ensure_schema(db_pool)

    assert fake_pool.acquired == fake_pool.released == 1


@pytest.mark.asyncio
async def test_close_drops_pool(db_pool):
    assert db_pool.is_open
    await db_pool.close()
    assert not db_pool.is_open


@pytest.mark.asyncio
async def test_fetch_val_returns_inserted_id(db_pool, site_user_table):
    site_user_table.next_id = 42
    db = await db_pool.acquire()
    try:
        new_id = await db.fetch_val(
            "INSERT INTO site_user (facebook_user_id, email, full_name) VALUES ($1, $2, $3) RETURNING id",
            "F1", "a@x.com", "Ann",
        )
    finally:
        await db.close()

    assert new_id == 42
