"""
Shared fixtures: an in-memory stand-in for the asyncpg pool and the
site_user table, plus helpers for building resolvers.
"""

import json
from unittest.mock import AsyncMock

import pytest

from facebook_auth.auth import FacebookClient, IdentityCache, IdentityResolver, UserStore
from facebook_auth.db import DatabasePool


class FakeConnection:
    """Answers the two queries UserStore issues against site_user."""

    def __init__(self, table):
        self.table = table

    async def fetchrow(self, query, *args):
        assert query.lstrip().upper().startswith("SELECT"), query
        self.table.selects += 1
        if self.table.select_error:
            raise self.table.select_error
        return self.table.rows.get(args[0])

    async def fetchval(self, query, *args):
        assert query.lstrip().upper().startswith("INSERT"), query
        self.table.inserts += 1
        if self.table.insert_error:
            raise self.table.insert_error
        facebook_id, email, full_name = args
        row = {
            "id": self.table.next_id,
            "facebook_user_id": facebook_id,
            "email": email,
            "full_name": full_name,
        }
        self.table.next_id += 1
        self.table.rows[facebook_id] = row
        return row["id"]

    async def execute(self, query, *args):
        return "CREATE TABLE"


class FakeSiteUserTable:
    def __init__(self, next_id=1):
        self.rows = {}
        self.next_id = next_id
        self.selects = 0
        self.inserts = 0
        self.select_error = None
        self.insert_error = None

    def add(self, id, facebook_id, email, full_name):
        self.rows[facebook_id] = {
            "id": id,
            "facebook_user_id": facebook_id,
            "email": email,
            "full_name": full_name,
        }


class FakeAsyncpgPool:
    def __init__(self, table):
        self.table = table
        self.acquired = 0
        self.released = 0

    async def acquire(self):
        self.acquired += 1
        return FakeConnection(self.table)

    async def release(self, conn):
        self.released += 1

    async def close(self):
        pass


def profile_json(**fields):
    return json.dumps(fields)


@pytest.fixture
def site_user_table():
    return FakeSiteUserTable()


@pytest.fixture
def fake_pool(site_user_table):
    return FakeAsyncpgPool(site_user_table)


@pytest.fixture
def db_pool(fake_pool):
    return DatabasePool(dsn="", pool=fake_pool)


@pytest.fixture
def user_store(db_pool):
    return UserStore(db_pool)


@pytest.fixture
def facebook_client():
    client = AsyncMock(spec=FacebookClient)
    client.fetch_profile.return_value = profile_json(id="F1", name="Ann", email="a@x.com")
    return client


@pytest.fixture
def identity_cache():
    return IdentityCache()


@pytest.fixture
def resolver(facebook_client, user_store, identity_cache):
    return IdentityResolver(client=facebook_client, store=user_store, cache=identity_cache)
