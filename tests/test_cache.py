"""
Tests for IdentityCache.
"""

import pytest

from facebook_auth.auth import IdentityCache, InternalUserData


@pytest.fixture
def user():
    return InternalUserData(id=1, facebook_id="F1", email="a@x.com", full_name="Ann")


def test_set_and_get(identity_cache, user):
    identity_cache["T1"] = user

    assert identity_cache.get("T1") == user
    assert "T1" in identity_cache
    assert len(identity_cache) == 1


def test_rejects_unsaved_user(identity_cache):
    with pytest.raises(ValueError):
        identity_cache["T1"] = InternalUserData(facebook_id="F1", email="a@x.com", full_name="Ann")
    assert len(identity_cache) == 0


def test_evict(identity_cache, user):
    identity_cache["T1"] = user

    assert identity_cache.evict("T1") is True
    assert identity_cache.evict("T1") is False
    assert identity_cache.evict(None) is False
    assert identity_cache.get("T1") is None


def test_separate_instances_do_not_share_entries(user):
    a, b = IdentityCache(), IdentityCache()
    a["T1"] = user

    assert "T1" not in b
