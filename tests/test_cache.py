from __future__ import annotations

import pytest

from teslable._cache import SessionCache


def test_get_missing_returns_none() -> None:
    assert SessionCache(2).get("VIN1") is None


def test_evicts_least_recently_used() -> None:
    cache = SessionCache(2)
    cache.put("VIN1", "a")
    cache.put("VIN2", "b")
    assert cache.get("VIN1") == "a"
    cache.put("VIN3", "c")

    assert len(cache) == 2
    assert "VIN1" in cache
    assert "VIN2" not in cache
    assert cache.get("VIN3") == "c"


def test_put_replaces_existing_entry() -> None:
    cache = SessionCache(2)
    cache.put("VIN1", "a")
    cache.put("VIN1", "b")
    assert len(cache) == 1
    assert cache.get("VIN1") == "b"


def test_invalidate() -> None:
    cache = SessionCache(2)
    cache.put("VIN1", "a")
    cache.invalidate("VIN1")
    cache.invalidate("VIN1")
    assert "VIN1" not in cache


def test_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        SessionCache(0)
