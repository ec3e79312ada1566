"""Tests for the per-agent result cache."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from qdrant_memory.memory.result_cache import ResultCache


def test_set_then_get_returns_value():
    cache = ResultCache()

    assert cache.set("agent-1", "query", "[1, 2]") is True
    assert cache.get("agent-1", "query") == "[1, 2]"


def test_entries_are_scoped_per_agent():
    cache = ResultCache()
    cache.set("agent-1", "query", "first")
    cache.set("agent-2", "query", "second")

    assert cache.get("agent-1", "query") == "first"
    assert cache.get("agent-2", "query") == "second"
    assert cache.get("agent-3", "query") is None


def test_set_overwrites_existing_entry():
    cache = ResultCache()
    cache.set("agent", "key", "old")
    cache.set("agent", "key", "new")

    assert cache.get("agent", "key") == "new"
    assert len(cache) == 1


def test_delete_reports_whether_entry_existed():
    cache = ResultCache()
    cache.set("agent", "key", "value")

    assert cache.delete("agent", "key") is True
    assert cache.delete("agent", "key") is False
    assert cache.get("agent", "key") is None


def test_composite_key_format():
    assert ResultCache.build_key("agent", "a:b") == "agent:a:b"


def test_concurrent_writers_do_not_lose_entries():
    cache = ResultCache()

    def write(index: int) -> None:
        cache.set("agent", f"key-{index}", str(index))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(write, range(200)))

    assert len(cache) == 200
    cache.clear()
    assert len(cache) == 0
