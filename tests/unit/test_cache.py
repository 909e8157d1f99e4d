"""
Unit tests for cache stores.
"""
import pytest

from catalog.cache import FileCacheStore, MemoryCacheStore
from catalog.exceptions import CacheWriteError


class TestMemoryCacheStore:
    """Test suite for MemoryCacheStore implementation."""

    def test_put_and_get(self):
        """Test basic cache put and get operations."""
        cache = MemoryCacheStore(max_entries=10)
        cache.put("key1", "value1")
        assert cache.get("key1") == "value1"
        assert cache.get("nonexistent") is None

    def test_remove(self):
        cache = MemoryCacheStore()
        cache.put("key1", "value1")
        cache.remove("key1")
        assert cache.get("key1") is None
        cache.remove("key1")  # Should not raise

    def test_lru_eviction(self):
        """Test LRU eviction when max_entries is reached."""
        cache = MemoryCacheStore(max_entries=2)
        cache.put("key1", "value1")
        cache.put("key2", "value2")

        # Access key1 so key2 becomes least recently used
        cache.get("key1")
        cache.put("key3", "value3")

        assert cache.get("key1") == "value1"
        assert cache.get("key2") is None
        assert cache.get("key3") == "value3"

    def test_update_existing_key(self):
        cache = MemoryCacheStore(max_entries=1)
        cache.put("key1", "value1")
        cache.put("key1", "value1_updated")
        assert cache.get("key1") == "value1_updated"

    def test_contains_and_clear(self):
        cache = MemoryCacheStore()
        cache.put("key1", "value1")
        assert "key1" in cache
        cache.clear()
        assert "key1" not in cache


class TestFileCacheStore:
    """Test suite for FileCacheStore implementation."""

    def test_put_and_get(self, file_cache):
        file_cache.put("cached_albums", '{"x": 1}')
        assert file_cache.get("cached_albums") == '{"x": 1}'
        assert (file_cache.directory / "cached_albums.json").exists()

    def test_entries_are_scoped(self, tmp_test_dir):
        first = FileCacheStore(tmp_test_dir, scope="one")
        second = FileCacheStore(tmp_test_dir, scope="two")
        first.put("key", "a")
        assert second.get("key") is None

    def test_persists_across_instances(self, tmp_test_dir):
        FileCacheStore(tmp_test_dir, scope="s").put("key", "value")
        assert FileCacheStore(tmp_test_dir, scope="s").get("key") == "value"

    def test_missing_key_and_directory(self, tmp_test_dir):
        cache = FileCacheStore(tmp_test_dir / "does-not-exist")
        assert cache.get("key") is None
        cache.remove("key")
        cache.clear()

    def test_overwrite_leaves_no_temp_files(self, file_cache):
        file_cache.put("key", "one")
        file_cache.put("key", "two")
        assert file_cache.get("key") == "two"
        assert [p.name for p in file_cache.directory.iterdir()] == ["key.json"]

    def test_remove_and_clear(self, file_cache):
        file_cache.put("a", "1")
        file_cache.put("b", "2")
        file_cache.remove("a")
        assert file_cache.get("a") is None
        file_cache.clear()
        assert file_cache.get("b") is None

    def test_rejects_unsafe_keys(self, file_cache):
        with pytest.raises(ValueError, match="Invalid cache key"):
            file_cache.put("../escape", "x")

    def test_write_failure_raises_cache_write_error(self, tmp_test_dir):
        blocker = tmp_test_dir / "blocker"
        blocker.write_text("a file where the cache directory should be")
        cache = FileCacheStore(blocker, scope="scope")
        with pytest.raises(CacheWriteError):
            cache.put("key", "value")
