"""
Unit tests for FavoritesManager.
"""
from catalog import codec
from catalog.cache import FAVORITES_KEY, MemoryCacheStore
from catalog.exceptions import CacheWriteError
from catalog.favorites import FavoritesManager


class TestFavoritesManager:
    """Test favorites toggling and persistence."""

    def test_starts_empty(self, memory_cache):
        favorites = FavoritesManager(memory_cache)
        assert len(favorites) == 0
        assert not favorites.is_favorite("a1")

    def test_toggle_adds_and_removes(self, memory_cache):
        favorites = FavoritesManager(memory_cache)
        assert favorites.toggle("a1") is True
        assert favorites.is_favorite("a1")
        assert favorites.toggle("a1") is False
        assert not favorites.is_favorite("a1")

    def test_toggle_persists_synchronously(self, memory_cache):
        favorites = FavoritesManager(memory_cache)
        favorites.toggle("b")
        favorites.toggle("a")
        assert codec.decode_favorites(memory_cache.get(FAVORITES_KEY)) == ["a", "b"]

    def test_loaded_by_new_session(self, file_cache):
        FavoritesManager(file_cache).toggle("a2")
        assert FavoritesManager(file_cache).favorite_ids == frozenset({"a2"})

    def test_corrupt_entry_starts_empty(self, memory_cache, caplog):
        memory_cache.put(FAVORITES_KEY, '["not", "an", "envelope"]')
        favorites = FavoritesManager(memory_cache)
        assert favorites.favorite_ids == frozenset()
        assert memory_cache.get(FAVORITES_KEY) is None
        assert "Discarding corrupt favorites entry" in caplog.text

    def test_write_failure_keeps_in_memory_state(self, mocker, caplog):
        cache = MemoryCacheStore()
        favorites = FavoritesManager(cache)
        mocker.patch.object(cache, "put", side_effect=CacheWriteError("read-only"))
        assert favorites.toggle("a1") is True
        assert favorites.is_favorite("a1")
        assert "Failed to persist favorites" in caplog.text

    def test_clear(self, memory_cache):
        favorites = FavoritesManager(memory_cache)
        favorites.toggle("a1")
        favorites.clear()
        assert FavoritesManager(memory_cache).favorite_ids == frozenset()
