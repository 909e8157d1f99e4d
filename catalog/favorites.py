"""
Favorite albums, persisted through the cache layer.
"""

import logging
from typing import FrozenSet, Set

from catalog import codec
from catalog.cache import FAVORITES_KEY, CacheStore
from catalog.exceptions import CacheCorruptError, CacheWriteError

logger = logging.getLogger(__name__)


class FavoritesManager:
    """Set of favorite album ids, loaded once and written on every change."""

    def __init__(self, cache: CacheStore, key: str = FAVORITES_KEY):
        self.cache = cache
        self.key = key
        self._ids: Set[str] = self._load()

    @property
    def favorite_ids(self) -> FrozenSet[str]:
        return frozenset(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def is_favorite(self, album_id: str) -> bool:
        return album_id in self._ids

    def toggle(self, album_id: str) -> bool:
        """
        Flip membership of ``album_id`` and persist the set.

        Returns:
            True if the album is now a favorite
        """
        if album_id in self._ids:
            self._ids.remove(album_id)
            now_favorite = False
        else:
            self._ids.add(album_id)
            now_favorite = True
        self._save()
        return now_favorite

    def clear(self) -> None:
        self._ids.clear()
        self._save()

    def _load(self) -> Set[str]:
        blob = self.cache.get(self.key)
        if blob is None:
            return set()
        try:
            ids = set(codec.decode_favorites(blob))
        except CacheCorruptError as e:
            logger.warning(f"Discarding corrupt favorites entry: {e}")
            self.cache.remove(self.key)
            return set()
        logger.debug(f"Loaded {len(ids)} favorite albums")
        return ids

    def _save(self) -> None:
        try:
            self.cache.put(self.key, codec.encode_favorites(self._ids))
        except CacheWriteError as e:
            logger.warning(f"Failed to persist favorites: {e}")
