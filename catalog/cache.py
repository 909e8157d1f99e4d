"""
Key-value cache stores for catalog snapshots and favorites.

Blobs are opaque strings; the codec module decides what goes inside them.
"""

import logging
import os
import re
import tempfile
from collections import OrderedDict
from pathlib import Path
from typing import Optional, Union

from catalog.exceptions import CacheWriteError

logger = logging.getLogger(__name__)

ALBUMS_KEY = "cached_albums"
ARTISTS_KEY = "cached_artists"
FAVORITES_KEY = "favorite_albums"

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class CacheStore:
    """Interface shared by the cache backends."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def put(self, key: str, blob: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class MemoryCacheStore(CacheStore):
    """In-process cache with LRU eviction."""

    def __init__(self, max_entries: int = 100):
        """
        Initialize cache.

        Args:
            max_entries: Maximum number of entries (LRU eviction when exceeded)
        """
        self.max_entries = max_entries
        self._cache: OrderedDict[str, str] = OrderedDict()

    def get(self, key: str) -> Optional[str]:
        """Get blob from cache, or None when absent."""
        if key not in self._cache:
            return None

        # Move to end (most recently used)
        self._cache.move_to_end(key)
        return self._cache[key]

    def put(self, key: str, blob: str) -> None:
        """Store blob, evicting the least recently used entry at capacity."""
        if key in self._cache:
            del self._cache[key]

        if len(self._cache) >= self.max_entries:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug(f"Evicted cache entry: {evicted}")

        self._cache[key] = blob

    def remove(self, key: str) -> None:
        self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all cache entries."""
        self._cache.clear()


class FileCacheStore(CacheStore):
    """
    Persistent cache keeping one file per key under a scoped directory.

    Writes go to a temporary file that is atomically moved into place, so a
    crash mid-write never leaves a half-written entry behind.
    """

    def __init__(self, directory: Union[str, Path], scope: str = "music-catalog"):
        """
        Initialize cache.

        Args:
            directory: Base cache directory
            scope: Sub-directory isolating this application's entries
        """
        self.directory = Path(directory) / scope
        self.scope = scope

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid cache key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        """Read blob for key, or None when absent or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read cache entry {key} from {path}: {e}")
            return None

    def put(self, key: str, blob: str) -> None:
        """
        Write blob for key.

        Raises:
            CacheWriteError: If the entry could not be written
        """
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(blob)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CacheWriteError(f"Failed to write cache entry {key} to {path}: {e}") from e
        logger.debug(f"Wrote cache entry {key} ({len(blob)} chars)")

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to remove cache entry {key}: {e}")

    def clear(self) -> None:
        """Remove every entry in this scope."""
        if not self.directory.exists():
            return
        for path in self.directory.glob("*.json"):
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"Failed to remove cache file {path}: {e}")
