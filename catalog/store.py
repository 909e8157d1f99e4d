"""
Catalog store: cache-first loading of albums and artists.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Union

from catalog import codec
from catalog.cache import ALBUMS_KEY, ARTISTS_KEY, CacheStore
from catalog.exceptions import CacheCorruptError, CacheWriteError, DataNotFoundError, DecodeError
from catalog.filters import related_albums
from catalog.models import Album, Artist, CatalogSnapshot

logger = logging.getLogger(__name__)

SOURCE_CACHE = "cache"
SOURCE_BUNDLE = "bundle"


class BundledSource:
    """The two JSON documents shipped with the application."""

    def __init__(self, albums_path: Union[str, Path], artists_path: Union[str, Path]):
        self.albums_path = Path(albums_path)
        self.artists_path = Path(artists_path)

    def read(self) -> CatalogSnapshot:
        """
        Read and decode both documents.

        Raises:
            DataNotFoundError: If either document is missing or unreadable
            DecodeError: If either document is malformed
        """
        missing = [str(p) for p in (self.albums_path, self.artists_path) if not p.is_file()]
        if missing:
            raise DataNotFoundError(f"Catalog JSON files not found: {', '.join(missing)}")

        try:
            albums_text = self.albums_path.read_text(encoding="utf-8")
            artists_text = self.artists_path.read_text(encoding="utf-8")
        except OSError as e:
            raise DataNotFoundError(f"Error reading catalog files: {e}") from e
        except UnicodeDecodeError as e:
            raise DecodeError(f"Catalog files are not valid UTF-8: {e}") from e

        albums = codec.decode_document(albums_text, codec.KIND_ALBUMS, str(self.albums_path))
        artists = codec.decode_document(artists_text, codec.KIND_ARTISTS, str(self.artists_path))
        return CatalogSnapshot(albums=albums, artists=artists)


class CatalogStore:
    """
    In-memory album and artist collections for one session.

    The current snapshot is swapped as a whole, so readers see either the
    previous collections or the new ones, never a mix.
    """

    def __init__(self, source: BundledSource, cache: CacheStore):
        self.source = source
        self.cache = cache
        self._lock = threading.Lock()
        self._snapshot = CatalogSnapshot()
        self._loaded = False
        self.last_source: Optional[str] = None

    @property
    def albums(self) -> List[Album]:
        """Copy of the current albums; the snapshot itself is only ever replaced."""
        return list(self._snapshot.albums)

    @property
    def artists(self) -> List[Artist]:
        return list(self._snapshot.artists)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self, use_cache: bool = True) -> CatalogSnapshot:
        """
        Load the catalog, preferring cached data.

        Args:
            use_cache: Read the cache before the bundled source

        Returns:
            The loaded snapshot

        Raises:
            DataNotFoundError: If the bundled documents are missing
            DecodeError: If the bundled documents are malformed
        """
        snapshot = self._read_cache() if use_cache else None
        source = SOURCE_CACHE

        if snapshot is None:
            snapshot = self.source.read()
            source = SOURCE_BUNDLE
            self._write_cache(snapshot)

        with self._lock:
            self._snapshot = snapshot
            self._loaded = True
            self.last_source = source

        logger.info(
            f"Loaded {len(snapshot.albums)} albums and {len(snapshot.artists)} artists from {source}"
        )
        return snapshot

    def refresh(self) -> CatalogSnapshot:
        """Drop cached catalog entries and reload from the bundled source."""
        self.cache.remove(ALBUMS_KEY)
        self.cache.remove(ARTISTS_KEY)
        logger.info("Cleared cached catalog, reloading from bundle")
        return self.load(use_cache=False)

    def _read_cache(self) -> Optional[CatalogSnapshot]:
        albums_blob = self.cache.get(ALBUMS_KEY)
        artists_blob = self.cache.get(ARTISTS_KEY)
        if albums_blob is None or artists_blob is None:
            logger.debug("Catalog cache miss")
            return None

        try:
            albums = codec.decode_albums(albums_blob)
            artists = codec.decode_artists(artists_blob)
        except CacheCorruptError as e:
            logger.warning(f"Discarding corrupt catalog cache: {e}")
            self.cache.remove(ALBUMS_KEY)
            self.cache.remove(ARTISTS_KEY)
            return None

        return CatalogSnapshot(albums=albums, artists=artists)

    def _write_cache(self, snapshot: CatalogSnapshot) -> None:
        try:
            self.cache.put(ALBUMS_KEY, codec.encode_albums(snapshot.albums))
            self.cache.put(ARTISTS_KEY, codec.encode_artists(snapshot.artists))
        except CacheWriteError as e:
            logger.warning(f"Failed to cache catalog: {e}")

    def get_artist(self, artist_id: str) -> Optional[Artist]:
        for artist in self.artists:
            if artist.id == artist_id:
                return artist
        return None

    def get_album(self, album_id: str) -> Optional[Album]:
        for album in self.albums:
            if album.id == album_id:
                return album
        return None

    def get_related_albums(self, album: Album, limit: int = 4) -> List[Album]:
        return related_albums(self.albums, album, limit)
