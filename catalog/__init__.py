"""
Core modules for music-catalog browsing functionality.
"""

from catalog.cache import FileCacheStore, MemoryCacheStore
from catalog.config import CatalogConfig, load_config
from catalog.controller import CatalogController, ControllerState
from catalog.exceptions import (
    CacheCorruptError,
    CacheError,
    CacheWriteError,
    CatalogError,
    ConfigError,
    DataNotFoundError,
    DecodeError,
)
from catalog.favorites import FavoritesManager
from catalog.filters import apply_filters, sort_albums
from catalog.models import Album, Artist, FilterCriteria, GenreFilter, Review, Song, SortOption
from catalog.store import BundledSource, CatalogStore

__all__ = [
    "Album",
    "Artist",
    "Song",
    "Review",
    "FilterCriteria",
    "GenreFilter",
    "SortOption",
    "apply_filters",
    "sort_albums",
    "BundledSource",
    "CatalogStore",
    "FileCacheStore",
    "MemoryCacheStore",
    "FavoritesManager",
    "CatalogController",
    "ControllerState",
    "CatalogConfig",
    "load_config",
    "CatalogError",
    "DataNotFoundError",
    "DecodeError",
    "CacheError",
    "CacheCorruptError",
    "CacheWriteError",
    "ConfigError",
]
