"""
Custom exceptions for music-catalog.
"""


class CatalogError(Exception):
    """Base exception for all music-catalog errors."""


class DataNotFoundError(CatalogError):
    """Bundled catalog documents are missing."""


class DecodeError(CatalogError):
    """Catalog data is malformed or does not match the record schema."""


class CacheError(CatalogError):
    """Base class for cache layer errors."""


class CacheCorruptError(CacheError):
    """Cache entry cannot be decoded; treated as absent."""


class CacheWriteError(CacheError):
    """Cache entry could not be written."""


class ConfigError(CatalogError):
    """Configuration errors."""
