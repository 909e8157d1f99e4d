"""
Serialization of catalog records.

Two formats are handled here:

* bundled documents: a bare JSON array of album or artist records, as shipped
  with the application;
* cache entries: the same records wrapped in a self-describing envelope so that
  stale or foreign entries can be detected and discarded.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Sequence

from pydantic import TypeAdapter, ValidationError

from catalog.exceptions import CacheCorruptError, DecodeError
from catalog.models import Album, Artist

logger = logging.getLogger(__name__)

CACHE_FORMAT = "music-catalog-cache"
CACHE_SCHEMA_VERSION = 1

KIND_ALBUMS = "albums"
KIND_ARTISTS = "artists"
KIND_FAVORITES = "favorites"

_ALBUM_LIST = TypeAdapter(List[Album])
_ARTIST_LIST = TypeAdapter(List[Artist])
_ID_LIST = TypeAdapter(List[str])

_ADAPTERS = {
    KIND_ALBUMS: _ALBUM_LIST,
    KIND_ARTISTS: _ARTIST_LIST,
    KIND_FAVORITES: _ID_LIST,
}


def decode_document(text: str, kind: str, source: str = "<bundle>") -> List[Any]:
    """
    Decode a bundled JSON document into records.

    Args:
        text: Raw document contents
        kind: KIND_ALBUMS or KIND_ARTISTS
        source: Name used in error messages

    Returns:
        List of Album or Artist records

    Raises:
        DecodeError: If the document is not valid JSON or a record fails validation
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON in {source}: {e}") from e

    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array of {kind} in {source}, got {type(data).__name__}")

    try:
        return _ADAPTERS[kind].validate_python(data)
    except ValidationError as e:
        raise DecodeError(f"Schema mismatch in {source}: {e.error_count()} invalid field(s): {e}") from e


def encode_entry(kind: str, items: Sequence[Any]) -> str:
    """
    Wrap records in the cache envelope.

    Args:
        kind: Entry kind (albums, artists or favorites)
        items: Records (pydantic models) or plain ids

    Returns:
        JSON text ready for the cache store
    """
    envelope = {
        "format": CACHE_FORMAT,
        "schema_version": CACHE_SCHEMA_VERSION,
        "kind": kind,
        "items": _ADAPTERS[kind].dump_python(list(items), mode="json"),
    }
    return json.dumps(envelope, ensure_ascii=False)


def decode_entry(blob: str, kind: str) -> List[Any]:
    """
    Unwrap and validate a cache envelope.

    Raises:
        CacheCorruptError: If the entry is not a compatible envelope of ``kind``
    """
    try:
        envelope = json.loads(blob)
    except (json.JSONDecodeError, TypeError) as e:
        raise CacheCorruptError(f"Cache entry for {kind} is not valid JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise CacheCorruptError(f"Cache entry for {kind} is not an envelope")
    if envelope.get("format") != CACHE_FORMAT:
        raise CacheCorruptError(f"Unknown cache format: {envelope.get('format')!r}")
    if envelope.get("schema_version") != CACHE_SCHEMA_VERSION:
        raise CacheCorruptError(
            f"Stale cache schema version {envelope.get('schema_version')!r}, "
            f"expected {CACHE_SCHEMA_VERSION}"
        )
    if envelope.get("kind") != kind:
        raise CacheCorruptError(f"Cache entry kind {envelope.get('kind')!r} does not match {kind!r}")

    try:
        return _ADAPTERS[kind].validate_python(envelope.get("items"))
    except ValidationError as e:
        raise CacheCorruptError(f"Cache entry for {kind} failed validation: {e}") from e


def encode_albums(albums: Iterable[Album]) -> str:
    return encode_entry(KIND_ALBUMS, list(albums))


def decode_albums(blob: str) -> List[Album]:
    return decode_entry(blob, KIND_ALBUMS)


def encode_artists(artists: Iterable[Artist]) -> str:
    return encode_entry(KIND_ARTISTS, list(artists))


def decode_artists(blob: str) -> List[Artist]:
    return decode_entry(blob, KIND_ARTISTS)


def encode_favorites(album_ids: Iterable[str]) -> str:
    # Sorted so the stored entry is stable across toggles.
    return encode_entry(KIND_FAVORITES, sorted(set(album_ids)))


def decode_favorites(blob: str) -> List[str]:
    return decode_entry(blob, KIND_FAVORITES)


def record_to_dict(record: Any) -> Dict[str, Any]:
    """Plain dict view of a record using the external schema keys."""
    return record.model_dump(mode="json")
