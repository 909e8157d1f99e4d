"""
Test helper functions and utilities.
"""
import json
from pathlib import Path
from typing import Any, Dict, List

from catalog.models import Album, Artist, Review, Song


def album_data(**kwargs) -> Dict[str, Any]:
    """
    Create raw album record in bundled-document form.

    Args:
        **kwargs: Override values for the record

    Returns:
        Album dictionary with snake_case keys
    """
    data = {
        "id": "album_x",
        "title": "Moving Pictures",
        "artist_id": "artist_rush",
        "artist_name": "Rush",
        "description": "Eighth studio album.",
        "price": 10.0,
        "image_url": "https://example.com/cover.jpg",
        "genre": "Rock",
        "release_date": "1981-02-12",
        "rating": 4.0,
        "review_count": 100,
        "duration": "40:01",
        "track_count": 0,
        "is_popular": False,
        "songs": [],
        "reviews": [],
    }
    data.update(kwargs)
    return data


def make_album(**kwargs) -> Album:
    """Create Album with optional overrides."""
    return Album.model_validate(album_data(**kwargs))


def make_artist(**kwargs) -> Artist:
    """Create Artist with optional overrides."""
    defaults = {
        "id": "artist_rush",
        "name": "Rush",
        "bio": "Canadian rock trio.",
        "image_url": "https://example.com/rush.jpg",
        "genre": "Rock",
        "country": "Canada",
    }
    defaults.update(kwargs)
    return Artist(**defaults)


def make_song(**kwargs) -> Song:
    defaults = {"id": "song_yyz", "title": "YYZ", "duration": "4:26", "track_number": 3}
    defaults.update(kwargs)
    return Song(**defaults)


def make_review(**kwargs) -> Review:
    defaults = {
        "id": "review_1",
        "user_name": "neil",
        "rating": 5,
        "comment": "Essential.",
        "date": "2021-01-01",
    }
    defaults.update(kwargs)
    return Review(**defaults)


def write_bundle(directory: Path, albums: List[Dict[str, Any]], artists: List[Dict[str, Any]]) -> Dict[str, Path]:
    """
    Write albums.json and artists.json into directory.

    Returns:
        Mapping with "albums" and "artists" paths
    """
    directory.mkdir(parents=True, exist_ok=True)
    albums_path = directory / "albums.json"
    artists_path = directory / "artists.json"
    albums_path.write_text(json.dumps(albums), encoding="utf-8")
    artists_path.write_text(json.dumps(artists), encoding="utf-8")
    return {"albums": albums_path, "artists": artists_path}


def ids(albums: List[Album]) -> List[str]:
    """Album ids in order."""
    return [album.id for album in albums]
