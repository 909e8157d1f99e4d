"""
Shared pytest fixtures for music-catalog tests.
"""
import tempfile
from pathlib import Path

import pytest

from catalog.cache import FileCacheStore, MemoryCacheStore
from catalog.controller import CatalogController
from catalog.favorites import FavoritesManager
from catalog.store import BundledSource, CatalogStore
from tests.helpers import album_data, write_bundle


SAMPLE_ARTISTS = [
    {
        "id": "artist_rush",
        "name": "Rush",
        "bio": "Canadian rock trio.",
        "image_url": "https://example.com/rush.jpg",
        "genre": "Rock",
        "country": "Canada",
    },
    {
        "id": "artist_evans",
        "name": "Bill Evans",
        "bio": "Jazz pianist.",
        "image_url": "https://example.com/evans.jpg",
        "genre": "Jazz",
        "country": "United States",
    },
]

SAMPLE_ALBUMS = [
    album_data(
        id="a1",
        title="Moving Pictures",
        price=5.0,
        rating=3.0,
        genre="Rock",
        release_date="1981-02-12",
        review_count=50,
        is_popular=True,
        songs=[
            {"id": "s2", "title": "Red Barchetta", "duration": "6:10", "track_number": 2, "preview_url": None},
            {"id": "s1", "title": "Tom Sawyer", "duration": "4:33", "track_number": 1,
             "preview_url": "https://example.com/tom-sawyer.mp3"},
        ],
        reviews=[
            {"id": "r1", "user_name": "geddy_fan", "rating": 5, "comment": "Classic.", "date": "2020-05-01"},
        ],
    ),
    album_data(
        id="a2",
        title="Sunday at the Village Vanguard",
        artist_id="artist_evans",
        artist_name="Bill Evans",
        price=20.0,
        rating=5.0,
        genre="Jazz",
        release_date="1961-10-01",
        review_count=80,
        is_popular=False,
    ),
    album_data(
        id="a3",
        title="Permanent Waves",
        price=12.0,
        rating=4.2,
        genre="Rock",
        release_date="1980-01-14",
        review_count=80,
        is_popular=True,
    ),
]


@pytest.fixture
def tmp_test_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def bundle_paths(tmp_test_dir):
    """Bundled albums.json and artists.json with the sample records."""
    return write_bundle(tmp_test_dir / "bundle", SAMPLE_ALBUMS, SAMPLE_ARTISTS)


@pytest.fixture
def bundled_source(bundle_paths):
    return BundledSource(bundle_paths["albums"], bundle_paths["artists"])


@pytest.fixture
def memory_cache():
    return MemoryCacheStore(max_entries=10)


@pytest.fixture
def file_cache(tmp_test_dir):
    return FileCacheStore(tmp_test_dir / "cache", scope="test-scope")


@pytest.fixture
def catalog_store(bundled_source, memory_cache):
    return CatalogStore(bundled_source, memory_cache)


@pytest.fixture
def controller(catalog_store, memory_cache):
    """Controller with a short debounce delay for timer tests."""
    ctrl = CatalogController(
        store=catalog_store,
        favorites=FavoritesManager(memory_cache),
        debounce_seconds=0.05,
    )
    yield ctrl
    ctrl.close()


@pytest.fixture
def sample_config_yaml(tmp_test_dir, bundle_paths):
    """Create sample config YAML file pointing at the sample bundle."""
    config_file = tmp_test_dir / "config.yaml"
    config_file.write_text("""
version: 1.0
data:
  albums_path: bundle/albums.json
  artists_path: bundle/artists.json
cache:
  backend: memory
  max_entries: 5
filters:
  debounce_ms: 50
  default_price_range: [0, 50]
  related_albums_limit: 2
log_level: DEBUG
""")
    return str(config_file)
