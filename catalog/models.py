"""
Data models for music-catalog.

Catalog records (Artist, Album, Song, Review) are frozen pydantic models whose
field names match the snake_case keys of the bundled JSON documents. Filter
criteria are a plain mutable dataclass owned by the controller.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PRICE_RANGE: Tuple[float, float] = (0.0, 100.0)


class CatalogRecord(BaseModel):
    """Base for immutable catalog records."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Artist(CatalogRecord):
    """Artist metadata model."""

    id: str
    name: str
    bio: str
    image_url: str
    genre: str
    country: str


class Song(CatalogRecord):
    """Single track on an album."""

    id: str
    title: str
    duration: str
    track_number: int = Field(gt=0)
    preview_url: Optional[str] = None


class Review(CatalogRecord):
    """User review attached to an album."""

    id: str
    user_name: str
    rating: int = Field(ge=1, le=5)
    comment: str
    date: str


class Album(CatalogRecord):
    """Album metadata model."""

    id: str
    title: str
    artist_id: str
    artist_name: str
    description: str
    price: float = Field(ge=0)
    image_url: str
    genre: str
    release_date: str  # YYYY-MM-DD
    rating: float = Field(ge=0, le=5)
    review_count: int = Field(ge=0)
    duration: str
    track_count: int
    is_popular: bool
    songs: Tuple[Song, ...] = ()
    reviews: Tuple[Review, ...] = ()

    def sorted_songs(self) -> List[Song]:
        """Songs in track-number order; the stored sequence is left as loaded."""
        return sorted(self.songs, key=lambda song: song.track_number)


class SortOption(str, Enum):
    """Ordering applied to filtered albums."""

    NEWEST = "newest"
    PRICE_ASCENDING = "price_ascending"
    PRICE_DESCENDING = "price_descending"
    MOST_POPULAR = "most_popular"
    RATING = "rating"
    ALPHABETICAL = "alphabetical"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS = {
    SortOption.NEWEST: "Newest",
    SortOption.PRICE_ASCENDING: "Price: Low to High",
    SortOption.PRICE_DESCENDING: "Price: High to Low",
    SortOption.MOST_POPULAR: "Most Popular",
    SortOption.RATING: "Highest Rated",
    SortOption.ALPHABETICAL: "A-Z",
}


class GenreFilter(str, Enum):
    """Genres selectable in the genre filter."""

    ALL = "All"
    ROCK = "Rock"
    POP = "Pop"
    JAZZ = "Jazz"
    CLASSICAL = "Classical"
    ELECTRONIC = "Electronic"
    HIPHOP = "Hip-Hop"
    COUNTRY = "Country"
    BLUES = "Blues"

    @classmethod
    def parse(cls, value: str) -> "GenreFilter":
        """
        Look up a genre by value or member name, ignoring case.

        Raises:
            ValueError: If no genre matches
        """
        wanted = value.strip().casefold()
        for genre in cls:
            if wanted in (genre.value.casefold(), genre.name.casefold()):
                return genre
        valid = [g.value for g in cls]
        raise ValueError(f"Invalid genre: {value}. Must be one of: {valid}")


@dataclass
class FilterCriteria:
    """
    Live filter state for one browsing session.

    Mutated only through the controller; recomputation always works on a
    snapshot so later mutations never leak into an in-flight pass.
    """

    search_text: str = ""
    selected_genre: GenreFilter = GenreFilter.ALL
    price_range: Tuple[float, float] = DEFAULT_PRICE_RANGE
    minimum_rating: float = 0.0
    sort_option: SortOption = SortOption.NEWEST
    show_only_popular: bool = False
    default_price_range: Tuple[float, float] = field(
        default=DEFAULT_PRICE_RANGE, repr=False, compare=False
    )

    @classmethod
    def with_price_range(cls, price_range: Tuple[float, float]) -> "FilterCriteria":
        """Fresh criteria whose default price range is ``price_range``."""
        bounds = (float(price_range[0]), float(price_range[1]))
        return cls(price_range=bounds, default_price_range=bounds)

    def snapshot(self) -> "FilterCriteria":
        return replace(self)

    def active_filter_count(self) -> int:
        """Number of narrowing criteria that differ from their defaults."""
        active = [
            bool(self.search_text),
            self.selected_genre is not GenreFilter.ALL,
            tuple(self.price_range) != tuple(self.default_price_range),
            self.minimum_rating > 0,
            self.show_only_popular,
        ]
        return sum(active)

    def is_default(self) -> bool:
        return self.active_filter_count() == 0 and self.sort_option is SortOption.NEWEST


@dataclass
class CatalogSnapshot:
    """Albums and artists produced by one load cycle."""

    albums: List[Album] = field(default_factory=list)
    artists: List[Artist] = field(default_factory=list)
