"""
Catalog controller: the query surface used by front ends.

The controller owns the live FilterCriteria. Every criteria mutation moves it
into PENDING_RECOMPUTE and (re)starts a debounce timer; when the timer expires
the filter pipeline runs once against the latest criteria and the result is
published to subscribers.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from catalog.config import CatalogConfig
from catalog.debounce import Debouncer
from catalog.exceptions import CatalogError
from catalog.favorites import FavoritesManager
from catalog.filters import apply_filters
from catalog.models import Album, Artist, FilterCriteria, GenreFilter, SortOption
from catalog.store import BundledSource, CatalogStore

logger = logging.getLogger(__name__)

Subscriber = Callable[[List[Album]], None]


class ControllerState(str, Enum):
    """Recompute state of the controller."""

    IDLE = "idle"
    PENDING_RECOMPUTE = "pending_recompute"


class CatalogController:
    """Browsing session over one catalog store and favorites set."""

    def __init__(
        self,
        store: CatalogStore,
        favorites: FavoritesManager,
        debounce_seconds: float = 0.3,
        default_price_range: Tuple[float, float] = (0.0, 100.0),
        related_limit: int = 4,
    ):
        """
        Initialize controller.

        Args:
            store: Catalog store providing albums and artists
            favorites: Favorites manager
            debounce_seconds: Quiet period before criteria changes are applied
            default_price_range: Price range restored by clear_filters()
            related_limit: Default cap for get_related_albums()
        """
        self.store = store
        self.favorites = favorites
        self.default_price_range = default_price_range
        self.related_limit = related_limit

        self._lock = threading.RLock()
        self._criteria = FilterCriteria.with_price_range(default_price_range)
        self._filtered: List[Album] = []
        self._state = ControllerState.IDLE
        self._subscribers: List[Subscriber] = []
        self._debouncer = Debouncer(self._on_debounce, delay_seconds=debounce_seconds)
        self._executor: Optional[ThreadPoolExecutor] = None

        self.recompute_count = 0
        self.is_loading = False
        self.error_message: Optional[str] = None
        self.is_grid_view = True

    @classmethod
    def from_config(cls, config: CatalogConfig) -> "CatalogController":
        """Build store, cache and favorites from configuration."""
        cache = config.cache.create_store()
        source = BundledSource(config.data.albums_path, config.data.artists_path)
        return cls(
            store=CatalogStore(source, cache),
            favorites=FavoritesManager(cache),
            debounce_seconds=config.filters.debounce_seconds,
            default_price_range=config.filters.default_price_range,
            related_limit=config.filters.related_albums_limit,
        )

    # Observable state

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def criteria(self) -> FilterCriteria:
        """Copy of the live criteria."""
        with self._lock:
            return self._criteria.snapshot()

    @property
    def filtered_albums(self) -> List[Album]:
        with self._lock:
            return list(self._filtered)

    @property
    def albums(self) -> List[Album]:
        return self.store.albums

    @property
    def artists(self) -> List[Artist]:
        return self.store.artists

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback receiving each published result.

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    # Loading

    def load_data(self) -> bool:
        """
        Load the catalog and publish the filtered result.

        Errors are recorded in ``error_message`` rather than raised.

        Returns:
            True on success
        """
        return self._load(refresh=False)

    def refresh_data(self) -> bool:
        """Reload from the bundled source, bypassing the cache."""
        return self._load(refresh=True)

    def retry(self) -> bool:
        return self.load_data()

    def load_data_in_background(self) -> "Future[bool]":
        """Run load_data() on the loader thread."""
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="catalog-loader")
            self.is_loading = True
            return self._executor.submit(self.load_data)

    def _load(self, refresh: bool) -> bool:
        with self._lock:
            self.is_loading = True
            self.error_message = None

        try:
            if refresh:
                self.store.refresh()
            else:
                self.store.load()
        except CatalogError as e:
            logger.error(f"Failed to load music catalog: {e}")
            with self._lock:
                self.error_message = f"Failed to load music catalog: {e}"
                self.is_loading = False
            return False

        with self._lock:
            self.is_loading = False
        self.apply_filters()
        return True

    # Filtering

    def apply_filters(self) -> List[Album]:
        """Recompute immediately, discarding any pending debounce."""
        with self._lock:
            self._debouncer.cancel()
            return self._recompute()

    def flush(self) -> bool:
        """
        Apply a pending criteria change now.

        Returns:
            True if a recompute was pending
        """
        return self._debouncer.flush()

    def _on_debounce(self) -> None:
        with self._lock:
            if self._debouncer.pending:
                # A newer mutation restarted the timer; it will publish.
                return
            if self._state is not ControllerState.PENDING_RECOMPUTE:
                # apply_filters() already published these criteria.
                return
            self._recompute()

    def _recompute(self) -> List[Album]:
        with self._lock:
            criteria = self._criteria.snapshot()
            try:
                result = apply_filters(self.store.albums, criteria)
            finally:
                self._state = ControllerState.IDLE
            self._filtered = result
            self.recompute_count += 1
            subscribers = list(self._subscribers)

        logger.debug(f"Filtered {len(self.store.albums)} albums down to {len(result)}")
        for callback in subscribers:
            try:
                callback(list(result))
            except Exception as e:
                logger.error(f"Error in filter subscriber: {e}", exc_info=True)
        return result

    def _mutate(self, change: Callable[[FilterCriteria], None]) -> None:
        with self._lock:
            change(self._criteria)
            self._state = ControllerState.PENDING_RECOMPUTE
            self._debouncer.schedule()

    # Criteria mutators

    def update_search_text(self, text: str) -> None:
        self._mutate(lambda c: setattr(c, "search_text", text))

    def update_genre_filter(self, genre: GenreFilter) -> None:
        genre = GenreFilter(genre)
        self._mutate(lambda c: setattr(c, "selected_genre", genre))

    def update_price_range(self, low: float, high: float) -> None:
        """
        Set the inclusive price range.

        Raises:
            ValueError: If low is greater than high
        """
        if low > high:
            raise ValueError(f"Invalid price range: {low} > {high}")
        self._mutate(lambda c: setattr(c, "price_range", (float(low), float(high))))

    def update_minimum_rating(self, rating: float) -> None:
        self._mutate(lambda c: setattr(c, "minimum_rating", float(rating)))

    def update_sort_option(self, option: SortOption) -> None:
        option = SortOption(option)
        self._mutate(lambda c: setattr(c, "sort_option", option))

    def toggle_popular_filter(self) -> None:
        self._mutate(lambda c: setattr(c, "show_only_popular", not c.show_only_popular))

    def set_criteria(self, criteria: FilterCriteria) -> None:
        """
        Replace every criterion at once.

        Raw genre and sort values are converted to their enums.

        Raises:
            ValueError: If a value is invalid or the price range is inverted
        """
        low, high = (float(bound) for bound in criteria.price_range)
        if low > high:
            raise ValueError(f"Invalid price range: {low} > {high}")
        normalized = replace(
            criteria,
            search_text=str(criteria.search_text),
            selected_genre=GenreFilter(criteria.selected_genre),
            price_range=(low, high),
            minimum_rating=float(criteria.minimum_rating),
            sort_option=SortOption(criteria.sort_option),
            show_only_popular=bool(criteria.show_only_popular),
            default_price_range=self.default_price_range,
        )
        with self._lock:
            self._criteria = normalized
            self._state = ControllerState.PENDING_RECOMPUTE
            self._debouncer.schedule()

    def clear_filters(self) -> None:
        self.set_criteria(FilterCriteria.with_price_range(self.default_price_range))

    # Catalog queries

    def get_artist(self, artist_id: str) -> Optional[Artist]:
        return self.store.get_artist(artist_id)

    def get_related_albums(self, album: Album, limit: Optional[int] = None) -> List[Album]:
        return self.store.get_related_albums(album, self.related_limit if limit is None else limit)

    # Favorites

    def toggle_favorite(self, album_id: str) -> bool:
        return self.favorites.toggle(album_id)

    def is_favorite(self, album_id: str) -> bool:
        return self.favorites.is_favorite(album_id)

    def favorite_albums(self) -> List[Album]:
        """Favorite albums present in the catalog, in collection order."""
        return [album for album in self.store.albums if self.favorites.is_favorite(album.id)]

    def toggle_view_mode(self) -> bool:
        self.is_grid_view = not self.is_grid_view
        return self.is_grid_view

    def close(self) -> None:
        """Cancel pending work and stop the loader thread."""
        self._debouncer.cancel()
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
