"""
Filter and sort pipeline for albums.

``apply_filters`` narrows the full album list through five independent
predicates and then orders the survivors. Stages always run in this order:

1. text search over title, artist name and genre
2. genre
3. inclusive price range
4. minimum rating
5. popular-only
6. sort

Every sort is stable: albums with equal sort keys keep their input order.
"""

from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from catalog.models import Album, FilterCriteria, GenreFilter, SortOption


def matches_search(album: Album, search_text: str) -> bool:
    """Case-insensitive substring match on title, artist name or genre."""
    if not search_text:
        return True
    needle = search_text.casefold()
    return (
        needle in album.title.casefold()
        or needle in album.artist_name.casefold()
        or needle in album.genre.casefold()
    )


def matches_genre(album: Album, genre: GenreFilter) -> bool:
    if genre is GenreFilter.ALL:
        return True
    return album.genre.casefold() == genre.value.casefold()


def matches_price(album: Album, price_range: Tuple[float, float]) -> bool:
    low, high = price_range
    return low <= album.price <= high


def matches_rating(album: Album, minimum_rating: float) -> bool:
    return album.rating >= minimum_rating


def matches_popularity(album: Album, show_only_popular: bool) -> bool:
    return album.is_popular or not show_only_popular


# (key, reverse) per sort option. reverse=True keeps sorted() stable.
_SORT_KEYS: Dict[SortOption, Tuple[Callable[[Album], object], bool]] = {
    SortOption.NEWEST: (lambda a: a.release_date, True),
    SortOption.PRICE_ASCENDING: (lambda a: a.price, False),
    SortOption.PRICE_DESCENDING: (lambda a: a.price, True),
    # Popular first, then most reviewed.
    SortOption.MOST_POPULAR: (lambda a: (not a.is_popular, -a.review_count), False),
    SortOption.RATING: (lambda a: a.rating, True),
    # Plain code point order: case-sensitive, no locale collation ("Zebra" < "apple").
    SortOption.ALPHABETICAL: (lambda a: a.title, False),
}


def sort_albums(albums: Iterable[Album], sort_option: SortOption) -> List[Album]:
    """
    Order albums by the given option.

    Args:
        albums: Albums to sort (not modified)
        sort_option: Ordering to apply

    Returns:
        New list in sorted order
    """
    key, reverse = _SORT_KEYS[sort_option]
    return sorted(albums, key=key, reverse=reverse)


def apply_filters(albums: Sequence[Album], criteria: FilterCriteria) -> List[Album]:
    """
    Run the full filter pipeline.

    Args:
        albums: Full album collection
        criteria: Filter criteria (read only)

    Returns:
        Ordered subset of ``albums``
    """
    filtered = [
        album
        for album in albums
        if matches_search(album, criteria.search_text)
        and matches_genre(album, criteria.selected_genre)
        and matches_price(album, criteria.price_range)
        and matches_rating(album, criteria.minimum_rating)
        and matches_popularity(album, criteria.show_only_popular)
    ]
    return sort_albums(filtered, criteria.sort_option)


def related_albums(albums: Sequence[Album], album: Album, limit: int = 4) -> List[Album]:
    """
    Other albums sharing genre or artist with ``album``.

    Results keep collection order and are capped at ``limit``.
    """
    if limit <= 0:
        return []
    related = []
    for candidate in albums:
        if candidate.id == album.id:
            continue
        if candidate.genre == album.genre or candidate.artist_id == album.artist_id:
            related.append(candidate)
            if len(related) >= limit:
                break
    return related
