from typing import Callable, Sequence

from mediacull.models import MediaItem, Order, SortingOption, SortKey

SORT_KEYS: dict[SortKey, Callable[[MediaItem], object]] = {
    SortKey.NAME: lambda item: (item.title or "").casefold(),
    SortKey.SIZE: lambda item: item.size or 0,
    SortKey.TYPE: lambda item: item.media_type.rank,
}


def sort_items(items: Sequence[MediaItem], option: SortingOption = SortingOption()) -> list[MediaItem]:
    """Return the items ordered by the option; the input is left untouched."""
    return sorted(items, key=SORT_KEYS[option.key], reverse=option.order is Order.DESC)


def sort_by_code(items: Sequence[MediaItem], code: str) -> list[MediaItem]:
    """Sort by one of the short codes; raises InvalidSortingOption first if unknown."""
    return sort_items(items, SortingOption.from_code(code))
