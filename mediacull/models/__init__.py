from mediacull.models.media import (
    EpisodeWatch, MediaItem, MediaType, MovieWatch, WatchHistory, format_size
)
from mediacull.models.requests import HistoryPage, HistoryRecord, MediaRequest, RequestedMedia
from mediacull.models.sorting import SORTING_CODES, Order, SortingOption, SortKey

__all__ = [
    "EpisodeWatch",
    "MediaItem",
    "MediaType",
    "MovieWatch",
    "WatchHistory",
    "format_size",
    "HistoryPage",
    "HistoryRecord",
    "MediaRequest",
    "RequestedMedia",
    "SORTING_CODES",
    "Order",
    "SortingOption",
    "SortKey",
]
