"""Media item and watch history data model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class MediaType(str, Enum):
    """Kind of media a request refers to."""
    
    MOVIE = "movie"
    TV = "tv"
    
    @property
    def label(self) -> str:
        return "Movie" if self is MediaType.MOVIE else "TV"
    
    @property
    def history_key(self) -> str:
        """Parameter the history backend is queried by.
        
        Episodes are recorded individually, so shows are looked up by the
        grandparent (series) rating key.
        """
        return "rating_key" if self is MediaType.MOVIE else "grandparent_rating_key"
    
    @property
    def rank(self) -> int:
        return 0 if self is MediaType.MOVIE else 1


def format_size(bytes_val: int) -> str:
    """Format bytes to human readable size."""
    if bytes_val >= 1024 ** 4:
        return f"{bytes_val / (1024 ** 4):.2f} TB"
    elif bytes_val >= 1024 ** 3:
        return f"{bytes_val / (1024 ** 3):.2f} GB"
    elif bytes_val >= 1024 ** 2:
        return f"{bytes_val / (1024 ** 2):.2f} MB"
    elif bytes_val >= 1024:
        return f"{bytes_val / 1024:.2f} KB"
    else:
        return f"{bytes_val} B"


@dataclass(frozen=True)
class MovieWatch:
    user: str
    last_watched: datetime
    progress: int
    
    def describe(self) -> str:
        return (
            f"Last watch by {self.user} at {self.last_watched:%d-%m-%Y}, "
            f"with {self.progress}% progress."
        )


@dataclass(frozen=True)
class EpisodeWatch:
    user: str
    last_watched: datetime
    progress: int
    season: int
    episode: int
    
    def describe(self) -> str:
        return (
            f"Last watch by {self.user}, was at {self.last_watched:%d-%m-%Y}. "
            f"Season {self.season} Episode {self.episode}, with {self.progress}% complete."
        )


@dataclass(frozen=True)
class WatchHistory:
    """Latest watch per user for one media item.
    
    The media type decides which watch shape the entries have: movies hold
    MovieWatch entries, shows hold EpisodeWatch entries.
    """
    media_type: MediaType
    watches: tuple[Union[MovieWatch, EpisodeWatch], ...] = ()
    
    def describe(self) -> str:
        if not self.watches:
            return "No watch history."
        lines = ["Watch history:"]
        for watch in self.watches:
            lines.append(f"      * {watch.describe()}")
        return "\n".join(lines)


@dataclass(frozen=True)
class MediaItem:
    """A requested item joined with its library metadata and watch history."""
    title: Optional[str]
    media_type: MediaType
    external_id: int
    size: Optional[int] = None
    status: Optional[str] = None
    watch_history: Optional[WatchHistory] = None
    is_4k: bool = False
    request_id: Optional[int] = None
    
    def __post_init__(self):
        if self.watch_history is None:
            object.__setattr__(self, "watch_history", WatchHistory(self.media_type))
    
    @property
    def display_title(self) -> str:
        return self.title if self.title is not None else "Unknown"
    
    def summary(self) -> str:
        return f"{self.display_title} - {self.media_type.label}"
    
    def describe(self) -> str:
        parts = [f"{self.display_title} [{self.media_type.label}{' 4K' if self.is_4k else ''}]"]
        if self.size is not None:
            parts.append(format_size(self.size))
        if self.status:
            parts.append(self.status)
        return " - ".join(parts) + f"\n   {self.watch_history.describe()}"
