"""Watch history: paging raw Tautulli records and reducing them per user."""

from datetime import datetime, timezone
from typing import Iterable
import logging

from mediacull.errors import WatchHistoryError
from mediacull.models import (
    EpisodeWatch, HistoryRecord, MediaType, MovieWatch, WatchHistory
)
from mediacull.services.tautulli import TautulliClient

logger = logging.getLogger(__name__)

HISTORY_PAGE_SIZE = 1000


def reduce_latest(records: Iterable[HistoryRecord]) -> dict[str, HistoryRecord]:
    """Keep the most recent record per user.
    
    A record only replaces the kept one when its timestamp is strictly
    greater, so on ties the first record seen wins.
    """
    latest: dict[str, HistoryRecord] = {}
    for record in records:
        kept = latest.get(record.user)
        if kept is None or record.date > kept.date:
            latest[record.user] = record
    return latest


class HistoryReducer:
    """Fetches the full history of one item and reduces it per user."""
    
    def __init__(self, tautulli: TautulliClient, page_size: int = HISTORY_PAGE_SIZE):
        self.tautulli = tautulli
        self.page_size = page_size
    
    async def fetch_history(self, rating_key: str, media_type: MediaType) -> list[HistoryRecord]:
        """Get every history record for an item.
        
        Pages are requested until one comes back shorter than the page size.
        Tautulli's ``start`` is a record offset, so page ``n`` starts at
        ``n * page_size``.
        """
        history: list[HistoryRecord] = []
        page = 0
        while True:
            result = await self.tautulli.get_history(**{
                media_type.history_key: rating_key,
                "length": self.page_size,
                "start": page * self.page_size,
            })
            history.extend(result.records)
            if len(result.records) < self.page_size:
                break
            page += 1
        
        logger.debug(f"{len(history)} history records over {page + 1} pages for {rating_key}")
        
        if media_type is MediaType.MOVIE:
            # Movies have no season/episode, whatever the backend sends
            history = [
                record.model_copy(update={"parent_media_index": None, "media_index": None})
                for record in history
            ]
        return history
    
    async def fetch_and_reduce(self, rating_key: str, media_type: MediaType) -> dict[str, HistoryRecord]:
        history = await self.fetch_history(rating_key, media_type)
        return reduce_latest(history)


def clamp_progress(percent_complete: int) -> int:
    """Cap completion at 100%; values above are stored as 100."""
    return max(0, min(percent_complete, 100))


def unix_seconds_to_date(timestamp: int, rating_key: str) -> datetime:
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise WatchHistoryError(rating_key, f"Failed to parse unix time {timestamp}") from e


class WatchHistoryBuilder:
    """Turns reduced history records into a typed watch history."""
    
    def build(
        self,
        reduced: dict[str, HistoryRecord],
        media_type: MediaType,
        rating_key: str
    ) -> WatchHistory:
        make_watch = self._episode_watch if media_type is MediaType.TV else self._movie_watch
        watches = tuple(
            make_watch(user, reduced[user], rating_key)
            for user in sorted(reduced)
        )
        return WatchHistory(media_type, watches)
    
    def _movie_watch(self, user: str, record: HistoryRecord, rating_key: str) -> MovieWatch:
        return MovieWatch(
            user=user,
            last_watched=unix_seconds_to_date(record.date, rating_key),
            progress=clamp_progress(record.percent_complete)
        )
    
    def _episode_watch(self, user: str, record: HistoryRecord, rating_key: str) -> EpisodeWatch:
        if record.parent_media_index is None or record.media_index is None:
            raise WatchHistoryError(
                rating_key,
                f"Episode watch by {user} has no season/episode number"
            )
        return EpisodeWatch(
            user=user,
            last_watched=unix_seconds_to_date(record.date, rating_key),
            progress=clamp_progress(record.percent_complete),
            season=record.parent_media_index,
            episode=record.media_index
        )
