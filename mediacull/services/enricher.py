from typing import Iterable, Optional
import logging

from mediacull.models import MediaItem, MediaRequest, MediaType, WatchHistory
from mediacull.services.backends import Backends
from mediacull.services.history import HistoryReducer, WatchHistoryBuilder

logger = logging.getLogger(__name__)


class MediaEnricher:
    """Joins a request with its library metadata and watch history."""
    
    def __init__(
        self,
        backends: Backends,
        reducer: Optional[HistoryReducer] = None,
        builder: Optional[WatchHistoryBuilder] = None
    ):
        self.backends = backends
        self.reducer = reducer or HistoryReducer(backends.tautulli)
        self.builder = builder or WatchHistoryBuilder()
    
    async def enrich(self, request: MediaRequest) -> Optional[MediaItem]:
        """Build the media item for a request.
        
        Returns None when the request cannot be inspected: its library
        instance is not configured, or the library has no entry for it yet.
        """
        library = self.backends.library(request.type, request.is4k)
        if library is None:
            logger.warning(f"Skipping request {request.id}: no 4K {request.type.label} library configured")
            return None
        
        external_id = request.external_id
        if external_id is None:
            logger.warning(f"Skipping request {request.id}: not in {library.service} yet")
            return None
        
        resource = await library.get_item(external_id)
        watch_history = await self.watch_history(request.rating_key, request.type)
        
        return MediaItem(
            title=resource.get("title"),
            media_type=request.type,
            external_id=external_id,
            size=library.item_size(resource),
            status=resource.get("status"),
            watch_history=watch_history,
            is_4k=request.is4k,
            request_id=request.id
        )
    
    async def watch_history(self, rating_key: Optional[str], media_type: MediaType) -> WatchHistory:
        if rating_key is None:
            # Not on the media server yet, so nobody can have watched it
            return WatchHistory(media_type)
        reduced = await self.reducer.fetch_and_reduce(rating_key, media_type)
        return self.builder.build(reduced, media_type, rating_key)
    
    async def enrich_all(self, requests: Iterable[MediaRequest]) -> list[MediaItem]:
        """Enrich requests one after the other.
        
        Several requests can point at the same library entry; only the first
        one is kept.
        """
        items = []
        seen = set()
        for request in requests:
            item = await self.enrich(request)
            if item is None:
                continue
            identity = (item.media_type, item.is_4k, item.external_id)
            if identity in seen:
                logger.debug(f"Request {request.id} duplicates {item.display_title}")
                continue
            seen.add(identity)
            items.append(item)
        return items
