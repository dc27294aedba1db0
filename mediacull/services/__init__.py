from mediacull.services.backends import Backends
from mediacull.services.deletion import DeletionOrchestrator
from mediacull.services.enricher import MediaEnricher
from mediacull.services.history import HistoryReducer, WatchHistoryBuilder, reduce_latest
from mediacull.services.overseerr import OverseerrClient
from mediacull.services.radarr import RadarrClient
from mediacull.services.sonarr import SonarrClient
from mediacull.services.sorting import sort_by_code, sort_items
from mediacull.services.tautulli import TautulliClient

__all__ = [
    "Backends",
    "DeletionOrchestrator",
    "MediaEnricher",
    "HistoryReducer",
    "WatchHistoryBuilder",
    "reduce_latest",
    "OverseerrClient",
    "RadarrClient",
    "SonarrClient",
    "sort_by_code",
    "sort_items",
    "TautulliClient",
]
