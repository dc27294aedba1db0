from dataclasses import dataclass
from typing import Optional

import httpx

from mediacull.config import ServiceConnection, Settings
from mediacull.models import MediaType
from mediacull.services.arr import ArrClient
from mediacull.services.overseerr import OverseerrClient
from mediacull.services.radarr import RadarrClient
from mediacull.services.sonarr import SonarrClient
from mediacull.services.tautulli import TautulliClient


@dataclass
class Backends:
    """The set of configured backend clients."""
    overseerr: OverseerrClient
    tautulli: TautulliClient
    radarr: RadarrClient
    sonarr: SonarrClient
    radarr_4k: Optional[RadarrClient] = None
    sonarr_4k: Optional[SonarrClient] = None
    
    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "Backends":
        def make(client_cls, conn: Optional[ServiceConnection]):
            if conn is None:
                return None
            return client_cls(conn.url, conn.api_key, timeout=settings.http_timeout, transport=transport)
        
        return cls(
            overseerr=make(OverseerrClient, settings.overseerr),
            tautulli=make(TautulliClient, settings.tautulli),
            radarr=make(RadarrClient, settings.radarr),
            sonarr=make(SonarrClient, settings.sonarr),
            radarr_4k=make(RadarrClient, settings.radarr_4k),
            sonarr_4k=make(SonarrClient, settings.sonarr_4k),
        )
    
    def library(self, media_type: MediaType, is_4k: bool = False) -> Optional[ArrClient]:
        """Library backend that manages items of this kind, if configured."""
        if media_type is MediaType.MOVIE:
            return self.radarr_4k if is_4k else self.radarr
        return self.sonarr_4k if is_4k else self.sonarr
    
    def configured(self) -> list[tuple[str, object]]:
        """Name and client of every configured backend."""
        named = [
            ("Overseerr", self.overseerr),
            ("Tautulli", self.tautulli),
            ("Radarr", self.radarr),
            ("Sonarr", self.sonarr),
            ("Radarr 4K", self.radarr_4k),
            ("Sonarr 4K", self.sonarr_4k),
        ]
        return [(name, client) for name, client in named if client is not None]
