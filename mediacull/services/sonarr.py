from typing import Optional

from mediacull.models import MediaType
from mediacull.services.arr import ArrClient


class SonarrClient(ArrClient):
    """Client for the Sonarr series library."""
    
    service = "Sonarr"
    media_type = MediaType.TV
    resource = "series"
    exclusion_param = "addImportListExclusion"
    
    def item_size(self, item: dict) -> Optional[int]:
        # Series only report their size in the statistics block
        statistics = item.get("statistics") or {}
        return statistics.get("sizeOnDisk")
