from mediacull.models import MediaType
from mediacull.services.arr import ArrClient


class RadarrClient(ArrClient):
    """Client for the Radarr movie library."""
    
    service = "Radarr"
    media_type = MediaType.MOVIE
    resource = "movie"
    exclusion_param = "addImportExclusion"
