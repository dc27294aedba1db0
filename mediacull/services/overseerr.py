import httpx
from typing import Optional
import logging

from mediacull.models import MediaRequest

logger = logging.getLogger(__name__)


class OverseerrClient:
    """Client for interacting with the Overseerr API."""
    
    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "X-Api-Key": api_key,
            "Content-Type": "application/json"
        }
    
    async def test_connection(self) -> dict:
        """Test the connection to Overseerr and return its status."""
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.get(
                f"{self.base_url}/api/v1/status",
                headers=self.headers,
                timeout=10.0
            )
            response.raise_for_status()
            return response.json()
    
    async def get_requests(self, filter: str = "all", page_size: int = 100) -> list[MediaRequest]:
        """Get every request matching the filter, following the result pages."""
        requests = []
        skip = 0
        
        async with httpx.AsyncClient(transport=self.transport) as client:
            while True:
                response = await client.get(
                    f"{self.base_url}/api/v1/request",
                    params={"take": page_size, "skip": skip, "filter": filter},
                    headers=self.headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                data = response.json()
                
                results = data.get("results", [])
                requests.extend(MediaRequest.model_validate(r) for r in results)
                
                page_info = data.get("pageInfo") or {}
                if not results or page_info.get("page", 1) >= page_info.get("pages", 1):
                    break
                skip += page_size
        
        logger.debug(f"Overseerr: {len(requests)} requests")
        return requests
