import httpx
from typing import Optional
import logging

from mediacull.models import MediaType

logger = logging.getLogger(__name__)


class ArrClient:
    """Shared client for the Radarr/Sonarr v3 API.
    
    Subclasses name the library resource and the exclusion-list parameter
    their delete endpoint takes.
    """
    
    service = "arr"
    media_type: MediaType
    resource = ""
    exclusion_param = ""
    
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
    
    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)
    
    async def test_connection(self) -> dict:
        """Test the connection and return system status."""
        async with self._client() as client:
            response = await client.get(
                f"{self.base_url}/api/v3/system/status",
                headers=self.headers,
                timeout=10.0
            )
            response.raise_for_status()
            return response.json()
    
    async def get_item(self, item_id: int) -> dict:
        """Get a library entry by its id."""
        logger.debug(f"{self.service}: fetching {self.resource} {item_id}")
        async with self._client() as client:
            response = await client.get(
                f"{self.base_url}/api/v3/{self.resource}/{item_id}",
                headers=self.headers,
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
    
    async def delete_item(self, item_id: int) -> None:
        """Delete a library entry together with its files.
        
        The entry is never added to the import exclusion list, so it can be
        requested again later.
        """
        logger.debug(f"{self.service}: deleting {self.resource} {item_id}")
        async with self._client() as client:
            response = await client.delete(
                f"{self.base_url}/api/v3/{self.resource}/{item_id}",
                params={
                    "deleteFiles": "true",
                    self.exclusion_param: "false"
                },
                headers=self.headers,
                timeout=self.timeout
            )
            response.raise_for_status()
    
    def item_size(self, item: dict) -> Optional[int]:
        return item.get("sizeOnDisk")
