import httpx
from typing import Optional
import logging

from mediacull.errors import BackendError
from mediacull.models import HistoryPage

logger = logging.getLogger(__name__)


class TautulliClient:
    """Client for interacting with the Tautulli API."""
    
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
    
    async def _command(self, cmd: str, timeout: Optional[float] = None, **params):
        """Run an API command and return the data of a successful response."""
        logger.debug(f"Tautulli: {cmd} {params}")
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.get(
                f"{self.base_url}/api/v2",
                params={"apikey": self.api_key, "cmd": cmd, **params},
                timeout=timeout or self.timeout
            )
            response.raise_for_status()
            payload = response.json()
        
        body = payload.get("response") or {}
        if body.get("result") != "success":
            raise BackendError("Tautulli", body.get("message") or f"{cmd} failed")
        return body.get("data")
    
    async def test_connection(self) -> dict:
        """Test the connection to Tautulli and return its info."""
        return await self._command("get_tautulli_info", timeout=10.0)
    
    async def get_history(self, **params) -> HistoryPage:
        """Get one page of playback history."""
        data = await self._command("get_history", **params)
        return HistoryPage.model_validate(data or {})
