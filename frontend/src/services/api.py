"""Client for the tag administration endpoints."""

import logging
from typing import Dict, Iterable, Optional

import httpx

logger = logging.getLogger(__name__)

AJAX_PATH = "/admin/tags/ajax"


class WSSEAuth:
    """Nonce, timestamp and digest embedded in the rendered page."""

    def __init__(self, nonce: str, timestamp: str, digest: str):
        self.nonce = nonce
        self.timestamp = timestamp
        self.digest = digest

    def as_params(self) -> Dict[str, str]:
        return {"nonce": self.nonce, "timestamp": self.timestamp, "digest": self.digest}


class TagAdminClient:
    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the backend
            transport: Optional httpx transport (e.g. ``httpx.ASGITransport``)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"}
        )

    async def aclose(self):
        """Clean up resources"""
        await self._client.aclose()
        logger.info("Tag admin client closed")

    async def _send(self, method: str, path: str, **kwargs) -> Dict:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Tag request failed with {e.response.status_code}: {e.response.text}")
            raise

    async def fetch_tags(self, auth: WSSEAuth, search: str = "", path: str = AJAX_PATH) -> Dict:
        """Fetch the weighted tag collection matching ``search``."""
        return await self._send("GET", path, params={**auth.as_params(), "search": search})

    async def delete_tags(self, auth: WSSEAuth, term_ids: Iterable[int]) -> Dict:
        """Delete the given terms."""
        form = {**auth.as_params(), "action": "delete"}
        form.update({f"term_{term_id}": "1" for term_id in term_ids})
        return await self._send("POST", AJAX_PATH, data=form)

    async def rename_tags(self, auth: WSSEAuth, term_ids: Iterable[int], master: str) -> Dict:
        """Merge the given terms into ``master``."""
        form = {**auth.as_params(), "action": "rename", "master": master}
        form.update({f"term_{term_id}": "1" for term_id in term_ids})
        return await self._send("POST", AJAX_PATH, data=form)
