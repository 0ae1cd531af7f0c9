"""DataForSEO client: connectivity check and organic SERP fetch."""

import logging
from typing import Any

import httpx

from searchchat.config import DATAFORSEO_BASE_URL

logger = logging.getLogger(__name__)

STATUS_PATH = "/v3/appendix/status"
ORGANIC_LIVE_PATH = "/v3/serp/google/organic/live/advanced"

LANGUAGE_CODE = "en"
LOCATION_NAME = "United States"


class SearchProviderError(Exception):
    """The search provider answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"DataForSEO error {status_code}: {body}")


class DataForSEOClient:
    """Thin async wrapper over the two DataForSEO endpoints we use.

    Both calls authenticate with HTTP basic auth. Nothing is retried.
    """

    def __init__(
        self,
        *,
        login: str,
        password: str,
        client: httpx.AsyncClient | None = None,
        base_url: str = DATAFORSEO_BASE_URL,
    ) -> None:
        self._auth = httpx.BasicAuth(login, password)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url)

    async def check_connection(self) -> bool:
        """Return True when the status endpoint answers with a 2xx."""
        try:
            response = await self._client.get(
                STATUS_PATH,
                auth=self._auth,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.warning("DataForSEO connectivity check failed: %s", e)
            return False
        if not response.is_success:
            logger.warning("DataForSEO status check returned %d", response.status_code)
        return response.is_success

    async def fetch_results(self, query: str) -> dict[str, Any]:
        """Run one live organic search and return the raw JSON payload."""
        body = [
            {
                "language_code": LANGUAGE_CODE,
                "location_name": LOCATION_NAME,
                "keyword": query,
            }
        ]
        response = await self._client.post(ORGANIC_LIVE_PATH, auth=self._auth, json=body)
        if not response.is_success:
            raise SearchProviderError(response.status_code, response.text)
        return response.json()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
