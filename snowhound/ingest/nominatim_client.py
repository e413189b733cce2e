"""OpenStreetMap Nominatim geocoding client (no key, descriptive User-Agent required)."""

from snowhound.config.schema import DEFAULT_USER_AGENT
from snowhound.ingest.http_client import request_json

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
PROVIDER = "nominatim"
RESULT_LIMIT = 5


class NominatimClient:
    def __init__(
        self,
        base_url: str = NOMINATIM_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout

    async def search(self, query: str) -> list[dict]:
        """Raw search results, at most RESULT_LIMIT entries."""
        data = await request_json(
            "GET",
            f"{self.base_url}/search",
            provider=PROVIDER,
            timeout=self.timeout,
            params={"format": "json", "q": query, "limit": RESULT_LIMIT},
            headers={"User-Agent": self.user_agent},
        )
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, dict)][:RESULT_LIMIT]
