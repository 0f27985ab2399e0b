"""Client for loading journey records from the backend CRUD API.

so that a journey can be analyzed with one line of code:
graph = loader.get_graph("3f1c...")
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from journeygraph.adapters.journey_ingest import graph_from_record
from journeygraph.config import JOURNEY_API_TIMEOUT, JOURNEY_API_TOKEN, JOURNEY_API_URL
from journeygraph.errors import JourneyLoaderError
from journeygraph.models import JourneyGraph, JourneyRecord
from journeygraph.utils.logging import get_logger

logger = get_logger(__name__)


class JourneyLoader:
    """Load journeys from the backend for analysis.

    Records are cached by journey id to avoid repeated network calls.
    """

    def __init__(
        self,
        base_url: str = JOURNEY_API_URL,
        token: str | None = JOURNEY_API_TOKEN,
        timeout: float = JOURNEY_API_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the backend API
            token: Optional bearer token sent with every request
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._cache: dict[str, JourneyRecord] = {}

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get(self, journey_id: str) -> JourneyRecord:
        """Fetch a journey record, from the cache when possible."""
        if journey_id in self._cache:
            return self._cache[journey_id]

        url = f"{self.base_url}/journeys/{journey_id}"

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url, headers=self._headers())

                if response.status_code == 404:
                    raise JourneyLoaderError(f"Journey not found: {journey_id}")

                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            raise JourneyLoaderError(
                f"Backend returned {e.response.status_code} for journey {journey_id}"
            ) from e
        except httpx.RequestError as e:
            raise JourneyLoaderError(
                f"Failed to connect to backend at {self.base_url}: {e}"
            ) from e

        # some endpoints wrap the payload in {"data": ...}
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]

        try:
            record = JourneyRecord.model_validate(data)
        except ValidationError as e:
            raise JourneyLoaderError(f"Malformed journey payload for {journey_id}: {e}") from e

        logger.debug("loaded journey %s with %d node(s)", journey_id, len(record.nodes))
        self._cache[journey_id] = record
        return record

    def get_graph(self, journey_id: str) -> JourneyGraph:
        """Fetch a journey and convert it to a graph snapshot."""
        return graph_from_record(self.get(journey_id))

    def clear_cache(self) -> None:
        """Clear the journey cache."""
        self._cache.clear()
