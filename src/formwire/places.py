"""Google Places lookups for address fields."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

log = logging.getLogger(__name__)

AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class PlacesClient:
    """Thin wrapper around httpx for simpler mocking in tests."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        if client is None:
            client = httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
        self._client = client

    async def autocomplete(self, api_key: str, text: str) -> List[Dict[str, Any]]:
        """Return address options for partial input, as ``{label, value}``
        pairs where the value is the full prediction."""

        if not api_key or not text:
            return []

        r = await self._client.get(AUTOCOMPLETE_URL, params={"input": text, "key": api_key})
        r.raise_for_status()
        payload = r.json()

        status = payload.get("status")
        if status not in (None, "OK", "ZERO_RESULTS"):
            log.warning("places autocomplete returned %s: %s", status, payload.get("error_message", ""))

        predictions = payload.get("predictions") or []
        return [{"label": p.get("description", ""), "value": p} for p in predictions]

    async def close(self) -> None:
        await self._client.aclose()
