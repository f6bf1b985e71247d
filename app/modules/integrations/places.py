import logging
from typing import Any, Dict, List, Optional

import httpx

from app.config import Settings
from app.core.exceptions import IntegrationError, IntegrationUnavailableError

logger = logging.getLogger(__name__)

AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
FALLBACK = "Enter the address manually"


class PlacesService:
    """Proxy for Google Places Autocomplete so the API key stays server-side"""

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self._transport = transport

    @property
    def configured(self) -> bool:
        return self.settings.places_configured

    def autocomplete(self, query: str) -> List[Dict[str, Any]]:
        if not self.configured:
            raise IntegrationUnavailableError("Places search is not configured", fallback=FALLBACK)

        params = {"input": query, "key": self.settings.google_maps_api_key}
        try:
            with httpx.Client(timeout=self.settings.integration_timeout_seconds, transport=self._transport) as client:
                response = client.get(AUTOCOMPLETE_URL, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Places autocomplete request failed: {e}")
            raise IntegrationError("Places search failed", fallback=FALLBACK) from e

        if response.is_error:
            logger.error(f"Places autocomplete returned {response.status_code}")
            raise IntegrationError("Places search failed", fallback=FALLBACK)

        data = response.json()
        status = data.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            logger.error(f"Places autocomplete status {status}: {data.get('error_message')}")
            raise IntegrationError("Places search failed", fallback=FALLBACK)

        return [
            {
                "description": p.get("description", ""),
                "place_id": p.get("place_id"),
                "main_text": (p.get("structured_formatting") or {}).get("main_text"),
                "secondary_text": (p.get("structured_formatting") or {}).get("secondary_text"),
            }
            for p in data.get("predictions", [])
        ]
