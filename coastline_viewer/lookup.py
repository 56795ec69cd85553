"""Single-shot Nominatim client returning polygon geometry."""

import logging
from typing import Any, Dict, Optional

import requests

from .config import Settings
from .errors import GeometryError, LookupFailed, PlaceNotFound
from .geometry import GeoPolygon, parse_geometry

logger = logging.getLogger(__name__)


class PlaceLookupClient:
    """Asks the geocoding service for one result with its polygon attached."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self._settings = settings
        self._session = session or requests.Session()

    def build_params(self, query: str) -> Dict[str, Any]:
        return {
            "q": query,
            "format": "json",
            "polygon_geojson": 1,
            "limit": 1,
        }

    def lookup(self, query: str) -> GeoPolygon:
        """
        Return the first result's geometry for ``query``.

        Raises LookupFailed on transport or HTTP errors and PlaceNotFound when
        the service has no polygon for the query. No retries, no caching.
        """
        try:
            response = self._session.get(
                self._settings.nominatim_url,
                params=self.build_params(query),
                headers={"User-Agent": self._settings.user_agent},
                timeout=self._settings.lookup_timeout,
            )
            response.raise_for_status()
            results = response.json()
        except requests.RequestException as exc:
            raise LookupFailed(query, f"Lookup request failed: {exc}") from exc
        except ValueError as exc:
            raise LookupFailed(query, f"Lookup returned invalid JSON: {exc}") from exc

        if not isinstance(results, list) or not results:
            raise PlaceNotFound(query, f"No results for '{query}'")

        geojson = results[0].get("geojson") if isinstance(results[0], dict) else None
        if not geojson:
            raise PlaceNotFound(query, f"No geometry returned for '{query}'")

        try:
            geometry = parse_geometry(geojson)
        except GeometryError as exc:
            # Cities and POIs come back as points; there is no coastline to draw.
            raise PlaceNotFound(query, f"No polygon for '{query}': {exc}") from exc

        logger.debug("Lookup for %r returned %s", query, type(geometry).__name__)
        return geometry


__all__ = ["PlaceLookupClient"]
