"""
Geocoding through the OpenStreetMap Nominatim search API.

Nominatim is free and keyless but rate limited (about one request per second)
and requires an identifying User-Agent. Lithuanian order addresses often carry
administrative suffixes (``m.``, ``mst.``, ``sav.``) and genitive city names,
which Nominatim does not resolve, so they are normalized before the query.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from .errors import GeocodingError

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "NT-Savitarna/1.0 (property valuation service)"

_SUFFIX_RE = re.compile(r"\s*(?:m\.|mst\.|sav\.)\s*$")

CITY_NOMINATIVE = {
    "Vilniaus": "Vilnius",
    "Kauno": "Kaunas",
    "Klaipėdos": "Klaipėda",
    "Šiaulių": "Šiauliai",
    "Panevėžio": "Panevėžys",
    "Alytaus": "Alytus",
    "Marijampolės": "Marijampolė",
    "Utenos": "Utena",
    "Telšių": "Telšiai",
    "Tauragės": "Tauragė",
}


@dataclass(frozen=True)
class GeocodeResult:
    lat: float
    lng: float
    display_name: str


def normalize_city(city: Optional[str]) -> Optional[str]:
    """``"Vilniaus m. sav."`` → ``"Vilnius"``; unknown names only lose their suffixes."""
    if not city:
        return None
    normalized = city.strip()
    while True:
        stripped = _SUFFIX_RE.sub("", normalized).strip()
        if stripped == normalized:
            break
        normalized = stripped
    if not normalized:
        return None
    return CITY_NOMINATIVE.get(normalized, normalized)


def build_address_query(
    street: Optional[str], city: Optional[str], municipality: Optional[str] = None
) -> Optional[str]:
    """Search string ``"street, City"``; the municipality stands in for a missing city.

    The house number is left out on purpose, Nominatim matches streets far more
    reliably without it.
    """
    parts = []
    if street and street.strip():
        parts.append(street.strip())
    place = normalize_city(city) or normalize_city(municipality)
    if place:
        parts.append(place)
    if not parts:
        return None
    return ", ".join(parts)


class NominatimClient:
    """
    Thin async HTTP client for the Nominatim ``/search`` endpoint.

    Responsibilities:
    - geocode: resolve a free-form query to the best matching coordinates
    - geocode_address: build the query from order address parts and resolve it
    """

    def __init__(
        self,
        base_url: str = NOMINATIM_SEARCH_URL,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        country_codes: str = "lt",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url
        self.user_agent = user_agent
        self.country_codes = country_codes
        self.timeout = timeout
        self._client = client
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept-Language": "lt,en"}

    async def _get(self, params: dict[str, str]) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self.base_url, params=params, headers=self._headers())
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await client.get(self.base_url, params=params, headers=self._headers())

    async def geocode(self, query: str) -> Optional[GeocodeResult]:
        """Resolve ``query`` to coordinates.

        Returns:
            The best match, or None when Nominatim finds nothing usable.

        Raises:
            GeocodingError: the service is unreachable or answers with an error status.
        """
        params = {"q": query, "format": "json", "limit": "1", "countrycodes": self.country_codes}
        try:
            self._logger.debug("NominatimClient.geocode: GET %s q=%s", self.base_url, query)
            r = await self._get(params)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GeocodingError(
                f"Nominatim search failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.RequestError as e:
            raise GeocodingError(f"Nominatim unreachable: {e}") from e

        results = r.json()
        if not isinstance(results, list) or not results:
            self._logger.warning("NominatimClient.geocode: no results for %r", query)
            return None

        best = results[0]
        try:
            lat = float(best["lat"])
            lng = float(best["lon"])
        except (KeyError, TypeError, ValueError):
            self._logger.error("NominatimClient.geocode: invalid coordinates in response for %r", query)
            return None

        result = GeocodeResult(lat=lat, lng=lng, display_name=best.get("display_name") or query)
        self._logger.debug("NominatimClient.geocode: resolved %r to %s,%s", query, lat, lng)
        return result

    async def geocode_address(
        self,
        street: Optional[str],
        city: Optional[str],
        municipality: Optional[str] = None,
    ) -> Optional[GeocodeResult]:
        query = build_address_query(street, city, municipality)
        if query is None:
            self._logger.warning("NominatimClient.geocode_address: insufficient address data")
            return None
        return await self.geocode(query)
