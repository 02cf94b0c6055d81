"""Unit tests for the Nominatim geocoding client.

HTTP traffic goes through ``httpx.MockTransport``; nothing leaves the process.
"""

from __future__ import annotations

import httpx
import pytest

from nt_savitarna.core.geo import GeocodingError, NominatimClient, build_address_query, normalize_city

MOCK_URL = "http://mock.nominatim/search"


def _client(handler) -> NominatimClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NominatimClient(MOCK_URL, user_agent="nt-savitarna-tests", client=http_client)


class TestAddressQuery:
    """Test query building from order address parts."""

    @pytest.mark.parametrize(
        "city,expected",
        [
            ("Vilniaus m. sav.", "Vilnius"),
            ("Kauno m.", "Kaunas"),
            ("Utenos r. sav.", "Utenos r."),
            ("Nida", "Nida"),
            ("  ", None),
            (None, None),
        ],
    )
    def test_normalize_city(self, city, expected):
        assert normalize_city(city) == expected

    def test_street_and_city(self):
        assert build_address_query("Gedimino pr.", "Vilniaus m. sav.") == "Gedimino pr., Vilnius"

    def test_municipality_stands_in_for_city(self):
        assert build_address_query("Laisvės al.", None, "Kauno m. sav.") == "Laisvės al., Kaunas"

    def test_city_only(self):
        assert build_address_query(None, "Klaipėdos m.") == "Klaipėda"

    def test_nothing_usable(self):
        assert build_address_query(" ", None, None) is None


class TestNominatimClient:
    """Test the search call and its error handling."""

    async def test_geocode_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            seen["user_agent"] = request.headers["User-Agent"]
            return httpx.Response(
                200, json=[{"lat": "54.6872", "lon": "25.2797", "display_name": "Gedimino pr., Vilnius"}]
            )

        result = await _client(handler).geocode("Gedimino pr., Vilnius")

        assert result.lat == pytest.approx(54.6872)
        assert result.lng == pytest.approx(25.2797)
        assert result.display_name == "Gedimino pr., Vilnius"
        assert seen["params"] == {
            "q": "Gedimino pr., Vilnius",
            "format": "json",
            "limit": "1",
            "countrycodes": "lt",
        }
        assert seen["user_agent"] == "nt-savitarna-tests"

    async def test_geocode_no_results(self):
        result = await _client(lambda request: httpx.Response(200, json=[])).geocode("Niekur")

        assert result is None

    async def test_geocode_bad_coordinates(self):
        result = await _client(lambda request: httpx.Response(200, json=[{"lat": "x"}])).geocode("Vilnius")

        assert result is None

    async def test_geocode_http_error(self):
        client = _client(lambda request: httpx.Response(503, text="busy"))

        with pytest.raises(GeocodingError) as exc_info:
            await client.geocode("Vilnius")

        assert exc_info.value.status_code == 503
        assert exc_info.value.details == "busy"

    async def test_geocode_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GeocodingError):
            await _client(handler).geocode("Vilnius")

    async def test_geocode_address_without_address(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        assert await _client(handler).geocode_address(None, None, None) is None

    async def test_geocode_address_builds_query(self):
        queries = []

        def handler(request: httpx.Request) -> httpx.Response:
            queries.append(request.url.params["q"])
            return httpx.Response(200, json=[{"lat": "54.9", "lon": "23.9"}])

        result = await _client(handler).geocode_address("Laisvės al.", "Kauno m.")

        assert queries == ["Laisvės al., Kaunas"]
        assert result.display_name == "Laisvės al., Kaunas"
