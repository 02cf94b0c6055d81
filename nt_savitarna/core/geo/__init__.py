"""Coordinate helpers and address geocoding."""

from .coordinates import format_coordinates, is_valid_coordinates, parse_coordinates
from .errors import GeocodingError
from .geocoding import GeocodeResult, NominatimClient, build_address_query, normalize_city

__all__ = [
    "GeocodeResult",
    "GeocodingError",
    "NominatimClient",
    "build_address_query",
    "format_coordinates",
    "is_valid_coordinates",
    "normalize_city",
    "parse_coordinates",
]
