"""
Coordinate helpers.

Coordinates are handled as ``(lat, lng)`` tuples. Legacy order rows carry MySQL
``POINT`` values as WKB hex; :func:`parse_coordinates` understands those as
well as the shapes accepted by the admin API.
"""

from __future__ import annotations

import math
import re
import struct
from typing import Any, Mapping, Optional, Tuple

Coordinates = Tuple[float, float]

DEFAULT_CENTER: Coordinates = (54.6872, 25.2797)  # Vilnius
DEFAULT_ZOOM = 15

LITHUANIA_BOUNDS = {
    "north": 56.45,
    "south": 53.89,
    "west": 20.95,
    "east": 26.84,
}

# 4 bytes SRID + 1 byte order + 4 bytes type + 2 doubles
MYSQL_POINT_LENGTH = 25

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


def is_valid_latitude(lat: Any) -> bool:
    return _is_number(lat) and -90 <= lat <= 90


def is_valid_longitude(lng: Any) -> bool:
    return _is_number(lng) and -180 <= lng <= 180


def is_valid_coordinates(coords: Optional[Tuple[Any, Any]]) -> bool:
    """Valid latitude/longitude pair; ``(0, 0)`` marks missing data and is rejected."""
    if not coords or len(coords) != 2:
        return False
    lat, lng = coords
    if lat == 0 and lng == 0:
        return False
    return is_valid_latitude(lat) and is_valid_longitude(lng)


def is_within_lithuania(coords: Coordinates) -> bool:
    lat, lng = coords
    return (
        LITHUANIA_BOUNDS["south"] <= lat <= LITHUANIA_BOUNDS["north"]
        and LITHUANIA_BOUNDS["west"] <= lng <= LITHUANIA_BOUNDS["east"]
    )


def format_coordinates(coords: Optional[Coordinates]) -> str:
    if not is_valid_coordinates(coords):
        return "—"
    lat, lng = coords
    return f"{lat:.6f}, {lng:.6f}"


def parse_point_wkb(data: bytes) -> Optional[Coordinates]:
    """Decode a MySQL ``POINT`` (SRID prefix followed by little-endian WKB).

    MySQL stores ``(X, Y) = (lng, lat)``. Rows written with the axes swapped are
    detected for Lithuanian addresses and corrected.
    """
    if len(data) < MYSQL_POINT_LENGTH:
        return None
    lng, lat = struct.unpack_from("<dd", data, 9)
    if lng > 50 and lat < 30:
        lat, lng = lng, lat
    if not is_valid_latitude(lat) or not is_valid_longitude(lng):
        return None
    return lat, lng


def parse_coordinates(value: Any) -> Optional[Coordinates]:
    """Parse coordinates from any supported representation.

    Accepted: ``{"lat", "lng"}`` or ``{"latitude", "longitude"}`` mappings,
    ``[lat, lng]`` pairs, ``"lat,lng"`` strings, WKB hex strings and raw bytes.
    Returns ``None`` when nothing usable is found.
    """
    if value is None or value == "":
        return None

    if isinstance(value, (bytes, bytearray)):
        return parse_point_wkb(bytes(value))

    if isinstance(value, Mapping):
        for lat_key, lng_key in (("lat", "lng"), ("latitude", "longitude")):
            lat, lng = value.get(lat_key), value.get(lng_key)
            if _is_number(lat) and _is_number(lng):
                return float(lat), float(lng)
        return None

    if isinstance(value, (list, tuple)):
        if len(value) == 2 and all(_is_number(v) for v in value):
            return float(value[0]), float(value[1])
        return None

    if isinstance(value, str):
        text = value.strip()
        if "," in text:
            parts = [part.strip() for part in text.split(",")]
            if len(parts) != 2:
                return None
            try:
                return float(parts[0]), float(parts[1])
            except ValueError:
                return None
        if _HEX_RE.match(text) and len(text) % 2 == 0:
            return parse_point_wkb(bytes.fromhex(text))

    return None
