"""Error types raised by the geocoding layer.

``GeocodingError`` carries the HTTP status code and response body of a failed
Nominatim call so that callers can log and map it.
"""

from __future__ import annotations

from typing import Any, Optional


class GeocodingError(Exception):
    """Base error for geocoding failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code returned by the geocoding service.
        details: Optional response payload for diagnosis.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details
