"""Great-circle distance and location input validation."""

import math
from typing import Any

from outletbase.domain.entities import Coordinates
from outletbase.domain.exceptions import InvalidInputError

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in kilometres.

    Args:
        lat1: Latitude of the first point in decimal degrees.
        lon1: Longitude of the first point in decimal degrees.
        lat2: Latitude of the second point in decimal degrees.
        lon2: Longitude of the second point in decimal degrees.

    Returns:
        Distance rounded to two decimal places.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)


def validate_postal_code(value: Any, length: int = 6) -> str:
    """Normalize and validate a postal code.

    Args:
        value: Raw input; surrounding whitespace is ignored.
        length: Required number of digits.

    Returns:
        The stripped postal code.

    Raises:
        InvalidInputError: If the value is not exactly ``length`` ASCII digits.
    """
    if value is None:
        raise InvalidInputError("Postal code is required")
    postal_code = str(value).strip()
    if len(postal_code) != length or not (postal_code.isascii() and postal_code.isdigit()):
        raise InvalidInputError(f"Postal code must be exactly {length} digits")
    return postal_code


def _parse_degrees(value: Any, label: str) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{label} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{label} must be a number") from None
    if not math.isfinite(number):
        raise InvalidInputError(f"{label} must be a finite number")
    return number


def parse_coordinates(latitude: Any, longitude: Any) -> Coordinates:
    """Parse a latitude/longitude pair.

    Strings are accepted as long as they parse as finite floats.

    Raises:
        InvalidInputError: If either value is missing, non-numeric, not
            finite or out of range.
    """
    lat = _parse_degrees(latitude, "Latitude")
    lon = _parse_degrees(longitude, "Longitude")
    if not -90.0 <= lat <= 90.0:
        raise InvalidInputError("Latitude must be between -90 and 90")
    if not -180.0 <= lon <= 180.0:
        raise InvalidInputError("Longitude must be between -180 and 180")
    return Coordinates(latitude=lat, longitude=lon)
