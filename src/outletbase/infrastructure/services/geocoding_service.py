"""Geocoding client backed by OpenStreetMap Nominatim.

Turns a free-text address and/or postal code into coordinates. The
lookup is an external collaborator: it is bounded by a timeout, never
retried, and every failure is reported as ``None``.
"""

import httpx

from outletbase.core.config import Settings, get_settings
from outletbase.core.logging import get_logger
from outletbase.domain.entities import Coordinates

logger = get_logger(__name__)


class GeocodingService:
    """Resolve addresses to coordinates via the Nominatim search API."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the geocoding client.

        Args:
            settings: Settings to read the endpoint, country and timeout from.
            transport: Optional httpx transport (used by tests).
        """
        self.settings = settings or get_settings()
        self._transport = transport

    def build_query(self, address: str, postal_code: str | None = None) -> str:
        """Build the free-text search query, scoped to the configured country."""
        parts = [part.strip() for part in (address, postal_code or "") if part and part.strip()]
        parts.append(self.settings.geocoding_country_name)
        return ", ".join(parts)

    async def resolve(self, address: str, postal_code: str | None = None) -> Coordinates | None:
        """Look up coordinates for an address.

        Args:
            address: Free-text address; may be empty when only a postal
                code is known.
            postal_code: Optional postal code.

        Returns:
            Coordinates of the best match, or None if the lookup failed,
            timed out or found nothing.
        """
        query = self.build_query(address, postal_code)
        params = {
            "format": "json",
            "q": query,
            "limit": 1,
            "countrycodes": self.settings.geocoding_country_code,
        }
        headers = {"User-Agent": self.settings.geocoding_user_agent}

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.geocoding_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self.settings.geocoding_url, params=params, headers=headers
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException:
            logger.warning("Geocoding timed out", query=query)
            return None
        except httpx.HTTPError as e:
            logger.warning("Geocoding request failed", query=query, error=str(e))
            return None
        except ValueError as e:
            logger.warning("Geocoding returned invalid JSON", query=query, error=str(e))
            return None

        if not isinstance(data, list) or not data:
            logger.info("Geocoding found no match", query=query)
            return None

        try:
            coordinates = Coordinates(
                latitude=float(data[0]["lat"]),
                longitude=float(data[0]["lon"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Geocoding result malformed", query=query, error=str(e))
            return None

        logger.debug(
            "Geocoding resolved",
            query=query,
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
        )
        return coordinates


class DisabledGeocodingService(GeocodingService):
    """Geocoder used when lookups are switched off; resolves nothing."""

    async def resolve(self, address: str, postal_code: str | None = None) -> Coordinates | None:
        return None


def get_geocoding_service(settings: Settings | None = None) -> GeocodingService:
    """Build the geocoder selected by settings."""
    settings = settings or get_settings()
    if not settings.geocoding_enabled:
        return DisabledGeocodingService(settings)
    return GeocodingService(settings)
