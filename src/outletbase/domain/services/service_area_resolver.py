"""Service-area resolution.

Answers "which outlets deliver to this location?" from either a postal
code or a pair of device coordinates. Outlets with coordinates deliver
within their own ``delivery_radius_km``; outlets without coordinates can
only be matched on their exact postal code.
"""

from typing import Any, Protocol

from outletbase.core.config import Settings, get_settings
from outletbase.core.logging import get_logger
from outletbase.domain.entities import (
    Coordinates,
    ServiceabilityResult,
    ServiceableOutlet,
    ensure_utc,
)
from outletbase.domain.exceptions import InvalidInputError, LocationNotResolvableError
from outletbase.domain.services.geo import haversine_km, parse_coordinates, validate_postal_code
from outletbase.infrastructure.persistence.repositories import OutletRepository

logger = get_logger(__name__)

NOT_SERVICEABLE_MESSAGE = "Sorry, we don't deliver to this location yet"


class Geocoder(Protocol):
    async def resolve(self, address: str, postal_code: str | None = None) -> Coordinates | None:
        ...


def _distance_order(match: ServiceableOutlet) -> tuple[Any, ...]:
    return (match.distance_km, ensure_utc(match.outlet.created_at), match.outlet.id)


class ServiceAreaResolver:
    """Read-only lookup of outlets serving a location."""

    def __init__(
        self,
        outlet_repo: OutletRepository,
        geocoder: Geocoder,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            outlet_repo: Source of active outlets.
            geocoder: Collaborator that places postal codes on the map.
            settings: Provides the resolution mode and postal-code length.
        """
        self.outlet_repo = outlet_repo
        self.geocoder = geocoder
        self.settings = settings or get_settings()

    async def resolve_by_coordinates(
        self,
        point: Coordinates,
        max_distance_km: float | None = None,
    ) -> list[ServiceableOutlet]:
        """Outlets whose delivery radius covers ``point``, nearest first.

        Args:
            point: Customer location.
            max_distance_km: Optional cap applied on top of each outlet's
                own radius.

        Returns:
            Matches sorted by (distance, created_at, id).
        """
        if max_distance_km is not None and max_distance_km <= 0:
            raise InvalidInputError("max_distance_km must be positive")

        matches: list[ServiceableOutlet] = []
        for outlet in await self.outlet_repo.list_active_with_coordinates():
            distance = haversine_km(
                point.latitude, point.longitude, outlet.latitude, outlet.longitude
            )
            if distance > outlet.delivery_radius_km:
                continue
            if max_distance_km is not None and distance > max_distance_km:
                continue
            matches.append(ServiceableOutlet(outlet=outlet, distance_km=distance))

        matches.sort(key=_distance_order)
        return matches

    async def resolve_by_postal_code(self, postal_code: str) -> list[ServiceableOutlet]:
        """Outlets serving a postal code.

        In ``postal`` mode only exact postal-code matches count. In ``geo``
        mode the code is geocoded first; distance matches come before
        outlets without coordinates that share the postal code.

        Raises:
            InvalidInputError: If the postal code is malformed.
            LocationNotResolvableError: If the geocoder cannot place it.
        """
        postal_code = validate_postal_code(postal_code, self.settings.postal_code_length)

        if self.settings.service_area_mode == "postal":
            return [
                ServiceableOutlet(outlet=outlet)
                for outlet in await self.outlet_repo.list_active_by_postal_code(postal_code)
            ]

        point = await self.geocoder.resolve("", postal_code)
        if point is None:
            raise LocationNotResolvableError(f"Could not locate postal code {postal_code}")

        matches = await self.resolve_by_coordinates(point)
        postal_only = [
            ServiceableOutlet(outlet=outlet)
            for outlet in await self.outlet_repo.list_active_by_postal_code(postal_code)
            if not outlet.has_coordinates
        ]
        return matches + postal_only

    async def check_coordinates(
        self,
        latitude: Any,
        longitude: Any,
        max_distance_km: float | None = None,
    ) -> ServiceabilityResult:
        """Serviceability answer for device coordinates.

        Raises:
            InvalidInputError: If the coordinates are malformed.
        """
        point = parse_coordinates(latitude, longitude)
        matches = await self.resolve_by_coordinates(point, max_distance_km)
        if not matches:
            logger.info(
                "No outlets in range",
                latitude=point.latitude,
                longitude=point.longitude,
            )
            return ServiceabilityResult(serviceable=False, message=NOT_SERVICEABLE_MESSAGE)
        return ServiceabilityResult(serviceable=True, outlets=matches)

    async def check_postal_code(self, postal_code: Any) -> ServiceabilityResult:
        """Serviceability answer for a postal code.

        An unresolvable postal code and an empty match set both come back
        as not serviceable.

        Raises:
            InvalidInputError: If the postal code is malformed.
        """
        try:
            matches = await self.resolve_by_postal_code(postal_code)
        except LocationNotResolvableError as e:
            logger.info("Postal code not resolvable", postal_code=postal_code, reason=e.message)
            return ServiceabilityResult(serviceable=False, message=NOT_SERVICEABLE_MESSAGE)

        if not matches:
            logger.info("No outlets serve postal code", postal_code=postal_code)
            return ServiceabilityResult(serviceable=False, message=NOT_SERVICEABLE_MESSAGE)
        return ServiceabilityResult(serviceable=True, outlets=matches)
