"""Outlet value objects.

Outlets are persisted as SQLAlchemy models; the types here describe the
inputs and outputs of the outlet and service-area services.
"""

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from outletbase.infrastructure.persistence.models import OutletModel


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 point in decimal degrees."""

    latitude: float
    longitude: float


class _Unset:
    """Marker for fields left out of a partial update."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class OutletCreate:
    """Input for creating an outlet.

    ``latitude`` and ``longitude`` are given together or not at all; when
    absent the address is geocoded. ``admin_email`` bundles an admin
    invitation with the new outlet.
    """

    name: str
    address: str
    postal_code: str
    phone: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    delivery_radius_km: float | None = None
    admin_email: str | None = None


class PartialUpdate:
    """Mixin for dataclasses whose fields default to ``UNSET``."""

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set on this update, by column name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


@dataclass
class OutletUpdate(PartialUpdate):
    """Partial update of an outlet.

    Every mutable column is listed here. A field left as ``UNSET`` is not
    touched; ``None`` clears nullable columns.
    """

    name: str = UNSET
    address: str = UNSET
    postal_code: str = UNSET
    phone: str | None = UNSET
    latitude: float | None = UNSET
    longitude: float | None = UNSET
    delivery_radius_km: float = UNSET
    is_active: bool = UNSET

    @property
    def moves_location(self) -> bool:
        """Whether the address or postal code changes."""
        return self.address is not UNSET or self.postal_code is not UNSET

    @property
    def sets_coordinates(self) -> bool:
        return self.latitude is not UNSET or self.longitude is not UNSET


@dataclass
class ServiceableOutlet:
    """An outlet that delivers to the requested location.

    ``distance_km`` is None when the outlet matched on postal code alone.
    """

    outlet: "OutletModel"
    distance_km: float | None = None


@dataclass
class ServiceabilityResult:
    """Answer to "which outlets deliver here?"."""

    serviceable: bool
    outlets: list[ServiceableOutlet] = field(default_factory=list)
    message: str | None = None
