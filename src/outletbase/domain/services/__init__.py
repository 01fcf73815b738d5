"""Domain services for OutletBase."""

from outletbase.domain.services.delivery_agent_service import DeliveryAgentService
from outletbase.domain.services.geo import (
    haversine_km,
    parse_coordinates,
    validate_postal_code,
)
from outletbase.domain.services.invitation_service import (
    InvitationPreview,
    InvitationService,
)
from outletbase.domain.services.order_service import OrderService, parse_status
from outletbase.domain.services.outlet_access import OutletAccess, OutletAccessPolicy
from outletbase.domain.services.outlet_service import AdminListing, OutletService
from outletbase.domain.services.pricing import line_total, parse_price
from outletbase.domain.services.product_service import ProductService
from outletbase.domain.services.service_area_resolver import (
    Geocoder,
    ServiceAreaResolver,
)

__all__ = [
    "AdminListing",
    "DeliveryAgentService",
    "Geocoder",
    "InvitationPreview",
    "InvitationService",
    "OrderService",
    "OutletAccess",
    "OutletAccessPolicy",
    "OutletService",
    "ProductService",
    "ServiceAreaResolver",
    "haversine_km",
    "line_total",
    "parse_coordinates",
    "parse_price",
    "parse_status",
    "validate_postal_code",
]
