"""Domain entities for OutletBase.

Entities are plain Python types that represent core business concepts.
"""

from outletbase.domain.entities.catalog import (
    CatalogueEntry,
    Menu,
    MenuItem,
    OutletProductUpdate,
    ProductCreate,
    ProductUpdate,
)
from outletbase.domain.entities.delivery import DeliveryAgentCreate, DeliveryAgentUpdate
from outletbase.domain.entities.invitation import (
    InvitationStatus,
    effective_status,
    ensure_utc,
    is_expired,
    normalize_email,
)
from outletbase.domain.entities.order import (
    AGENT_STATUSES,
    OrderCreate,
    OrderDetails,
    OrderItemInput,
    OrderStatus,
    OrderUpdate,
)
from outletbase.domain.entities.outlet import (
    UNSET,
    Coordinates,
    OutletCreate,
    OutletUpdate,
    PartialUpdate,
    ServiceabilityResult,
    ServiceableOutlet,
)
from outletbase.domain.entities.user import CurrentUser

__all__ = [
    "AGENT_STATUSES",
    "UNSET",
    "CatalogueEntry",
    "Coordinates",
    "CurrentUser",
    "DeliveryAgentCreate",
    "DeliveryAgentUpdate",
    "InvitationStatus",
    "Menu",
    "MenuItem",
    "OrderCreate",
    "OrderDetails",
    "OrderItemInput",
    "OrderStatus",
    "OrderUpdate",
    "OutletCreate",
    "OutletProductUpdate",
    "OutletUpdate",
    "PartialUpdate",
    "ProductCreate",
    "ProductUpdate",
    "ServiceabilityResult",
    "ServiceableOutlet",
    "effective_status",
    "ensure_utc",
    "is_expired",
    "normalize_email",
]
