"""Repositories wrapping database access for each table."""

from outletbase.infrastructure.persistence.repositories.delivery_agent_repository import (
    DeliveryAgentRepository,
)
from outletbase.infrastructure.persistence.repositories.invitation_repository import (
    InvitationRepository,
)
from outletbase.infrastructure.persistence.repositories.order_repository import (
    OrderRepository,
)
from outletbase.infrastructure.persistence.repositories.outlet_admin_repository import (
    OutletAdminRepository,
)
from outletbase.infrastructure.persistence.repositories.outlet_repository import (
    OutletRepository,
)
from outletbase.infrastructure.persistence.repositories.product_repository import (
    ProductRepository,
)
from outletbase.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "DeliveryAgentRepository",
    "InvitationRepository",
    "OrderRepository",
    "OutletAdminRepository",
    "OutletRepository",
    "ProductRepository",
    "UserRepository",
]
