"""SQLAlchemy models for OutletBase tables.

All models inherit from the Base class defined in database.py and are
created on application startup in development mode.
"""

from outletbase.infrastructure.persistence.models.delivery_agent import DeliveryAgentModel
from outletbase.infrastructure.persistence.models.invitation import InvitationModel
from outletbase.infrastructure.persistence.models.order import OrderItemModel, OrderModel
from outletbase.infrastructure.persistence.models.outlet import OutletModel
from outletbase.infrastructure.persistence.models.outlet_admin import OutletAdminModel
from outletbase.infrastructure.persistence.models.product import (
    OutletProductModel,
    ProductModel,
)
from outletbase.infrastructure.persistence.models.user import UserModel

__all__ = [
    "DeliveryAgentModel",
    "InvitationModel",
    "OrderItemModel",
    "OrderModel",
    "OutletAdminModel",
    "OutletModel",
    "OutletProductModel",
    "ProductModel",
    "UserModel",
]
