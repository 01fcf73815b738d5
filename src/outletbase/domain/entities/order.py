"""Order value objects and status rules.

Orders start ``pending``. Once ``delivered`` or ``cancelled`` an order
is closed and its status no longer changes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from outletbase.domain.entities.outlet import UNSET, PartialUpdate

if TYPE_CHECKING:
    from outletbase.infrastructure.persistence.models import (
        DeliveryAgentModel,
        OrderItemModel,
        OrderModel,
        OutletModel,
    )


class OrderStatus(str, Enum):
    """Order status enum."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_closed(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


# Statuses a delivery agent may set on an assigned order.
AGENT_STATUSES = frozenset({OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED})


@dataclass
class OrderItemInput:
    product_id: str
    quantity: int


@dataclass
class OrderCreate:
    """A customer's order request.

    Prices are not part of the input; they come from the outlet's menu.
    """

    outlet_id: str
    customer_name: str
    customer_phone: str
    customer_email: str
    delivery_address: str
    postal_code: str
    items: list[OrderItemInput] = field(default_factory=list)
    notes: str | None = None


@dataclass
class OrderUpdate(PartialUpdate):
    """Outlet-side change to an order; ``delivery_agent_id=None`` unassigns."""

    status: str = UNSET
    delivery_agent_id: str | None = UNSET


@dataclass
class OrderDetails:
    """An order with its lines and whichever related rows the view needs."""

    order: "OrderModel"
    items: list["OrderItemModel"] = field(default_factory=list)
    outlet: "OutletModel | None" = None
    agent: "DeliveryAgentModel | None" = None
