"""Customer orders and their fulfilment.

A signed-in customer orders from one open outlet. Prices are taken from
the outlet's menu when the order is placed and copied onto each line.
The outlet's owner or admins confirm orders and assign riders; a rider
signed in with the email on their agent record moves assigned orders
along until they are delivered.
"""

import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.core.config import Settings, get_settings
from outletbase.core.logging import get_logger
from outletbase.domain.entities import (
    AGENT_STATUSES,
    CurrentUser,
    OrderCreate,
    OrderDetails,
    OrderStatus,
    OrderUpdate,
    normalize_email,
)
from outletbase.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    OutletClosedError,
)
from outletbase.domain.services.geo import validate_postal_code
from outletbase.domain.services.outlet_access import OutletAccessPolicy
from outletbase.domain.services.pricing import line_total
from outletbase.infrastructure.persistence.models import (
    DeliveryAgentModel,
    OrderItemModel,
    OrderModel,
)
from outletbase.infrastructure.persistence.repositories import (
    DeliveryAgentRepository,
    OrderRepository,
    ProductRepository,
    UserRepository,
)

logger = get_logger(__name__)


def parse_status(value: Any) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidInputError(f"Status must be one of: {allowed}") from None


def _required(value: Any, label: str) -> str:
    stripped = value.strip() if isinstance(value, str) else ""
    if not stripped:
        raise InvalidInputError(f"{label} is required")
    return stripped


class OrderService:
    """Service for placing, listing and progressing orders."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        """Initialize the order service.

        Args:
            session: SQLAlchemy async session; the service commits it.
            settings: Provides postal-code length and order limits.
        """
        self.session = session
        self.settings = settings or get_settings()
        self.order_repo = OrderRepository(session)
        self.product_repo = ProductRepository(session)
        self.agent_repo = DeliveryAgentRepository(session)
        self.user_repo = UserRepository(session)
        self.access = OutletAccessPolicy(session)

    def _merge_quantities(self, data: OrderCreate) -> dict[str, int]:
        if not data.items:
            raise InvalidInputError("An order needs at least one item")
        if len(data.items) > self.settings.order_max_lines:
            raise InvalidInputError(
                f"An order can have at most {self.settings.order_max_lines} items"
            )
        quantities: dict[str, int] = {}
        for item in data.items:
            quantity = item.quantity
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise InvalidInputError("Quantity must be a positive whole number")
            quantities[item.product_id] = quantities.get(item.product_id, 0) + quantity
            if quantities[item.product_id] > self.settings.order_max_quantity:
                raise InvalidInputError(
                    f"Quantity cannot exceed {self.settings.order_max_quantity}"
                )
        return quantities

    async def _agent_ids_for(self, user: CurrentUser) -> list[str]:
        agents = await self.agent_repo.list_by_email(normalize_email(user.email))
        if not agents:
            raise ForbiddenError("Not a delivery agent")
        return [agent.id for agent in agents]

    async def place_order(self, customer: CurrentUser, data: OrderCreate) -> OrderDetails:
        """Place an order with an open outlet.

        Every product must currently be on the outlet's menu; its menu
        price is charged. Repeated products are merged into one line.

        Raises:
            NotFoundError: If the outlet does not exist.
            OutletClosedError: If the outlet is deactivated.
            InvalidInputError: On missing customer details, a malformed
                postal code, no items, a bad quantity or a product that is
                not on the menu.
        """
        outlet = await self.access.get_outlet(data.outlet_id)
        if not outlet.is_active:
            raise OutletClosedError("Outlet is currently closed")

        customer_name = _required(data.customer_name, "Customer name")
        customer_phone = _required(data.customer_phone, "Customer phone")
        customer_email = _required(data.customer_email, "Customer email")
        delivery_address = _required(data.delivery_address, "Delivery address")
        postal_code = validate_postal_code(data.postal_code, self.settings.postal_code_length)
        quantities = self._merge_quantities(data)

        menu = {
            product.id: (product, listing)
            for product, listing in await self.product_repo.list_menu(outlet.id)
        }
        order_id = str(uuid.uuid4())
        items = []
        total = Decimal("0.00")
        for product_id, quantity in quantities.items():
            if product_id not in menu:
                raise InvalidInputError(f"Product {product_id} is not available at this outlet")
            product, listing = menu[product_id]
            price = listing.custom_price if listing.custom_price is not None else product.base_price
            amount = line_total(price, quantity)
            total += amount
            items.append(
                OrderItemModel(
                    id=str(uuid.uuid4()),
                    order_id=order_id,
                    product_id=product.id,
                    product_name=product.name,
                    quantity=quantity,
                    price=price,
                    line_total=amount,
                )
            )

        order = OrderModel(
            id=order_id,
            customer_id=customer.user_id,
            outlet_id=outlet.id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_email=customer_email,
            delivery_address=delivery_address,
            postal_code=postal_code,
            total_amount=total,
            status=OrderStatus.PENDING.value,
            delivery_agent_id=None,
            notes=(data.notes or "").strip() or None,
        )
        await self.user_repo.ensure(customer.user_id, customer.email, customer.name)
        await self.order_repo.create(order, items)
        await self.session.commit()

        logger.info(
            "Order placed",
            order_id=order.id,
            outlet_id=outlet.id,
            customer_id=customer.user_id,
            lines=len(items),
        )
        return OrderDetails(order=order, items=items, outlet=outlet)

    async def list_customer_orders(self, customer: CurrentUser) -> list[OrderDetails]:
        """The caller's orders, newest first."""
        rows = await self.order_repo.list_for_customer(customer.user_id)
        items = await self.order_repo.items_by_order([order.id for order, _ in rows])
        return [
            OrderDetails(order=order, items=items.get(order.id, []), outlet=outlet)
            for order, outlet in rows
        ]

    async def list_outlet_orders(self, outlet_id: str, caller: CurrentUser) -> list[OrderDetails]:
        """Orders of an outlet with their assigned agents, newest first."""
        access = await self.access.require_member(outlet_id, caller)
        rows = await self.order_repo.list_for_outlet(outlet_id)
        items = await self.order_repo.items_by_order([order.id for order, _ in rows])
        return [
            OrderDetails(
                order=order,
                items=items.get(order.id, []),
                outlet=access.outlet,
                agent=agent,
            )
            for order, agent in rows
        ]

    async def update_outlet_order(
        self,
        outlet_id: str,
        order_id: str,
        caller: CurrentUser,
        update: OrderUpdate,
    ) -> OrderDetails:
        """Change the status of an order or (un)assign its rider.

        Assigning a rider to a pending order without naming a status
        confirms it.

        Raises:
            NotFoundError: If the order or the agent is not on this outlet.
            InvalidInputError: On an unknown status or an inactive agent.
            ConflictError: If the order is already delivered or cancelled.
        """
        access = await self.access.require_member(outlet_id, caller)
        order = await self.order_repo.get_for_outlet(order_id, outlet_id)
        if order is None:
            raise NotFoundError("Order not found")

        changes = update.changes()
        status = parse_status(changes["status"]) if "status" in changes else None

        agent: DeliveryAgentModel | None = None
        if changes.get("delivery_agent_id") is not None:
            agent = await self.agent_repo.get_for_outlet(changes["delivery_agent_id"], outlet_id)
            if agent is None:
                raise NotFoundError("Delivery agent not found")
            if not agent.is_active:
                raise InvalidInputError("Delivery agent is inactive")

        current = OrderStatus(order.status)
        if changes and current.is_closed:
            raise ConflictError(f"Order is already {current.value}")

        if "delivery_agent_id" in changes:
            order.delivery_agent_id = agent.id if agent else None
            if status is None and agent is not None and current is OrderStatus.PENDING:
                status = OrderStatus.CONFIRMED
        if status is not None:
            order.status = status.value

        await self.session.flush()
        await self.session.commit()
        logger.info(
            "Order updated",
            order_id=order_id,
            outlet_id=outlet_id,
            user_id=caller.user_id,
            status=order.status,
            delivery_agent_id=order.delivery_agent_id,
        )

        if agent is None and order.delivery_agent_id is not None:
            agent = await self.agent_repo.get_for_outlet(order.delivery_agent_id, outlet_id)
        items = await self.order_repo.items_by_order([order.id])
        return OrderDetails(
            order=order, items=items.get(order.id, []), outlet=access.outlet, agent=agent
        )

    async def list_agent_orders(self, user: CurrentUser) -> list[OrderDetails]:
        """Orders assigned to the caller as a delivery agent, newest first.

        Raises:
            ForbiddenError: If no active agent record carries the caller's email.
        """
        agent_ids = await self._agent_ids_for(user)
        rows = await self.order_repo.list_assigned(agent_ids)
        items = await self.order_repo.items_by_order([order.id for order, _ in rows])
        return [
            OrderDetails(order=order, items=items.get(order.id, []), outlet=outlet)
            for order, outlet in rows
        ]

    async def update_agent_order(
        self, user: CurrentUser, order_id: str, status: Any
    ) -> OrderDetails:
        """Move an assigned order to ``out_for_delivery`` or ``delivered``.

        Raises:
            ForbiddenError: If the caller is not a delivery agent.
            InvalidInputError: On any other status.
            NotFoundError: If the order is not assigned to the caller.
            ConflictError: If the order is already delivered or cancelled.
        """
        agent_ids = await self._agent_ids_for(user)
        new_status = parse_status(status)
        if new_status not in AGENT_STATUSES:
            raise InvalidInputError(
                "Delivery agents can only mark orders out for delivery or delivered"
            )

        order = await self.order_repo.get_assigned(order_id, agent_ids)
        if order is None:
            raise NotFoundError("Order not found or not assigned to you")
        current = OrderStatus(order.status)
        if current.is_closed:
            raise ConflictError(f"Order is already {current.value}")

        order.status = new_status.value
        await self.session.flush()
        await self.session.commit()
        logger.info(
            "Order status updated by delivery agent",
            order_id=order_id,
            user_id=user.user_id,
            status=order.status,
        )

        outlet = await self.access.get_outlet(order.outlet_id)
        items = await self.order_repo.items_by_order([order.id])
        return OrderDetails(order=order, items=items.get(order.id, []), outlet=outlet)
