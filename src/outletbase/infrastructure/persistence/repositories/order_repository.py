"""Order repository for database operations."""

from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.infrastructure.persistence.models import (
    DeliveryAgentModel,
    OrderItemModel,
    OrderModel,
    OutletModel,
)


class OrderRepository:
    """Repository for orders and their lines."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, order: OrderModel, items: list[OrderItemModel]) -> OrderModel:
        """Insert an order with its lines and flush."""
        self.session.add(order)
        await self.session.flush()
        self.session.add_all(items)
        await self.session.flush()
        return order

    async def get_for_outlet(self, order_id: str, outlet_id: str) -> OrderModel | None:
        result = await self.session.execute(
            select(OrderModel).where(
                OrderModel.id == order_id,
                OrderModel.outlet_id == outlet_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_assigned(self, order_id: str, agent_ids: list[str]) -> OrderModel | None:
        """Get an order only if it is assigned to one of the agents."""
        if not agent_ids:
            return None
        result = await self.session.execute(
            select(OrderModel).where(
                OrderModel.id == order_id,
                OrderModel.delivery_agent_id.in_(agent_ids),
            )
        )
        return result.scalar_one_or_none()

    async def list_for_customer(
        self, customer_id: str
    ) -> list[tuple[OrderModel, OutletModel | None]]:
        """A customer's orders with their outlets, newest first."""
        result = await self.session.execute(
            select(OrderModel, OutletModel)
            .outerjoin(OutletModel, OutletModel.id == OrderModel.outlet_id)
            .where(OrderModel.customer_id == customer_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id)
        )
        return [(order, outlet) for order, outlet in result.all()]

    async def list_for_outlet(
        self, outlet_id: str
    ) -> list[tuple[OrderModel, DeliveryAgentModel | None]]:
        """An outlet's orders with the assigned agent, newest first."""
        result = await self.session.execute(
            select(OrderModel, DeliveryAgentModel)
            .outerjoin(DeliveryAgentModel, DeliveryAgentModel.id == OrderModel.delivery_agent_id)
            .where(OrderModel.outlet_id == outlet_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id)
        )
        return [(order, agent) for order, agent in result.all()]

    async def list_assigned(
        self, agent_ids: list[str]
    ) -> list[tuple[OrderModel, OutletModel | None]]:
        """Orders assigned to any of the agents, newest first."""
        if not agent_ids:
            return []
        result = await self.session.execute(
            select(OrderModel, OutletModel)
            .outerjoin(OutletModel, OutletModel.id == OrderModel.outlet_id)
            .where(OrderModel.delivery_agent_id.in_(agent_ids))
            .order_by(OrderModel.created_at.desc(), OrderModel.id)
        )
        return [(order, outlet) for order, outlet in result.all()]

    async def items_by_order(self, order_ids: list[str]) -> dict[str, list[OrderItemModel]]:
        """Lines of several orders, grouped by order ID."""
        grouped: dict[str, list[OrderItemModel]] = defaultdict(list)
        if not order_ids:
            return grouped
        result = await self.session.execute(
            select(OrderItemModel)
            .where(OrderItemModel.order_id.in_(order_ids))
            .order_by(OrderItemModel.product_name, OrderItemModel.id)
        )
        for item in result.scalars().all():
            grouped[item.order_id].append(item)
        return grouped
