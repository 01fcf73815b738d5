"""Delivery agent repository for database operations."""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.infrastructure.persistence.models import DeliveryAgentModel, OrderModel


class DeliveryAgentRepository:
    """Repository for the riders attached to outlets."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, agent: DeliveryAgentModel) -> DeliveryAgentModel:
        self.session.add(agent)
        await self.session.flush()
        return agent

    async def get_for_outlet(self, agent_id: str, outlet_id: str) -> DeliveryAgentModel | None:
        """Get an agent only if it belongs to the outlet."""
        result = await self.session.execute(
            select(DeliveryAgentModel).where(
                DeliveryAgentModel.id == agent_id,
                DeliveryAgentModel.outlet_id == outlet_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_outlet(self, outlet_id: str) -> list[DeliveryAgentModel]:
        result = await self.session.execute(
            select(DeliveryAgentModel)
            .where(DeliveryAgentModel.outlet_id == outlet_id)
            .order_by(DeliveryAgentModel.created_at.desc(), DeliveryAgentModel.id)
        )
        return list(result.scalars().all())

    async def list_by_email(self, email: str) -> list[DeliveryAgentModel]:
        """Active agent rows registered under a (normalized) email."""
        result = await self.session.execute(
            select(DeliveryAgentModel).where(
                DeliveryAgentModel.email == email,
                DeliveryAgentModel.is_active.is_(True),
            )
        )
        return list(result.scalars().all())

    async def apply_changes(
        self, agent: DeliveryAgentModel, changes: dict[str, Any]
    ) -> DeliveryAgentModel:
        for column, value in changes.items():
            setattr(agent, column, value)
        await self.session.flush()
        return agent

    async def delete(self, agent_id: str, outlet_id: str) -> bool:
        """Delete an agent of an outlet and unassign its orders.

        Returns:
            True if the agent was deleted, False if not found on the outlet.
        """
        await self.session.execute(
            update(OrderModel)
            .where(
                OrderModel.delivery_agent_id == agent_id,
                OrderModel.outlet_id == outlet_id,
            )
            .values(delivery_agent_id=None)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(
            delete(DeliveryAgentModel).where(
                DeliveryAgentModel.id == agent_id,
                DeliveryAgentModel.outlet_id == outlet_id,
            )
        )
        await self.session.flush()
        return result.rowcount > 0
