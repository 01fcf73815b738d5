"""Outlet repository for database operations."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.infrastructure.persistence.models import (
    DeliveryAgentModel,
    InvitationModel,
    OrderItemModel,
    OrderModel,
    OutletAdminModel,
    OutletModel,
    OutletProductModel,
)


class OutletRepository:
    """Repository for outlet database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, outlet: OutletModel) -> OutletModel:
        """Create a new outlet.

        Args:
            outlet: Outlet model to create.

        Returns:
            Created outlet model.
        """
        self.session.add(outlet)
        await self.session.flush()
        return outlet

    async def get_by_id(self, outlet_id: str) -> OutletModel | None:
        """Get an outlet by ID.

        Args:
            outlet_id: Outlet ID (UUID string).

        Returns:
            Outlet model if found, None otherwise.
        """
        result = await self.session.execute(
            select(OutletModel).where(OutletModel.id == outlet_id)
        )
        return result.scalar_one_or_none()

    async def list_active_with_coordinates(self) -> list[OutletModel]:
        """List active outlets that have both latitude and longitude."""
        result = await self.session.execute(
            select(OutletModel)
            .where(
                OutletModel.is_active.is_(True),
                OutletModel.latitude.isnot(None),
                OutletModel.longitude.isnot(None),
            )
            .order_by(OutletModel.created_at, OutletModel.id)
        )
        return list(result.scalars().all())

    async def list_active_by_postal_code(self, postal_code: str) -> list[OutletModel]:
        """List active outlets registered under exactly this postal code."""
        result = await self.session.execute(
            select(OutletModel)
            .where(
                OutletModel.is_active.is_(True),
                OutletModel.postal_code == postal_code,
            )
            .order_by(OutletModel.created_at, OutletModel.id)
        )
        return list(result.scalars().all())

    async def list_owned_by(self, user_id: str) -> list[OutletModel]:
        """List outlets owned by a user, newest first."""
        result = await self.session.execute(
            select(OutletModel)
            .where(OutletModel.owner_id == user_id)
            .order_by(OutletModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_administered_by(self, user_id: str) -> list[OutletModel]:
        """List outlets where the user holds an admin grant."""
        result = await self.session.execute(
            select(OutletModel)
            .join(OutletAdminModel, OutletAdminModel.outlet_id == OutletModel.id)
            .where(OutletAdminModel.user_id == user_id)
            .order_by(OutletModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def apply_changes(self, outlet: OutletModel, changes: dict[str, Any]) -> OutletModel:
        """Apply column changes to an outlet and flush.

        Args:
            outlet: Outlet to update.
            changes: Column name to new value.

        Returns:
            The updated outlet.
        """
        for column, value in changes.items():
            setattr(outlet, column, value)
        await self.session.flush()
        return outlet

    async def delete(self, outlet_id: str) -> bool:
        """Delete an outlet with everything attached to it.

        Admin grants, invitations, menu listings, delivery agents and
        orders (with their lines) go with the outlet.

        Args:
            outlet_id: ID of the outlet to delete.

        Returns:
            True if the outlet was deleted, False if not found.
        """
        await self.session.execute(
            delete(OutletAdminModel).where(OutletAdminModel.outlet_id == outlet_id)
        )
        await self.session.execute(
            delete(InvitationModel).where(InvitationModel.outlet_id == outlet_id)
        )
        outlet_orders = select(OrderModel.id).where(OrderModel.outlet_id == outlet_id)
        await self.session.execute(
            delete(OrderItemModel).where(OrderItemModel.order_id.in_(outlet_orders))
        )
        await self.session.execute(delete(OrderModel).where(OrderModel.outlet_id == outlet_id))
        await self.session.execute(
            delete(DeliveryAgentModel).where(DeliveryAgentModel.outlet_id == outlet_id)
        )
        await self.session.execute(
            delete(OutletProductModel).where(OutletProductModel.outlet_id == outlet_id)
        )
        result = await self.session.execute(
            delete(OutletModel).where(OutletModel.id == outlet_id)
        )
        await self.session.flush()
        return result.rowcount > 0
