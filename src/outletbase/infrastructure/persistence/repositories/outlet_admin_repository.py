"""Outlet admin repository for database operations."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.infrastructure.persistence.models import OutletAdminModel, UserModel


class OutletAdminRepository:
    """Repository for admin grants on outlets."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, admin: OutletAdminModel) -> OutletAdminModel:
        """Insert an admin grant.

        Raises:
            IntegrityError: If the (outlet, user) pair already has a grant.
        """
        self.session.add(admin)
        await self.session.flush()
        return admin

    async def get(self, outlet_id: str, user_id: str) -> OutletAdminModel | None:
        result = await self.session.execute(
            select(OutletAdminModel).where(
                OutletAdminModel.outlet_id == outlet_id,
                OutletAdminModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def exists(self, outlet_id: str, user_id: str) -> bool:
        """Check whether the user already administers the outlet."""
        result = await self.session.execute(
            select(OutletAdminModel.id)
            .where(
                OutletAdminModel.outlet_id == outlet_id,
                OutletAdminModel.user_id == user_id,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_with_users(
        self, outlet_id: str
    ) -> list[tuple[OutletAdminModel, UserModel | None]]:
        """List admin grants of an outlet with the mirrored user rows.

        Args:
            outlet_id: Outlet to list admins for.

        Returns:
            (grant, user) pairs ordered by grant creation time.
        """
        result = await self.session.execute(
            select(OutletAdminModel, UserModel)
            .outerjoin(UserModel, UserModel.id == OutletAdminModel.user_id)
            .where(OutletAdminModel.outlet_id == outlet_id)
            .order_by(OutletAdminModel.created_at)
        )
        return [(admin, user) for admin, user in result.all()]

    async def delete(self, outlet_id: str, user_id: str) -> bool:
        """Remove a grant.

        Returns:
            True if a grant was deleted, False if none existed.
        """
        result = await self.session.execute(
            delete(OutletAdminModel).where(
                OutletAdminModel.outlet_id == outlet_id,
                OutletAdminModel.user_id == user_id,
            )
        )
        await self.session.flush()
        return result.rowcount > 0
