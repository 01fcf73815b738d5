"""Who may act on an outlet.

Owners have every right on their outlets. Users holding an admin grant
may run the outlet day to day. Everyone else is refused.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.core.logging import get_logger
from outletbase.domain.entities import CurrentUser
from outletbase.domain.exceptions import ForbiddenError, NotFoundError
from outletbase.infrastructure.persistence.models import OutletModel
from outletbase.infrastructure.persistence.repositories import (
    OutletAdminRepository,
    OutletRepository,
)

logger = get_logger(__name__)


@dataclass
class OutletAccess:
    """An outlet together with the caller's relationship to it."""

    outlet: OutletModel
    is_owner: bool


class OutletAccessPolicy:
    """Load outlets on behalf of a caller, enforcing owner/admin rights."""

    def __init__(self, session: AsyncSession) -> None:
        self.outlet_repo = OutletRepository(session)
        self.admin_repo = OutletAdminRepository(session)

    async def get_outlet(self, outlet_id: str) -> OutletModel:
        """Raises NotFoundError for unknown outlets."""
        outlet = await self.outlet_repo.get_by_id(outlet_id)
        if outlet is None:
            raise NotFoundError("Outlet not found")
        return outlet

    async def require_member(self, outlet_id: str, caller: CurrentUser) -> OutletAccess:
        """Load an outlet the caller owns or administers."""
        outlet = await self.get_outlet(outlet_id)
        if outlet.owner_id == caller.user_id:
            return OutletAccess(outlet=outlet, is_owner=True)
        if await self.admin_repo.exists(outlet_id, caller.user_id):
            return OutletAccess(outlet=outlet, is_owner=False)
        logger.warning(
            "Outlet access refused",
            outlet_id=outlet_id,
            user_id=caller.user_id,
        )
        raise ForbiddenError("You do not have access to this outlet")

    async def require_owner(self, outlet_id: str, caller: CurrentUser) -> OutletModel:
        outlet = await self.get_outlet(outlet_id)
        if outlet.owner_id != caller.user_id:
            raise ForbiddenError("Only the outlet owner can perform this action")
        return outlet
