"""Delivery agents of an outlet.

Owners and admins keep the list of riders for their outlet. A rider's
email ties the record to whoever signs in with that address.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.core.logging import get_logger
from outletbase.domain.entities import (
    CurrentUser,
    DeliveryAgentCreate,
    DeliveryAgentUpdate,
    normalize_email,
)
from outletbase.domain.exceptions import InvalidInputError, NotFoundError
from outletbase.domain.services.outlet_access import OutletAccessPolicy
from outletbase.infrastructure.persistence.models import DeliveryAgentModel
from outletbase.infrastructure.persistence.repositories import (
    DeliveryAgentRepository,
    UserRepository,
)

logger = get_logger(__name__)


def _required(value: str | None, label: str) -> str:
    stripped = value.strip() if isinstance(value, str) else ""
    if not stripped:
        raise InvalidInputError(f"{label} is required")
    return stripped


def _email(value: str | None) -> str | None:
    if value is None:
        return None
    return normalize_email(value) or None


class DeliveryAgentService:
    """Service for managing the riders attached to outlets."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.agent_repo = DeliveryAgentRepository(session)
        self.user_repo = UserRepository(session)
        self.access = OutletAccessPolicy(session)

    async def list_agents(self, outlet_id: str, caller: CurrentUser) -> list[DeliveryAgentModel]:
        """Agents of an outlet, newest first."""
        await self.access.require_member(outlet_id, caller)
        return await self.agent_repo.list_for_outlet(outlet_id)

    async def create_agent(
        self, outlet_id: str, caller: CurrentUser, data: DeliveryAgentCreate
    ) -> DeliveryAgentModel:
        """Attach a rider to an outlet.

        Raises:
            NotFoundError: If the outlet does not exist.
            ForbiddenError: If the caller is neither owner nor admin.
            InvalidInputError: On a missing name or phone.
        """
        await self.access.require_member(outlet_id, caller)
        agent = DeliveryAgentModel(
            id=str(uuid.uuid4()),
            outlet_id=outlet_id,
            name=_required(data.name, "Name"),
            phone=_required(data.phone, "Phone"),
            email=_email(data.email),
            is_active=True,
            created_by=caller.user_id,
        )
        await self.user_repo.ensure(caller.user_id, caller.email, caller.name)
        await self.agent_repo.create(agent)
        await self.session.commit()
        logger.info("Delivery agent added", outlet_id=outlet_id, agent_id=agent.id)
        return agent

    async def update_agent(
        self,
        outlet_id: str,
        agent_id: str,
        caller: CurrentUser,
        update: DeliveryAgentUpdate,
    ) -> DeliveryAgentModel:
        """Partially update an agent of the outlet.

        Raises:
            NotFoundError: If the agent is not on this outlet.
        """
        await self.access.require_member(outlet_id, caller)
        agent = await self.agent_repo.get_for_outlet(agent_id, outlet_id)
        if agent is None:
            raise NotFoundError("Delivery agent not found")

        changes = update.changes()
        if "name" in changes:
            changes["name"] = _required(changes["name"], "Name")
        if "phone" in changes:
            changes["phone"] = _required(changes["phone"], "Phone")
        if "email" in changes:
            changes["email"] = _email(changes["email"])
        if "is_active" in changes and not isinstance(changes["is_active"], bool):
            raise InvalidInputError("is_active must be true or false")

        await self.agent_repo.apply_changes(agent, changes)
        await self.session.commit()
        logger.info("Delivery agent updated", agent_id=agent_id, fields=sorted(changes))
        return agent

    async def delete_agent(self, outlet_id: str, agent_id: str, caller: CurrentUser) -> None:
        """Remove an agent; orders assigned to it become unassigned."""
        await self.access.require_member(outlet_id, caller)
        if not await self.agent_repo.delete(agent_id, outlet_id):
            raise NotFoundError("Delivery agent not found")
        await self.session.commit()
        logger.info("Delivery agent removed", outlet_id=outlet_id, agent_id=agent_id)
