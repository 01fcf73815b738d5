"""Outlet and outlet-admin management.

Owners have full rights on their outlets. Admins (users holding an
``outlet_admins`` grant) may view and edit an outlet but cannot delete it,
change its active flag or manage other admins.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.core.config import Settings, get_settings
from outletbase.core.logging import get_logger
from outletbase.domain.entities import CurrentUser, OutletCreate, OutletUpdate
from outletbase.domain.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from outletbase.domain.services.geo import parse_coordinates, validate_postal_code
from outletbase.domain.services.invitation_service import InvitationService
from outletbase.domain.services.outlet_access import OutletAccess, OutletAccessPolicy
from outletbase.domain.services.service_area_resolver import Geocoder
from outletbase.infrastructure.persistence.models import (
    InvitationModel,
    OutletAdminModel,
    OutletModel,
    UserModel,
)
from outletbase.infrastructure.persistence.repositories import (
    OutletAdminRepository,
    OutletRepository,
    UserRepository,
)

logger = get_logger(__name__)


@dataclass
class AdminListing:
    """Admins of an outlet; pending invitations are only shown to owners."""

    outlet: OutletModel
    owner: UserModel | None
    admins: list[tuple[OutletAdminModel, UserModel | None]]
    pending_invitations: list[InvitationModel] = field(default_factory=list)


class OutletService:
    """Service for outlet management business logic."""

    def __init__(
        self,
        session: AsyncSession,
        geocoder: Geocoder,
        invitation_service: InvitationService,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the outlet service.

        Args:
            session: SQLAlchemy async session; the service commits it.
            geocoder: Places new or moved outlets on the map.
            invitation_service: Used for invitations bundled with creation
                and for the owner's admin view.
            settings: Provides postal-code length and default radius.
        """
        self.session = session
        self.geocoder = geocoder
        self.invitation_service = invitation_service
        self.settings = settings or get_settings()
        self.outlet_repo = OutletRepository(session)
        self.admin_repo = OutletAdminRepository(session)
        self.user_repo = UserRepository(session)
        self.access = OutletAccessPolicy(session)

    def _validate_radius(self, radius: Any) -> float:
        try:
            value = float(radius)
        except (TypeError, ValueError):
            raise InvalidInputError("delivery_radius_km must be a number") from None
        if not value > 0:
            raise InvalidInputError("delivery_radius_km must be positive")
        return value

    def _validate_name(self, value: str | None, label: str) -> str:
        stripped = (value or "").strip()
        if not stripped:
            raise InvalidInputError(f"{label} is required")
        return stripped

    async def create_outlet(self, owner: CurrentUser, data: OutletCreate) -> OutletModel:
        """Register a new outlet owned by the caller.

        Coordinates are taken from the input when both are given, otherwise
        the address is geocoded; a failed lookup leaves the outlet matchable
        by postal code only. An ``admin_email`` issues an invitation in the
        same transaction.

        Raises:
            InvalidInputError: On a missing name/address, a malformed postal
                code, half a coordinate pair or a non-positive radius.
        """
        name = self._validate_name(data.name, "Name")
        address = self._validate_name(data.address, "Address")
        postal_code = validate_postal_code(data.postal_code, self.settings.postal_code_length)
        radius = (
            self._validate_radius(data.delivery_radius_km)
            if data.delivery_radius_km is not None
            else self.settings.default_delivery_radius_km
        )

        if (data.latitude is None) != (data.longitude is None):
            raise InvalidInputError("Latitude and longitude must be provided together")

        if data.latitude is not None:
            point = parse_coordinates(data.latitude, data.longitude)
        else:
            point = await self.geocoder.resolve(address, postal_code)
            if point is None:
                logger.info("Outlet address could not be geocoded", postal_code=postal_code)

        await self.user_repo.ensure(owner.user_id, owner.email, owner.name)
        outlet = await self.outlet_repo.create(
            OutletModel(
                id=str(uuid.uuid4()),
                name=name,
                address=address,
                postal_code=postal_code,
                phone=data.phone,
                latitude=point.latitude if point else None,
                longitude=point.longitude if point else None,
                delivery_radius_km=radius,
                owner_id=owner.user_id,
                is_active=True,
            )
        )

        invitation = None
        if data.admin_email:
            invitation = await self.invitation_service.create_pending(
                outlet, data.admin_email, owner
            )

        await self.session.commit()
        logger.info(
            "Outlet created",
            outlet_id=outlet.id,
            owner_id=owner.user_id,
            geocoded=data.latitude is None and point is not None,
        )

        if invitation is not None:
            await self.invitation_service.send_notification(invitation, outlet.name, owner)
        return outlet

    async def update_outlet(
        self, outlet_id: str, caller: CurrentUser, update: OutletUpdate
    ) -> OutletModel:
        """Apply a partial update.

        Raises:
            NotFoundError: If the outlet does not exist.
            ForbiddenError: If the caller is neither owner nor admin, or an
                admin tries to change ``is_active``.
            InvalidInputError: On invalid field values.
        """
        access = await self.access.require_member(outlet_id, caller)
        outlet = access.outlet
        changes = update.changes()

        if "is_active" in changes and not access.is_owner:
            raise ForbiddenError("Only the outlet owner can activate or deactivate it")
        if "is_active" in changes and not isinstance(changes["is_active"], bool):
            raise InvalidInputError("is_active must be true or false")

        if "name" in changes:
            changes["name"] = self._validate_name(changes["name"], "Name")
        if "address" in changes:
            changes["address"] = self._validate_name(changes["address"], "Address")
        if "postal_code" in changes:
            changes["postal_code"] = validate_postal_code(
                changes["postal_code"], self.settings.postal_code_length
            )
        if "delivery_radius_km" in changes:
            changes["delivery_radius_km"] = self._validate_radius(changes["delivery_radius_km"])

        if update.sets_coordinates:
            latitude = changes.get("latitude", outlet.latitude)
            longitude = changes.get("longitude", outlet.longitude)
            if (latitude is None) != (longitude is None):
                raise InvalidInputError("Latitude and longitude must be provided together")
            if latitude is not None:
                point = parse_coordinates(latitude, longitude)
                changes["latitude"] = point.latitude
                changes["longitude"] = point.longitude
        elif update.moves_location:
            point = await self.geocoder.resolve(
                changes.get("address", outlet.address),
                changes.get("postal_code", outlet.postal_code),
            )
            changes["latitude"] = point.latitude if point else None
            changes["longitude"] = point.longitude if point else None

        await self.outlet_repo.apply_changes(outlet, changes)
        await self.session.commit()
        logger.info(
            "Outlet updated",
            outlet_id=outlet_id,
            user_id=caller.user_id,
            fields=sorted(changes),
        )
        return outlet

    async def delete_outlet(self, outlet_id: str, caller: CurrentUser) -> None:
        """Delete an outlet with its admins and invitations (owner only)."""
        await self.access.require_owner(outlet_id, caller)
        await self.outlet_repo.delete(outlet_id)
        await self.session.commit()
        logger.info("Outlet deleted", outlet_id=outlet_id, owner_id=caller.user_id)

    async def get_outlet(self, outlet_id: str, caller: CurrentUser) -> OutletAccess:
        return await self.access.require_member(outlet_id, caller)

    async def list_outlets_for_user(self, user: CurrentUser) -> list[OutletAccess]:
        """Outlets the user owns, followed by outlets they administer."""
        owned = await self.outlet_repo.list_owned_by(user.user_id)
        administered = await self.outlet_repo.list_administered_by(user.user_id)
        owned_ids = {outlet.id for outlet in owned}
        return [OutletAccess(outlet=o, is_owner=True) for o in owned] + [
            OutletAccess(outlet=o, is_owner=False) for o in administered if o.id not in owned_ids
        ]

    async def list_admins(self, outlet_id: str, caller: CurrentUser) -> AdminListing:
        """Admins of an outlet; owners also see pending invitations."""
        access = await self.access.require_member(outlet_id, caller)
        listing = AdminListing(
            outlet=access.outlet,
            owner=await self.user_repo.get_by_id(access.outlet.owner_id),
            admins=await self.admin_repo.list_with_users(outlet_id),
        )
        if access.is_owner:
            listing.pending_invitations = await self.invitation_service.list_pending(outlet_id)
        return listing

    async def update_admin_role(
        self, outlet_id: str, user_id: str, role: str, caller: CurrentUser
    ) -> OutletAdminModel:
        """Change the role of an admin (owner only).

        Raises:
            NotFoundError: If the outlet or the grant does not exist.
        """
        await self.access.require_owner(outlet_id, caller)
        role = self._validate_name(role, "Role")

        admin = await self.admin_repo.get(outlet_id, user_id)
        if admin is None:
            raise NotFoundError("Admin not found")

        admin.role = role
        await self.session.flush()
        await self.session.commit()
        logger.info("Admin role updated", outlet_id=outlet_id, user_id=user_id, role=role)
        return admin

    async def remove_admin(self, outlet_id: str, user_id: str, caller: CurrentUser) -> None:
        """Revoke an admin grant (owner only).

        Raises:
            InvalidInputError: If the owner targets themselves.
            NotFoundError: If the outlet or the grant does not exist.
        """
        await self.access.require_owner(outlet_id, caller)
        if user_id == caller.user_id:
            raise InvalidInputError("Owners cannot remove themselves")

        if not await self.admin_repo.delete(outlet_id, user_id):
            raise NotFoundError("Admin not found")
        await self.session.commit()
        logger.info("Admin removed", outlet_id=outlet_id, user_id=user_id)
