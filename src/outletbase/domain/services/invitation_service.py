"""Invitation lifecycle for outlet administrators.

An owner issues an invitation to an email address; the invitee accepts it
with the single-use token from the email and becomes an admin of the
outlet. Invitations are ``pending`` until accepted. Expiry is evaluated
lazily whenever an invitation is read; there is no background sweep.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.core.config import Settings, get_settings
from outletbase.core.logging import get_logger
from outletbase.domain.entities import (
    CurrentUser,
    InvitationStatus,
    effective_status,
    is_expired,
    normalize_email,
)
from outletbase.domain.exceptions import (
    AlreadyAdminError,
    EmailMismatchError,
    ForbiddenError,
    InvalidInputError,
    InvitationAlreadyAcceptedError,
    InvitationExpiredError,
    NotFoundError,
)
from outletbase.infrastructure.persistence.models import (
    InvitationModel,
    OutletAdminModel,
    OutletModel,
)
from outletbase.infrastructure.persistence.repositories import (
    InvitationRepository,
    OutletAdminRepository,
    OutletRepository,
    UserRepository,
)
from outletbase.infrastructure.services.email_service import EmailResult, EmailService
from outletbase.infrastructure.services.token_service import token_service

logger = get_logger(__name__)

DEFAULT_ROLE = "admin"


def utc_now() -> datetime:
    """Current time; module-level so tests can freeze the clock."""
    return datetime.now(timezone.utc)


@dataclass
class InvitationPreview:
    """What the accept page shows before the invitee confirms."""

    invitation: InvitationModel
    outlet_name: str
    inviter_name: str | None
    inviter_email: str | None
    status: InvitationStatus


class InvitationService:
    """Issue, accept, cancel and re-send outlet admin invitations."""

    def __init__(
        self,
        session: AsyncSession,
        email_service: EmailService,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the invitation service.

        Args:
            session: SQLAlchemy async session; the service commits it.
            email_service: Best-effort notification channel.
            settings: Provides expiry and token length.
        """
        self.session = session
        self.email_service = email_service
        self.settings = settings or get_settings()
        self.invitation_repo = InvitationRepository(session)
        self.outlet_repo = OutletRepository(session)
        self.admin_repo = OutletAdminRepository(session)
        self.user_repo = UserRepository(session)

    async def _get_owned_outlet(self, outlet_id: str, caller: CurrentUser) -> OutletModel:
        outlet = await self.outlet_repo.get_by_id(outlet_id)
        if outlet is None:
            raise NotFoundError("Outlet not found")
        if outlet.owner_id != caller.user_id:
            logger.warning(
                "Invitation operation refused: caller is not the owner",
                outlet_id=outlet_id,
                user_id=caller.user_id,
            )
            raise ForbiddenError("Only the outlet owner can manage invitations")
        return outlet

    async def create_pending(
        self,
        outlet: OutletModel,
        email: str,
        inviter: CurrentUser,
        role: str = DEFAULT_ROLE,
    ) -> InvitationModel:
        """Stage a pending invitation in the current transaction.

        Does not commit and does not send the email; callers do both.
        """
        email = normalize_email(email)
        if not email:
            raise InvalidInputError("Invitation email is required")

        await self.user_repo.ensure(inviter.user_id, inviter.email, inviter.name)

        now = utc_now()
        invitation = InvitationModel(
            id=str(uuid.uuid4()),
            email=email,
            outlet_id=outlet.id,
            invited_by=inviter.user_id,
            role=role or DEFAULT_ROLE,
            token=token_service.generate_token(self.settings.invitation_token_length),
            status=InvitationStatus.PENDING.value,
            expires_at=now + timedelta(days=self.settings.invitation_expire_days),
            email_sent=False,
            email_sent_at=None,
            accepted_at=None,
            created_at=now,
        )
        return await self.invitation_repo.create_invitation(invitation)

    async def send_notification(
        self,
        invitation: InvitationModel,
        outlet_name: str,
        inviter: CurrentUser,
    ) -> EmailResult:
        """Email the invitation link and record a successful delivery.

        Must run after the invitation is committed. A failed delivery, or a
        failure to record it, is logged and leaves the invitation untouched.
        """
        result = await self.email_service.send_invitation_email(
            to=invitation.email,
            outlet_name=outlet_name,
            inviter_name=inviter.display_name,
            token=invitation.token,
            expires_at=invitation.expires_at,
        )
        if not result.success:
            logger.warning(
                "Invitation created but email not delivered",
                invitation_id=invitation.id,
                error=result.error,
            )
            return result

        invitation_id = invitation.id
        previous = (invitation.email_sent, invitation.email_sent_at)
        try:
            await self.invitation_repo.mark_email_sent(invitation_id, utc_now())
            await self.session.commit()
        except SQLAlchemyError as e:
            # Detach first so the rollback leaves loaded rows readable.
            self.session.expunge_all()
            await self.session.rollback()
            invitation.email_sent, invitation.email_sent_at = previous
            logger.error(
                "Invitation email sent but delivery not recorded",
                invitation_id=invitation_id,
                error=str(e),
            )
        return result

    async def issue(
        self,
        outlet_id: str,
        email: str,
        inviter: CurrentUser,
        role: str = DEFAULT_ROLE,
    ) -> InvitationModel:
        """Invite an email address to administer an outlet.

        Args:
            outlet_id: Outlet to grant access to.
            email: Address of the invitee.
            inviter: Authenticated caller; must own the outlet.
            role: Role granted on acceptance.

        Returns:
            The committed pending invitation.

        Raises:
            NotFoundError: If the outlet does not exist.
            ForbiddenError: If the caller is not the owner.
        """
        outlet = await self._get_owned_outlet(outlet_id, inviter)
        invitation = await self.create_pending(outlet, email, inviter, role)
        await self.session.commit()

        logger.info(
            "Invitation issued",
            invitation_id=invitation.id,
            outlet_id=outlet.id,
            invited_by=inviter.user_id,
        )

        await self.send_notification(invitation, outlet.name, inviter)
        return invitation

    async def accept(self, token: str, user: CurrentUser) -> OutletAdminModel:
        """Consume an invitation token and grant the admin role.

        The grant and the status change are written in one transaction;
        the status change only applies to a still-pending row.

        Raises:
            NotFoundError: Unknown token.
            InvitationExpiredError: Past ``expires_at``, whatever the status.
            InvitationAlreadyAcceptedError: Token already consumed.
            EmailMismatchError: Signed in with a different email address.
            AlreadyAdminError: The user already administers or owns the outlet.
        """
        invitation = await self.invitation_repo.get_by_token(token)
        if invitation is None:
            logger.info("Invitation acceptance failed: token not found", token=token[:8])
            raise NotFoundError("Invitation not found")

        now = utc_now()
        if is_expired(invitation.expires_at, now):
            logger.info("Invitation acceptance failed: expired", invitation_id=invitation.id)
            raise InvitationExpiredError("This invitation has expired")

        if invitation.status == InvitationStatus.ACCEPTED.value:
            logger.info(
                "Invitation acceptance failed: already accepted",
                invitation_id=invitation.id,
            )
            raise InvitationAlreadyAcceptedError("This invitation has already been accepted")

        if normalize_email(user.email) != normalize_email(invitation.email):
            logger.warning(
                "Invitation acceptance failed: email mismatch",
                invitation_id=invitation.id,
                user_id=user.user_id,
            )
            raise EmailMismatchError("This invitation was sent to a different email address")

        outlet = await self.outlet_repo.get_by_id(invitation.outlet_id)
        if outlet is None:
            raise NotFoundError("Outlet not found")
        if outlet.owner_id == user.user_id or await self.admin_repo.exists(
            invitation.outlet_id, user.user_id
        ):
            raise AlreadyAdminError("You already manage this outlet")

        invitation_id = invitation.id
        try:
            await self.user_repo.ensure(user.user_id, user.email, user.name)
            admin = await self.admin_repo.create(
                OutletAdminModel(
                    id=str(uuid.uuid4()),
                    outlet_id=invitation.outlet_id,
                    user_id=user.user_id,
                    role=invitation.role,
                    created_at=now,
                )
            )
            if not await self.invitation_repo.mark_as_accepted(invitation_id, now):
                await self.session.rollback()
                logger.info("Invitation accepted concurrently", invitation_id=invitation_id)
                raise InvitationAlreadyAcceptedError(
                    "This invitation has already been accepted"
                )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.info(
                "Invitation acceptance lost race on admin grant",
                invitation_id=invitation_id,
                user_id=user.user_id,
            )
            raise AlreadyAdminError("You already manage this outlet") from None

        logger.info(
            "Invitation accepted",
            invitation_id=invitation.id,
            outlet_id=invitation.outlet_id,
            user_id=user.user_id,
        )
        return admin

    async def cancel(self, outlet_id: str, invitation_id: str, caller: CurrentUser) -> None:
        """Delete a pending invitation.

        Raises:
            NotFoundError: If the invitation is not on this outlet or the
                outlet does not exist.
            ForbiddenError: If the caller is not the owner.
            InvitationAlreadyAcceptedError: Accepted invitations are kept.
        """
        invitation = await self.invitation_repo.get_for_outlet(invitation_id, outlet_id)
        if invitation is None:
            raise NotFoundError("Invitation not found")

        await self._get_owned_outlet(outlet_id, caller)

        if invitation.status == InvitationStatus.ACCEPTED.value:
            raise InvitationAlreadyAcceptedError("Accepted invitations cannot be cancelled")

        await self.invitation_repo.cancel_invitation(invitation.id)
        await self.session.commit()
        logger.info("Invitation cancelled", invitation_id=invitation_id, outlet_id=outlet_id)

    async def resend(
        self,
        outlet_id: str,
        invitation_id: str,
        caller: CurrentUser,
    ) -> tuple[InvitationModel, EmailResult]:
        """Send the invitation email again.

        Raises:
            NotFoundError: If the invitation is not on this outlet.
            ForbiddenError: If the caller is not the owner.
            InvitationAlreadyAcceptedError: If it was already accepted.
            InvitationExpiredError: If it has expired.
        """
        invitation = await self.invitation_repo.get_for_outlet(invitation_id, outlet_id)
        if invitation is None:
            raise NotFoundError("Invitation not found")

        outlet = await self._get_owned_outlet(outlet_id, caller)

        if invitation.status == InvitationStatus.ACCEPTED.value:
            raise InvitationAlreadyAcceptedError("This invitation has already been accepted")
        if is_expired(invitation.expires_at, utc_now()):
            raise InvitationExpiredError("This invitation has expired")

        result = await self.send_notification(invitation, outlet.name, caller)
        logger.info(
            "Invitation resent",
            invitation_id=invitation.id,
            email_sent=result.success,
        )
        return invitation, result

    async def preview(self, token: str) -> InvitationPreview:
        """Look up an invitation by token for display.

        Raises:
            NotFoundError: Unknown token.
        """
        invitation = await self.invitation_repo.get_by_token(token)
        if invitation is None:
            raise NotFoundError("Invitation not found")

        outlet = await self.outlet_repo.get_by_id(invitation.outlet_id)
        inviter = await self.user_repo.get_by_id(invitation.invited_by)
        return InvitationPreview(
            invitation=invitation,
            outlet_name=outlet.name if outlet else "",
            inviter_name=inviter.name if inviter else None,
            inviter_email=inviter.email if inviter else None,
            status=effective_status(invitation.status, invitation.expires_at, utc_now()),
        )

    async def list_pending(self, outlet_id: str) -> list[InvitationModel]:
        """Pending (possibly expired) invitations of an outlet, newest first."""
        return await self.invitation_repo.list_pending(outlet_id)
