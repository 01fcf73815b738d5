"""Invitation repository for database operations."""

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.infrastructure.persistence.models import InvitationModel


class InvitationRepository:
    """Repository for invitation database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create_invitation(self, invitation: InvitationModel) -> InvitationModel:
        """Create a new invitation.

        Args:
            invitation: Invitation model to create.

        Returns:
            Created invitation model.
        """
        self.session.add(invitation)
        await self.session.flush()
        return invitation

    async def get_by_token(self, token: str) -> InvitationModel | None:
        """Get an invitation by token.

        Args:
            token: Invitation token.

        Returns:
            Invitation model if found, None otherwise.
        """
        result = await self.session.execute(
            select(InvitationModel).where(InvitationModel.token == token)
        )
        return result.scalar_one_or_none()

    async def get_for_outlet(self, invitation_id: str, outlet_id: str) -> InvitationModel | None:
        """Get an invitation only if it belongs to the given outlet."""
        result = await self.session.execute(
            select(InvitationModel).where(
                InvitationModel.id == invitation_id,
                InvitationModel.outlet_id == outlet_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_pending(self, outlet_id: str) -> list[InvitationModel]:
        """List invitations of an outlet whose stored status is pending.

        Expired-but-pending rows are included; callers derive the
        displayed status.
        """
        result = await self.session.execute(
            select(InvitationModel)
            .where(
                InvitationModel.outlet_id == outlet_id,
                InvitationModel.status == "pending",
            )
            .order_by(InvitationModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def mark_as_accepted(self, invitation_id: str, accepted_at: datetime) -> bool:
        """Move a pending invitation to accepted.

        The update is conditional on the row still being pending, so two
        concurrent acceptances cannot both succeed.

        Args:
            invitation_id: ID of the invitation to mark as accepted.
            accepted_at: Acceptance timestamp.

        Returns:
            True if this call performed the transition.
        """
        result = await self.session.execute(
            update(InvitationModel)
            .where(
                InvitationModel.id == invitation_id,
                InvitationModel.status == "pending",
            )
            .values(status="accepted", accepted_at=accepted_at)
            .execution_options(synchronize_session="evaluate")
        )
        await self.session.flush()
        return result.rowcount == 1

    async def mark_email_sent(self, invitation_id: str, sent_at: datetime) -> bool:
        """Record a successful invitation email delivery.

        Returns:
            True if the invitation still exists.
        """
        result = await self.session.execute(
            update(InvitationModel)
            .where(InvitationModel.id == invitation_id)
            .values(email_sent=True, email_sent_at=sent_at)
            .execution_options(synchronize_session="evaluate")
        )
        await self.session.flush()
        return result.rowcount == 1

    async def cancel_invitation(self, invitation_id: str) -> bool:
        """Cancel (delete) an invitation.

        Args:
            invitation_id: ID of the invitation to cancel.

        Returns:
            True if invitation was deleted, False if not found.
        """
        result = await self.session.execute(
            delete(InvitationModel).where(InvitationModel.id == invitation_id)
        )
        await self.session.flush()
        return result.rowcount > 0
