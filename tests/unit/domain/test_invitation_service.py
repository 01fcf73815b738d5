"""Unit tests for InvitationService against an in-memory database."""

import string
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from outletbase.domain.entities import CurrentUser, InvitationStatus
from outletbase.domain.exceptions import (
    AlreadyAdminError,
    EmailMismatchError,
    ForbiddenError,
    InvitationAlreadyAcceptedError,
    InvitationExpiredError,
    NotFoundError,
)
from outletbase.domain.services import invitation_service as invitation_service_module
from outletbase.domain.services.invitation_service import InvitationService
from outletbase.infrastructure.persistence.models import (
    InvitationModel,
    OutletAdminModel,
    UserModel,
)

T0 = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
URL_SAFE = set(string.ascii_letters + string.digits + "-_")


@pytest.fixture
def clock(monkeypatch):
    """Controllable clock for the invitation service."""

    class Clock:
        now = T0

        def advance(self, **kwargs):
            self.now = self.now + timedelta(**kwargs)

    clock = Clock()
    monkeypatch.setattr(invitation_service_module, "utc_now", lambda: clock.now)
    return clock


@pytest.fixture
def service(db_session, email_service, settings) -> InvitationService:
    return InvitationService(db_session, email_service, settings)


@pytest_asyncio.fixture
async def outlet(make_outlet, owner):
    return await make_outlet(owner)


async def count_admins(db_session, outlet_id: str) -> int:
    result = await db_session.execute(
        select(func.count()).select_from(OutletAdminModel).where(
            OutletAdminModel.outlet_id == outlet_id
        )
    )
    return result.scalar_one()


class TestIssue:
    @pytest.mark.asyncio
    async def test_owner_issues_pending_invitation(self, service, outlet, owner, clock):
        invitation = await service.issue(outlet.id, " Admin@Example.com ", owner)

        assert invitation.status == InvitationStatus.PENDING.value
        assert invitation.email == "admin@example.com"
        assert invitation.role == "admin"
        assert invitation.invited_by == owner.user_id
        assert invitation.expires_at == T0 + timedelta(days=7)
        assert len(invitation.token) == 32
        assert set(invitation.token) <= URL_SAFE

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, service, outlet, owner, clock):
        first = await service.issue(outlet.id, "a@example.com", owner)
        second = await service.issue(outlet.id, "b@example.com", owner)
        assert first.token != second.token

    @pytest.mark.asyncio
    async def test_email_is_sent_and_recorded(
        self, service, outlet, owner, email_provider, clock
    ):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)

        assert invitation.email_sent is True
        assert invitation.email_sent_at == T0
        assert len(email_provider.sent) == 1
        message = email_provider.sent[0]
        assert message["to"] == "admin@example.com"
        assert outlet.name in message["subject"]
        assert invitation.token in message["text"]

    @pytest.mark.asyncio
    async def test_email_failure_keeps_invitation(
        self, service, outlet, owner, email_provider, db_session
    ):
        email_provider.fail = True

        invitation = await service.issue(outlet.id, "admin@example.com", owner)

        stored = await db_session.get(InvitationModel, invitation.id)
        assert stored is not None
        assert stored.status == "pending"
        assert stored.email_sent is False
        assert stored.email_sent_at is None

    @pytest.mark.asyncio
    async def test_delivery_bookkeeping_failure_keeps_invitation(
        self, service, outlet, owner, email_provider, db_session
    ):
        service.invitation_repo.mark_email_sent = AsyncMock(
            side_effect=OperationalError("UPDATE invitations", {}, Exception("disk I/O error"))
        )

        invitation = await service.issue(outlet.id, "admin@example.com", owner)

        assert len(email_provider.sent) == 1
        assert invitation.email_sent is False
        assert invitation.email_sent_at is None
        stored = await db_session.get(InvitationModel, invitation.id)
        assert stored is not None
        assert stored.status == "pending"
        assert stored.email_sent is False

    @pytest.mark.asyncio
    async def test_custom_role(self, service, outlet, owner):
        invitation = await service.issue(outlet.id, "chef@example.com", owner, role="manager")
        assert invitation.role == "manager"

    @pytest.mark.asyncio
    async def test_non_owner_cannot_issue(self, service, outlet, stranger, email_provider):
        with pytest.raises(ForbiddenError):
            await service.issue(outlet.id, "admin@example.com", stranger)
        assert email_provider.sent == []

    @pytest.mark.asyncio
    async def test_admin_cannot_issue(self, service, outlet, invitee, db_session):
        db_session.add(UserModel(id=invitee.user_id, email=invitee.email))
        db_session.add(
            OutletAdminModel(
                id=str(uuid.uuid4()), outlet_id=outlet.id, user_id=invitee.user_id
            )
        )
        await db_session.commit()

        with pytest.raises(ForbiddenError):
            await service.issue(outlet.id, "another@example.com", invitee)

    @pytest.mark.asyncio
    async def test_missing_outlet(self, service, owner):
        with pytest.raises(NotFoundError):
            await service.issue("missing", "admin@example.com", owner)


class TestAccept:
    @pytest.mark.asyncio
    async def test_accept_grants_admin(self, service, outlet, owner, invitee, db_session, clock):
        invitation = await service.issue(outlet.id, "admin@example.com", owner, role="manager")
        clock.advance(days=1)

        admin = await service.accept(invitation.token, invitee)

        assert admin.outlet_id == outlet.id
        assert admin.user_id == invitee.user_id
        assert admin.role == "manager"
        assert invitation.status == "accepted"
        assert invitation.accepted_at == T0 + timedelta(days=1)
        assert await count_admins(db_session, outlet.id) == 1
        assert await db_session.get(UserModel, invitee.user_id) is not None

    @pytest.mark.asyncio
    async def test_replay_is_rejected_without_second_grant(
        self, service, outlet, owner, invitee, db_session
    ):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        await service.accept(invitation.token, invitee)

        with pytest.raises(InvitationAlreadyAcceptedError):
            await service.accept(invitation.token, invitee)
        assert await count_admins(db_session, outlet.id) == 1

    @pytest.mark.asyncio
    async def test_email_mismatch(self, service, outlet, owner, stranger, db_session):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)

        with pytest.raises(EmailMismatchError):
            await service.accept(invitation.token, stranger)
        assert await count_admins(db_session, outlet.id) == 0
        assert invitation.status == "pending"

    @pytest.mark.asyncio
    async def test_expired_one_second_after_seven_days(self, service, outlet, owner, invitee, clock):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        clock.advance(days=7, seconds=1)

        with pytest.raises(InvitationExpiredError):
            await service.accept(invitation.token, invitee)

    @pytest.mark.asyncio
    async def test_still_valid_at_exact_expiry(self, service, outlet, owner, invitee, clock):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        clock.advance(days=7)

        admin = await service.accept(invitation.token, invitee)
        assert admin.user_id == invitee.user_id

    @pytest.mark.asyncio
    async def test_expiry_checked_before_status(self, service, outlet, owner, invitee, clock):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        await service.accept(invitation.token, invitee)
        clock.advance(days=8)

        with pytest.raises(InvitationExpiredError):
            await service.accept(invitation.token, invitee)

    @pytest.mark.asyncio
    async def test_unknown_token(self, service, invitee):
        with pytest.raises(NotFoundError):
            await service.accept("no-such-token", invitee)

    @pytest.mark.asyncio
    async def test_existing_admin_rejected(self, service, outlet, owner, invitee, db_session):
        first = await service.issue(outlet.id, "admin@example.com", owner)
        second = await service.issue(outlet.id, "admin@example.com", owner)
        await service.accept(first.token, invitee)

        with pytest.raises(AlreadyAdminError):
            await service.accept(second.token, invitee)
        assert await count_admins(db_session, outlet.id) == 1

    @pytest.mark.asyncio
    async def test_owner_cannot_accept_for_own_outlet(self, service, outlet, owner):
        invitation = await service.issue(outlet.id, owner.email, owner)

        with pytest.raises(AlreadyAdminError):
            await service.accept(invitation.token, owner)

    @pytest.mark.asyncio
    async def test_lost_status_race_rolls_back_grant(
        self, service, outlet, owner, invitee, db_session, monkeypatch
    ):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        invitation_id = invitation.id
        outlet_id = outlet.id
        token = invitation.token
        monkeypatch.setattr(
            service.invitation_repo, "mark_as_accepted", AsyncMock(return_value=False)
        )

        with pytest.raises(InvitationAlreadyAcceptedError):
            await service.accept(token, invitee)

        assert await count_admins(db_session, outlet_id) == 0
        stored = await db_session.get(InvitationModel, invitation_id)
        assert stored.status == "pending"

    @pytest.mark.asyncio
    async def test_lost_grant_race_reports_already_admin(
        self, service, outlet, owner, invitee, db_session, monkeypatch
    ):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        invitation_id = invitation.id
        outlet_id = outlet.id
        token = invitation.token

        # Another request granted the role after this one checked.
        db_session.add(UserModel(id=invitee.user_id, email=invitee.email))
        db_session.add(
            OutletAdminModel(id=str(uuid.uuid4()), outlet_id=outlet_id, user_id=invitee.user_id)
        )
        await db_session.commit()
        monkeypatch.setattr(service.admin_repo, "exists", AsyncMock(return_value=False))

        with pytest.raises(AlreadyAdminError):
            await service.accept(token, invitee)

        assert await count_admins(db_session, outlet_id) == 1
        stored = await db_session.get(InvitationModel, invitation_id)
        assert stored.status == "pending"


class TestCancel:
    @pytest.mark.asyncio
    async def test_owner_cancels_pending(self, service, outlet, owner, db_session):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        invitation_id = invitation.id

        await service.cancel(outlet.id, invitation_id, owner)

        result = await db_session.execute(
            select(InvitationModel).where(InvitationModel.id == invitation_id)
        )
        assert result.scalar_one_or_none() is None

    @pytest.mark.asyncio
    async def test_non_owner_forbidden_and_row_untouched(
        self, service, outlet, owner, stranger, db_session
    ):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)

        with pytest.raises(ForbiddenError):
            await service.cancel(outlet.id, invitation.id, stranger)

        stored = await db_session.get(InvitationModel, invitation.id)
        assert stored is not None
        assert stored.status == "pending"

    @pytest.mark.asyncio
    async def test_invitation_of_another_outlet(self, service, make_outlet, outlet, owner):
        other = await make_outlet(owner, name="Other Kitchen")
        invitation = await service.issue(outlet.id, "admin@example.com", owner)

        with pytest.raises(NotFoundError):
            await service.cancel(other.id, invitation.id, owner)

    @pytest.mark.asyncio
    async def test_accepted_invitation_cannot_be_cancelled(
        self, service, outlet, owner, invitee, db_session
    ):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        await service.accept(invitation.token, invitee)

        with pytest.raises(InvitationAlreadyAcceptedError):
            await service.cancel(outlet.id, invitation.id, owner)
        assert await db_session.get(InvitationModel, invitation.id) is not None


class TestResendAndPreview:
    @pytest.mark.asyncio
    async def test_resend_after_failed_delivery(
        self, service, outlet, owner, email_provider, clock
    ):
        email_provider.fail = True
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        assert invitation.email_sent is False

        email_provider.fail = False
        clock.advance(hours=1)
        resent, result = await service.resend(outlet.id, invitation.id, owner)

        assert result.success is True
        assert resent.email_sent is True
        assert resent.email_sent_at == T0 + timedelta(hours=1)
        assert len(email_provider.sent) == 1

    @pytest.mark.asyncio
    async def test_resend_expired(self, service, outlet, owner, clock):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        clock.advance(days=8)

        with pytest.raises(InvitationExpiredError):
            await service.resend(outlet.id, invitation.id, owner)

    @pytest.mark.asyncio
    async def test_resend_accepted(self, service, outlet, owner, invitee):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)
        await service.accept(invitation.token, invitee)

        with pytest.raises(InvitationAlreadyAcceptedError):
            await service.resend(outlet.id, invitation.id, owner)

    @pytest.mark.asyncio
    async def test_resend_by_non_owner(self, service, outlet, owner, stranger):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)

        with pytest.raises(ForbiddenError):
            await service.resend(outlet.id, invitation.id, stranger)

    @pytest.mark.asyncio
    async def test_preview_reports_computed_status(self, service, outlet, owner, clock):
        invitation = await service.issue(outlet.id, "admin@example.com", owner)

        preview = await service.preview(invitation.token)
        assert preview.status == InvitationStatus.PENDING
        assert preview.outlet_name == outlet.name
        assert preview.inviter_name == owner.name
        assert preview.inviter_email == owner.email

        clock.advance(days=7, seconds=1)
        expired = await service.preview(invitation.token)
        assert expired.status == InvitationStatus.EXPIRED
        assert expired.invitation.status == "pending"

    @pytest.mark.asyncio
    async def test_preview_unknown_token(self, service):
        with pytest.raises(NotFoundError):
            await service.preview("nope")

    @pytest.mark.asyncio
    async def test_list_pending_excludes_accepted(self, service, outlet, owner, invitee):
        accepted = await service.issue(outlet.id, "admin@example.com", owner)
        pending = await service.issue(outlet.id, "later@example.com", owner)
        await service.accept(accepted.token, invitee)

        assert [i.id for i in await service.list_pending(outlet.id)] == [pending.id]


def test_default_clock_is_timezone_aware():
    assert invitation_service_module.utc_now().tzinfo is not None


def test_current_user_display_name_falls_back_to_email():
    assert CurrentUser(user_id="u", email="u@example.com").display_name == "u@example.com"
