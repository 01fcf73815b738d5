"""Invitation API routes.

Outlet-scoped endpoints let owners issue, cancel and re-send invitations;
token-scoped endpoints let invitees preview and accept them.
"""

from fastapi import APIRouter, Response, status

from outletbase.core.logging import get_logger
from outletbase.domain.entities import effective_status
from outletbase.domain.services import invitation_service as invitation_service_module
from outletbase.infrastructure.api.dependencies import AuthenticatedUser, Invitations
from outletbase.infrastructure.api.schemas import (
    ErrorResponse,
    InvitationAcceptResponse,
    InvitationCreateRequest,
    InvitationPreviewResponse,
    InvitationResendResponse,
    InvitationResponse,
)
from outletbase.infrastructure.persistence.models import InvitationModel

logger = get_logger(__name__)

outlet_invitations_router = APIRouter()
router = APIRouter()


def to_invitation_response(invitation: InvitationModel) -> InvitationResponse:
    return InvitationResponse(
        id=invitation.id,
        outlet_id=invitation.outlet_id,
        email=invitation.email,
        invited_by=invitation.invited_by,
        role=invitation.role,
        status=effective_status(
            invitation.status, invitation.expires_at, invitation_service_module.utc_now()
        ),
        expires_at=invitation.expires_at,
        accepted_at=invitation.accepted_at,
        created_at=invitation.created_at,
        email_sent=invitation.email_sent,
        email_sent_at=invitation.email_sent_at,
    )


@outlet_invitations_router.post(
    "/{outlet_id}/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=InvitationResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Only the owner can invite"},
        404: {"model": ErrorResponse, "description": "Outlet not found"},
    },
)
async def create_invitation(
    outlet_id: str,
    request: InvitationCreateRequest,
    current_user: AuthenticatedUser,
    invitation_service: Invitations,
) -> InvitationResponse:
    """Invite an email address to administer the outlet.

    The invitation is created even if the email cannot be delivered;
    ``email_sent`` reports the delivery outcome.
    """
    invitation = await invitation_service.issue(
        outlet_id, str(request.email), current_user, role=request.role
    )
    return to_invitation_response(invitation)


@outlet_invitations_router.delete(
    "/{outlet_id}/invitations/{invitation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"model": ErrorResponse, "description": "Only the owner can cancel"},
        404: {"model": ErrorResponse, "description": "Invitation not found"},
        409: {"model": ErrorResponse, "description": "Invitation already accepted"},
    },
)
async def cancel_invitation(
    outlet_id: str,
    invitation_id: str,
    current_user: AuthenticatedUser,
    invitation_service: Invitations,
) -> Response:
    """Cancel a pending invitation."""
    await invitation_service.cancel(outlet_id, invitation_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@outlet_invitations_router.post(
    "/{outlet_id}/invitations/{invitation_id}/resend",
    response_model=InvitationResendResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Only the owner can resend"},
        404: {"model": ErrorResponse, "description": "Invitation not found"},
        409: {"model": ErrorResponse, "description": "Invitation already accepted"},
        410: {"model": ErrorResponse, "description": "Invitation expired"},
    },
)
async def resend_invitation(
    outlet_id: str,
    invitation_id: str,
    current_user: AuthenticatedUser,
    invitation_service: Invitations,
) -> InvitationResendResponse:
    """Send the invitation email again."""
    invitation, result = await invitation_service.resend(outlet_id, invitation_id, current_user)
    return InvitationResendResponse(
        id=invitation.id,
        email=invitation.email,
        email_sent=result.success,
        email_sent_at=invitation.email_sent_at,
        error=result.error,
    )


@router.get(
    "/{token}",
    response_model=InvitationPreviewResponse,
    responses={404: {"model": ErrorResponse, "description": "Invitation not found"}},
)
async def preview_invitation(
    token: str,
    invitation_service: Invitations,
) -> InvitationPreviewResponse:
    """Show who invited whom to which outlet, and whether it is still valid."""
    preview = await invitation_service.preview(token)
    return InvitationPreviewResponse(
        email=preview.invitation.email,
        outlet_id=preview.invitation.outlet_id,
        outlet_name=preview.outlet_name,
        inviter_name=preview.inviter_name,
        inviter_email=preview.inviter_email,
        role=preview.invitation.role,
        status=preview.status,
        expires_at=preview.invitation.expires_at,
    )


@router.post(
    "/{token}/accept",
    response_model=InvitationAcceptResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Signed in with a different email"},
        404: {"model": ErrorResponse, "description": "Invitation not found"},
        409: {"model": ErrorResponse, "description": "Already accepted or already an admin"},
        410: {"model": ErrorResponse, "description": "Invitation expired"},
    },
)
async def accept_invitation(
    token: str,
    current_user: AuthenticatedUser,
    invitation_service: Invitations,
) -> InvitationAcceptResponse:
    """Accept an invitation as the signed-in user."""
    admin = await invitation_service.accept(token, current_user)
    return InvitationAcceptResponse(
        outlet_id=admin.outlet_id,
        user_id=admin.user_id,
        role=admin.role,
        message="Invitation accepted",
    )
