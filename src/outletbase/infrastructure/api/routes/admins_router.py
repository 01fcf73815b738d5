"""Outlet admin API routes."""

from fastapi import APIRouter, Response, status

from outletbase.infrastructure.api.dependencies import AuthenticatedUser, Outlets
from outletbase.infrastructure.api.routes.invitations_router import to_invitation_response
from outletbase.infrastructure.api.schemas import (
    AdminListResponse,
    AdminResponse,
    AdminRoleUpdateRequest,
    ErrorResponse,
)

router = APIRouter()


@router.get(
    "/{outlet_id}/admins",
    response_model=AdminListResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Not an owner or admin"},
        404: {"model": ErrorResponse, "description": "Outlet not found"},
    },
)
async def list_admins(
    outlet_id: str,
    current_user: AuthenticatedUser,
    outlet_service: Outlets,
) -> AdminListResponse:
    """List the owner and admins of an outlet.

    Pending invitations are included only when the caller is the owner.
    """
    listing = await outlet_service.list_admins(outlet_id, current_user)
    owner = listing.owner
    admins = [
        AdminResponse(
            user_id=listing.outlet.owner_id,
            email=owner.email if owner else None,
            name=owner.name if owner else None,
            role="owner",
            is_owner=True,
            created_at=listing.outlet.created_at,
        )
    ]
    admins.extend(
        AdminResponse(
            user_id=grant.user_id,
            email=user.email if user else None,
            name=user.name if user else None,
            role=grant.role,
            is_owner=False,
            created_at=grant.created_at,
        )
        for grant, user in listing.admins
    )
    return AdminListResponse(
        outlet_id=outlet_id,
        admins=admins,
        pending_invitations=[to_invitation_response(i) for i in listing.pending_invitations],
    )


@router.patch(
    "/{outlet_id}/admins/{user_id}",
    response_model=AdminResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Only the owner can change roles"},
        404: {"model": ErrorResponse, "description": "Outlet or admin not found"},
    },
)
async def update_admin_role(
    outlet_id: str,
    user_id: str,
    request: AdminRoleUpdateRequest,
    current_user: AuthenticatedUser,
    outlet_service: Outlets,
) -> AdminResponse:
    admin = await outlet_service.update_admin_role(outlet_id, user_id, request.role, current_user)
    return AdminResponse(
        user_id=admin.user_id,
        role=admin.role,
        is_owner=False,
        created_at=admin.created_at,
    )


@router.delete(
    "/{outlet_id}/admins/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": ErrorResponse, "description": "Owners cannot remove themselves"},
        403: {"model": ErrorResponse, "description": "Only the owner can remove admins"},
        404: {"model": ErrorResponse, "description": "Outlet or admin not found"},
    },
)
async def remove_admin(
    outlet_id: str,
    user_id: str,
    current_user: AuthenticatedUser,
    outlet_service: Outlets,
) -> Response:
    await outlet_service.remove_admin(outlet_id, user_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
