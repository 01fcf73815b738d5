"""Outlet API routes.

Provides endpoints for creating, listing, reading, updating and deleting
outlets.
"""

from fastapi import APIRouter, Response, status

from outletbase.core.logging import get_logger
from outletbase.domain.entities import OutletCreate, OutletUpdate
from outletbase.domain.services import OutletAccess
from outletbase.infrastructure.api.dependencies import AuthenticatedUser, Outlets
from outletbase.infrastructure.api.schemas import (
    ErrorResponse,
    OutletCreateRequest,
    OutletListResponse,
    OutletResponse,
    OutletUpdateRequest,
)
from outletbase.infrastructure.persistence.models import OutletModel

logger = get_logger(__name__)

router = APIRouter()


def to_outlet_response(outlet: OutletModel, is_owner: bool) -> OutletResponse:
    return OutletResponse(
        id=outlet.id,
        name=outlet.name,
        address=outlet.address,
        postal_code=outlet.postal_code,
        phone=outlet.phone,
        latitude=outlet.latitude,
        longitude=outlet.longitude,
        delivery_radius_km=outlet.delivery_radius_km,
        owner_id=outlet.owner_id,
        is_active=outlet.is_active,
        is_owner=is_owner,
        created_at=outlet.created_at,
        updated_at=outlet.updated_at,
    )


def _from_access(access: OutletAccess) -> OutletResponse:
    return to_outlet_response(access.outlet, access.is_owner)


@router.get("", response_model=OutletListResponse)
async def list_outlets(
    current_user: AuthenticatedUser,
    outlet_service: Outlets,
) -> OutletListResponse:
    """List outlets the caller owns, then outlets they administer."""
    outlets = [_from_access(a) for a in await outlet_service.list_outlets_for_user(current_user)]
    return OutletListResponse(outlets=outlets, total=len(outlets))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=OutletResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid outlet data"}},
)
async def create_outlet(
    request: OutletCreateRequest,
    current_user: AuthenticatedUser,
    outlet_service: Outlets,
) -> OutletResponse:
    """Create an outlet owned by the caller.

    When ``admin_email`` is given an admin invitation is created alongside
    and emailed on a best-effort basis.
    """
    outlet = await outlet_service.create_outlet(
        current_user, OutletCreate(**request.model_dump())
    )
    return to_outlet_response(outlet, is_owner=True)


@router.get(
    "/{outlet_id}",
    response_model=OutletResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Not an owner or admin"},
        404: {"model": ErrorResponse, "description": "Outlet not found"},
    },
)
async def get_outlet(
    outlet_id: str,
    current_user: AuthenticatedUser,
    outlet_service: Outlets,
) -> OutletResponse:
    return _from_access(await outlet_service.get_outlet(outlet_id, current_user))


@router.patch(
    "/{outlet_id}",
    response_model=OutletResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid outlet data"},
        403: {"model": ErrorResponse, "description": "Not allowed to change this outlet"},
        404: {"model": ErrorResponse, "description": "Outlet not found"},
    },
)
async def update_outlet(
    outlet_id: str,
    request: OutletUpdateRequest,
    current_user: AuthenticatedUser,
    outlet_service: Outlets,
) -> OutletResponse:
    """Partially update an outlet; only fields present in the body change."""
    update = OutletUpdate(**request.model_dump(exclude_unset=True))
    outlet = await outlet_service.update_outlet(outlet_id, current_user, update)
    return to_outlet_response(outlet, is_owner=outlet.owner_id == current_user.user_id)


@router.delete(
    "/{outlet_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"model": ErrorResponse, "description": "Only the owner can delete"},
        404: {"model": ErrorResponse, "description": "Outlet not found"},
    },
)
async def delete_outlet(
    outlet_id: str,
    current_user: AuthenticatedUser,
    outlet_service: Outlets,
) -> Response:
    """Delete an outlet together with its admins and invitations."""
    await outlet_service.delete_outlet(outlet_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
