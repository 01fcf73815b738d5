"""Pydantic schemas for outlet admin endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from outletbase.infrastructure.api.schemas.invitation_schemas import InvitationResponse


class AdminResponse(BaseModel):
    """A user with rights on an outlet."""

    user_id: str = Field(..., description="User ID")
    email: str | None = Field(None, description="Email address")
    name: str | None = Field(None, description="Display name")
    role: str = Field(..., description="Role on the outlet")
    is_owner: bool = Field(False, description="Whether this user owns the outlet")
    created_at: datetime | None = Field(None, description="When the grant was created")


class AdminListResponse(BaseModel):
    """Response schema for listing outlet admins."""

    outlet_id: str = Field(..., description="Outlet ID")
    admins: list[AdminResponse] = Field(..., description="Owner first, then admins")
    pending_invitations: list[InvitationResponse] = Field(
        default_factory=list, description="Pending invitations (owners only)"
    )


class AdminRoleUpdateRequest(BaseModel):
    """Request schema for changing an admin's role."""

    role: str = Field(..., min_length=1, max_length=32, description="New role")
