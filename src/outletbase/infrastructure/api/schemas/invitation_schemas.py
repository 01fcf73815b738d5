"""Pydantic schemas for invitation API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from outletbase.domain.entities import InvitationStatus


class InvitationCreateRequest(BaseModel):
    """Request schema for creating an invitation."""

    email: EmailStr = Field(..., description="Email address of the user to invite")
    role: str = Field("admin", min_length=1, max_length=32, description="Role granted on acceptance")


class InvitationResponse(BaseModel):
    """Response schema for invitation details (the token is never returned)."""

    id: str = Field(..., description="Invitation ID")
    outlet_id: str = Field(..., description="Outlet ID")
    email: str = Field(..., description="Email address of the invited user")
    invited_by: str = Field(..., description="User ID of the inviter")
    role: str = Field(..., description="Role granted on acceptance")
    status: InvitationStatus = Field(..., description="Current invitation status")
    expires_at: datetime = Field(..., description="Expiration timestamp")
    accepted_at: datetime | None = Field(None, description="Acceptance timestamp (if accepted)")
    created_at: datetime = Field(..., description="Creation timestamp")
    email_sent: bool = Field(False, description="Whether the invitation email has been sent")
    email_sent_at: datetime | None = Field(None, description="Timestamp when the email was sent")

    model_config = ConfigDict(from_attributes=True)


class InvitationPreviewResponse(BaseModel):
    """Response schema for looking up an invitation by token."""

    email: str = Field(..., description="Invited email address")
    outlet_id: str = Field(..., description="Outlet ID")
    outlet_name: str = Field(..., description="Outlet name")
    inviter_name: str | None = Field(None, description="Display name of the inviter")
    inviter_email: str | None = Field(None, description="Email of the inviter")
    role: str = Field(..., description="Role granted on acceptance")
    status: InvitationStatus = Field(..., description="Current invitation status")
    expires_at: datetime = Field(..., description="Expiration timestamp")


class InvitationAcceptResponse(BaseModel):
    """Response schema for a successful acceptance."""

    outlet_id: str = Field(..., description="Outlet the user now administers")
    user_id: str = Field(..., description="User ID of the new admin")
    role: str = Field(..., description="Granted role")
    message: str = Field(..., description="Confirmation message")


class InvitationResendResponse(BaseModel):
    """Response schema for re-sending an invitation email."""

    id: str = Field(..., description="Invitation ID")
    email: str = Field(..., description="Invited email address")
    email_sent: bool = Field(..., description="Whether this delivery attempt succeeded")
    email_sent_at: datetime | None = Field(None, description="Last successful delivery")
    error: str | None = Field(None, description="Delivery error, if any")
