"""Pydantic schemas for delivery agent endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class DeliveryAgentCreateRequest(BaseModel):
    """Request schema for attaching a rider to an outlet."""

    name: str = Field(..., min_length=1, max_length=255, description="Rider name")
    phone: str = Field(..., min_length=1, max_length=32, description="Contact number")
    email: EmailStr | None = Field(
        None, description="Sign-in email; lets the rider see assigned orders"
    )


class DeliveryAgentUpdateRequest(BaseModel):
    """Partial update; an explicit null email unlinks the sign-in identity."""

    name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=32)
    email: EmailStr | None = None
    is_active: bool | None = None


class DeliveryAgentResponse(BaseModel):
    id: str = Field(..., description="Delivery agent ID")
    outlet_id: str = Field(..., description="Outlet ID")
    name: str = Field(..., description="Rider name")
    phone: str = Field(..., description="Contact number")
    email: str | None = Field(None, description="Sign-in email")
    is_active: bool = Field(..., description="Whether orders can be assigned")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = ConfigDict(from_attributes=True)


class DeliveryAgentListResponse(BaseModel):
    agents: list[DeliveryAgentResponse] = Field(..., description="Newest first")
    total: int = Field(..., description="Total number of agents")
