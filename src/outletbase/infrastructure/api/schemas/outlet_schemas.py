"""Pydantic schemas for outlet API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class OutletCreateRequest(BaseModel):
    """Request schema for creating an outlet."""

    name: str = Field(..., min_length=1, max_length=255, description="Outlet name")
    address: str = Field(..., min_length=1, description="Street address")
    postal_code: str = Field(..., description="Postal code (6 digits)")
    phone: str | None = Field(None, max_length=32, description="Contact number")
    latitude: float | None = Field(None, ge=-90, le=90, description="Latitude")
    longitude: float | None = Field(None, ge=-180, le=180, description="Longitude")
    delivery_radius_km: float | None = Field(
        None, gt=0, description="Delivery radius in km (defaults to 10)"
    )
    admin_email: EmailStr | None = Field(
        None, description="Optional email to invite as outlet admin"
    )


class OutletUpdateRequest(BaseModel):
    """Request schema for a partial outlet update.

    Only fields present in the request body are changed; an explicit
    ``null`` clears nullable fields.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1)
    postal_code: str | None = None
    phone: str | None = Field(None, max_length=32)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    delivery_radius_km: float | None = Field(None, gt=0)
    is_active: bool | None = None


class OutletResponse(BaseModel):
    """Response schema for outlet details."""

    id: str = Field(..., description="Outlet ID")
    name: str = Field(..., description="Outlet name")
    address: str = Field(..., description="Street address")
    postal_code: str = Field(..., description="Postal code")
    phone: str | None = Field(None, description="Contact number")
    latitude: float | None = Field(None, description="Latitude")
    longitude: float | None = Field(None, description="Longitude")
    delivery_radius_km: float = Field(..., description="Delivery radius in km")
    owner_id: str = Field(..., description="User ID of the owner")
    is_active: bool = Field(..., description="Whether the outlet accepts orders")
    is_owner: bool = Field(..., description="Whether the caller owns the outlet")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class OutletListResponse(BaseModel):
    """Response schema for listing outlets."""

    outlets: list[OutletResponse] = Field(..., description="Owned outlets first")
    total: int = Field(..., description="Total number of outlets")
