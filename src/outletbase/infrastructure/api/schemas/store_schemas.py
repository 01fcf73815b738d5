"""Pydantic schemas for the public store endpoints (serviceability and menus)."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class NearbyRequest(BaseModel):
    """Request schema for a coordinate serviceability check.

    Coordinates are validated by the resolver so that malformed values are
    reported as ``invalid_input`` rather than a schema error.
    """

    latitude: float | str = Field(..., description="Latitude in decimal degrees")
    longitude: float | str = Field(..., description="Longitude in decimal degrees")
    max_distance_km: float | None = Field(
        None, gt=0, description="Optional cap on distance, applied on top of each outlet's radius"
    )


class ServiceableOutletResponse(BaseModel):
    """An outlet delivering to the requested location."""

    id: str = Field(..., description="Outlet ID")
    name: str = Field(..., description="Outlet name")
    address: str = Field(..., description="Street address")
    postal_code: str = Field(..., description="Postal code")
    phone: str | None = Field(None, description="Contact number")
    latitude: float | None = Field(None, description="Outlet latitude")
    longitude: float | None = Field(None, description="Outlet longitude")
    delivery_radius_km: float = Field(..., description="Delivery radius in km")
    distance_km: float | None = Field(
        None, description="Distance from the requested point; null for postal-code matches"
    )

    model_config = ConfigDict(from_attributes=True)


class ServiceabilityResponse(BaseModel):
    """Response schema for serviceability checks."""

    serviceable: bool = Field(..., description="Whether any outlet delivers here")
    outlets: list[ServiceableOutletResponse] = Field(
        default_factory=list, description="Matching outlets, nearest first"
    )
    message: str | None = Field(None, description="User-facing explanation when not serviceable")


class MenuItemResponse(BaseModel):
    """A product a customer can order."""

    product_id: str = Field(..., description="Catalogue product ID")
    outlet_product_id: str = Field(..., description="Listing ID")
    name: str = Field(..., description="Product name")
    description: str | None = Field(None, description="Long description")
    category: str | None = Field(None, description="Menu grouping")
    image_url: str = Field(..., description="Picture")
    price: Decimal = Field(..., description="Price charged at this outlet")


class MenuOutletResponse(BaseModel):
    id: str
    name: str
    address: str
    postal_code: str
    phone: str | None = None


class MenuResponse(BaseModel):
    """Public menu of an open outlet."""

    outlet: MenuOutletResponse
    items: list[MenuItemResponse] = Field(
        default_factory=list, description="By category, then name"
    )
