"""Pydantic schemas for catalogue and outlet product endpoints.

Prices are accepted as numbers or numeric strings and validated by the
product service, so a bad amount is reported as ``invalid_input``.
Amounts are returned as decimal strings with two places.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProductCreateRequest(BaseModel):
    """Request schema for adding a catalogue product."""

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: str | None = Field(None, description="Long description")
    base_price: Decimal | str = Field(..., description="Default price")
    category: str | None = Field(None, max_length=64, description="Menu grouping")
    image_url: str = Field(..., min_length=1, description="Picture shown on the menu")


class ProductUpdateRequest(BaseModel):
    """Partial update; only fields present in the body change."""

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    base_price: Decimal | str | None = None
    category: str | None = Field(None, max_length=64)
    image_url: str | None = None
    is_active: bool | None = None


class ProductResponse(BaseModel):
    """Response schema for a catalogue product."""

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: str | None = Field(None, description="Long description")
    base_price: Decimal = Field(..., description="Default price")
    category: str | None = Field(None, description="Menu grouping")
    image_url: str = Field(..., description="Picture shown on the menu")
    is_active: bool = Field(..., description="Hidden from every menu when false")
    created_by: str = Field(..., description="User ID of the catalogue owner")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    products: list[ProductResponse] = Field(..., description="Oldest first")
    total: int = Field(..., description="Total number of products")


class OutletProductCreateRequest(BaseModel):
    """Request schema for listing a product on an outlet."""

    product_id: str = Field(..., min_length=1, description="Catalogue product ID")
    custom_price: Decimal | str | None = Field(
        None, description="Outlet price; the base price applies when omitted"
    )


class OutletProductUpdateRequest(BaseModel):
    """Partial update of a listing.

    ``custom_price`` set to null or an empty string reverts to the base
    price.
    """

    is_available: bool | None = None
    custom_price: Decimal | str | None = None


class OutletProductResponse(BaseModel):
    """A catalogue product as seen from one outlet."""

    product_id: str = Field(..., description="Catalogue product ID")
    name: str = Field(..., description="Product name")
    description: str | None = Field(None, description="Long description")
    category: str | None = Field(None, description="Menu grouping")
    image_url: str = Field(..., description="Picture shown on the menu")
    base_price: Decimal = Field(..., description="Catalogue price")
    is_active: bool = Field(..., description="Catalogue active flag")
    outlet_product_id: str | None = Field(
        None, description="Listing ID; null when the product is not on the outlet"
    )
    is_available: bool = Field(False, description="Whether the outlet currently sells it")
    custom_price: Decimal | None = Field(None, description="Outlet price override")


class OutletProductListResponse(BaseModel):
    outlet_id: str = Field(..., description="Outlet ID")
    products: list[OutletProductResponse] = Field(..., description="Owner's catalogue")
