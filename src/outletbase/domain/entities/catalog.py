"""Catalogue, outlet listing and menu value objects."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from outletbase.domain.entities.outlet import UNSET, PartialUpdate

if TYPE_CHECKING:
    from outletbase.infrastructure.persistence.models import (
        OutletModel,
        OutletProductModel,
        ProductModel,
    )


@dataclass
class ProductCreate:
    """Input for adding a product to the caller's catalogue."""

    name: str
    base_price: Decimal | float | str
    image_url: str
    description: str | None = None
    category: str | None = None


@dataclass
class ProductUpdate(PartialUpdate):
    """Partial update of a catalogue product."""

    name: str = UNSET
    description: str | None = UNSET
    base_price: Decimal = UNSET
    category: str | None = UNSET
    image_url: str = UNSET
    is_active: bool = UNSET


@dataclass
class OutletProductUpdate(PartialUpdate):
    """Partial update of a listing; ``custom_price=None`` falls back to the base price."""

    is_available: bool = UNSET
    custom_price: Decimal | None = UNSET


@dataclass
class CatalogueEntry:
    """A catalogue product and its listing on one outlet, if any."""

    product: "ProductModel"
    listing: "OutletProductModel | None" = None

    @property
    def on_outlet(self) -> bool:
        return self.listing is not None


@dataclass
class MenuItem:
    """A product a customer can order, at the outlet's price."""

    product: "ProductModel"
    listing: "OutletProductModel"

    @property
    def price(self) -> Decimal:
        if self.listing.custom_price is not None:
            return self.listing.custom_price
        return self.product.base_price


@dataclass
class Menu:
    outlet: "OutletModel"
    items: list[MenuItem] = field(default_factory=list)
