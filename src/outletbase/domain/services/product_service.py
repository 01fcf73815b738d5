"""Product catalogue, outlet listings and the public menu.

Each user keeps a catalogue of the products they created. An outlet's
owner or admins put products from the owner's catalogue on the outlet,
optionally at a custom price. The menu a customer sees is every listing
that is available and whose product is active.
"""

import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.core.logging import get_logger
from outletbase.domain.entities import (
    CatalogueEntry,
    CurrentUser,
    Menu,
    MenuItem,
    OutletProductUpdate,
    ProductCreate,
    ProductUpdate,
)
from outletbase.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    OutletClosedError,
)
from outletbase.domain.services.outlet_access import OutletAccessPolicy
from outletbase.domain.services.pricing import parse_price
from outletbase.infrastructure.persistence.models import OutletProductModel, ProductModel
from outletbase.infrastructure.persistence.repositories import (
    ProductRepository,
    UserRepository,
)

logger = get_logger(__name__)


def _required_text(value: Any, label: str) -> str:
    stripped = value.strip() if isinstance(value, str) else ""
    if not stripped:
        raise InvalidInputError(f"{label} is required")
    return stripped


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None


def _flag(value: Any, label: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidInputError(f"{label} must be true or false")
    return value


class ProductService:
    """Service for catalogue and menu business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the product service.

        Args:
            session: SQLAlchemy async session; the service commits it.
        """
        self.session = session
        self.product_repo = ProductRepository(session)
        self.user_repo = UserRepository(session)
        self.access = OutletAccessPolicy(session)

    async def _get_own_product(self, product_id: str, caller: CurrentUser) -> ProductModel:
        product = await self.product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        if product.created_by != caller.user_id:
            raise ForbiddenError("You can only manage products you created")
        return product

    async def create_product(self, caller: CurrentUser, data: ProductCreate) -> ProductModel:
        """Add a product to the caller's catalogue.

        Raises:
            InvalidInputError: On a missing name or image, or a price that
                is not a non-negative amount.
        """
        product = ProductModel(
            id=str(uuid.uuid4()),
            name=_required_text(data.name, "Name"),
            description=_optional_text(data.description),
            base_price=parse_price(data.base_price, "Base price"),
            category=_optional_text(data.category),
            image_url=_required_text(data.image_url, "Image URL"),
            created_by=caller.user_id,
            is_active=True,
        )
        await self.user_repo.ensure(caller.user_id, caller.email, caller.name)
        await self.product_repo.create(product)
        await self.session.commit()
        logger.info("Product created", product_id=product.id, user_id=caller.user_id)
        return product

    async def list_products(self, caller: CurrentUser) -> list[ProductModel]:
        return await self.product_repo.list_created_by(caller.user_id)

    async def get_product(self, product_id: str, caller: CurrentUser) -> ProductModel:
        return await self._get_own_product(product_id, caller)

    async def update_product(
        self, product_id: str, caller: CurrentUser, update: ProductUpdate
    ) -> ProductModel:
        """Apply a partial update to one of the caller's products.

        Raises:
            NotFoundError: If the product does not exist.
            ForbiddenError: If someone else created it.
            InvalidInputError: On invalid field values.
        """
        product = await self._get_own_product(product_id, caller)
        changes = update.changes()

        if "name" in changes:
            changes["name"] = _required_text(changes["name"], "Name")
        if "image_url" in changes:
            changes["image_url"] = _required_text(changes["image_url"], "Image URL")
        if "base_price" in changes:
            changes["base_price"] = parse_price(changes["base_price"], "Base price")
        if "description" in changes:
            changes["description"] = _optional_text(changes["description"])
        if "category" in changes:
            changes["category"] = _optional_text(changes["category"])
        if "is_active" in changes:
            changes["is_active"] = _flag(changes["is_active"], "is_active")

        await self.product_repo.apply_changes(product, changes)
        await self.session.commit()
        logger.info("Product updated", product_id=product_id, fields=sorted(changes))
        return product

    async def delete_product(self, product_id: str, caller: CurrentUser) -> None:
        """Delete a product and take it off every outlet."""
        await self._get_own_product(product_id, caller)
        await self.product_repo.delete(product_id)
        await self.session.commit()
        logger.info("Product deleted", product_id=product_id, user_id=caller.user_id)

    async def list_outlet_products(
        self, outlet_id: str, caller: CurrentUser
    ) -> list[CatalogueEntry]:
        """The outlet owner's catalogue, marking what is on this outlet."""
        access = await self.access.require_member(outlet_id, caller)
        rows = await self.product_repo.list_catalogue_for_outlet(
            access.outlet.owner_id, outlet_id
        )
        return [CatalogueEntry(product=product, listing=listing) for product, listing in rows]

    async def add_outlet_product(
        self,
        outlet_id: str,
        product_id: str,
        caller: CurrentUser,
        custom_price: Any = None,
    ) -> CatalogueEntry:
        """List a catalogue product on an outlet.

        Only products from the outlet owner's catalogue can be listed.

        Raises:
            NotFoundError: Unknown outlet, or a product outside the owner's
                catalogue.
            ConflictError: If the product is already on the outlet.
        """
        access = await self.access.require_member(outlet_id, caller)
        product = await self.product_repo.get_by_id(product_id)
        if product is None or product.created_by != access.outlet.owner_id:
            raise NotFoundError("Product not found")

        price = parse_price(custom_price, "Custom price") if custom_price is not None else None
        if await self.product_repo.get_listing(outlet_id, product_id) is not None:
            raise ConflictError("Product already added to this outlet")

        listing = OutletProductModel(
            id=str(uuid.uuid4()),
            outlet_id=outlet_id,
            product_id=product_id,
            is_available=True,
            custom_price=price,
        )
        try:
            await self.product_repo.create_listing(listing)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("Product already added to this outlet") from None

        logger.info("Product listed on outlet", outlet_id=outlet_id, product_id=product_id)
        return CatalogueEntry(product=product, listing=listing)

    async def update_outlet_product(
        self,
        outlet_id: str,
        product_id: str,
        caller: CurrentUser,
        update: OutletProductUpdate,
    ) -> CatalogueEntry:
        """Toggle availability or change the custom price of a listing.

        Raises:
            NotFoundError: If the product is not on the outlet.
        """
        await self.access.require_member(outlet_id, caller)
        listing = await self.product_repo.get_listing(outlet_id, product_id)
        if listing is None:
            raise NotFoundError("Product not found in this outlet")

        changes = update.changes()
        if "is_available" in changes:
            listing.is_available = _flag(changes["is_available"], "is_available")
        if "custom_price" in changes:
            value = changes["custom_price"]
            if isinstance(value, str) and not value.strip():
                value = None
            listing.custom_price = (
                parse_price(value, "Custom price") if value is not None else None
            )

        await self.session.flush()
        await self.session.commit()
        logger.info(
            "Outlet product updated",
            outlet_id=outlet_id,
            product_id=product_id,
            fields=sorted(changes),
        )
        product = await self.product_repo.get_by_id(product_id)
        return CatalogueEntry(product=product, listing=listing)

    async def remove_outlet_product(
        self, outlet_id: str, product_id: str, caller: CurrentUser
    ) -> None:
        await self.access.require_member(outlet_id, caller)
        if not await self.product_repo.delete_listing(outlet_id, product_id):
            raise NotFoundError("Product not found in this outlet")
        await self.session.commit()
        logger.info("Product removed from outlet", outlet_id=outlet_id, product_id=product_id)

    async def get_menu(self, outlet_id: str) -> Menu:
        """Public menu of an outlet.

        Raises:
            NotFoundError: If the outlet does not exist.
            OutletClosedError: If the outlet is deactivated.
        """
        outlet = await self.access.get_outlet(outlet_id)
        if not outlet.is_active:
            raise OutletClosedError("Outlet is currently closed")
        rows = await self.product_repo.list_menu(outlet_id)
        return Menu(
            outlet=outlet,
            items=[MenuItem(product=product, listing=listing) for product, listing in rows],
        )
