"""Product and outlet listing repository for database operations."""

from typing import Any

from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.infrastructure.persistence.models import (
    OrderItemModel,
    OutletProductModel,
    ProductModel,
)


class ProductRepository:
    """Repository for catalogue products and their outlet listings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, product: ProductModel) -> ProductModel:
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(self, product_id: str) -> ProductModel | None:
        result = await self.session.execute(
            select(ProductModel).where(ProductModel.id == product_id)
        )
        return result.scalar_one_or_none()

    async def list_created_by(self, user_id: str) -> list[ProductModel]:
        """List a user's catalogue, oldest first."""
        result = await self.session.execute(
            select(ProductModel)
            .where(ProductModel.created_by == user_id)
            .order_by(ProductModel.created_at, ProductModel.id)
        )
        return list(result.scalars().all())

    async def apply_changes(self, product: ProductModel, changes: dict[str, Any]) -> ProductModel:
        for column, value in changes.items():
            setattr(product, column, value)
        await self.session.flush()
        return product

    async def delete(self, product_id: str) -> bool:
        """Delete a product and its outlet listings.

        Order lines keep their copied name and price and lose the link.

        Returns:
            True if the product was deleted, False if not found.
        """
        await self.session.execute(
            update(OrderItemModel)
            .where(OrderItemModel.product_id == product_id)
            .values(product_id=None)
        )
        await self.session.execute(
            delete(OutletProductModel).where(OutletProductModel.product_id == product_id)
        )
        result = await self.session.execute(
            delete(ProductModel).where(ProductModel.id == product_id)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def list_catalogue_for_outlet(
        self, owner_id: str, outlet_id: str
    ) -> list[tuple[ProductModel, OutletProductModel | None]]:
        """The owner's catalogue paired with this outlet's listing, if any.

        Args:
            owner_id: Owner of the outlet; only their products are offered.
            outlet_id: Outlet whose listings are joined in.

        Returns:
            (product, listing) pairs; listing is None when not on the outlet.
        """
        result = await self.session.execute(
            select(ProductModel, OutletProductModel)
            .outerjoin(
                OutletProductModel,
                and_(
                    OutletProductModel.product_id == ProductModel.id,
                    OutletProductModel.outlet_id == outlet_id,
                ),
            )
            .where(ProductModel.created_by == owner_id)
            .order_by(ProductModel.created_at, ProductModel.id)
        )
        return [(product, listing) for product, listing in result.all()]

    async def get_listing(self, outlet_id: str, product_id: str) -> OutletProductModel | None:
        result = await self.session.execute(
            select(OutletProductModel).where(
                OutletProductModel.outlet_id == outlet_id,
                OutletProductModel.product_id == product_id,
            )
        )
        return result.scalar_one_or_none()

    async def create_listing(self, listing: OutletProductModel) -> OutletProductModel:
        """Insert an outlet listing.

        Raises:
            IntegrityError: If the product is already on the outlet.
        """
        self.session.add(listing)
        await self.session.flush()
        return listing

    async def delete_listing(self, outlet_id: str, product_id: str) -> bool:
        result = await self.session.execute(
            delete(OutletProductModel).where(
                OutletProductModel.outlet_id == outlet_id,
                OutletProductModel.product_id == product_id,
            )
        )
        await self.session.flush()
        return result.rowcount > 0

    async def list_menu(self, outlet_id: str) -> list[tuple[ProductModel, OutletProductModel]]:
        """Active products available on an outlet, by category (uncategorised last), then name."""
        result = await self.session.execute(
            select(ProductModel, OutletProductModel)
            .join(OutletProductModel, OutletProductModel.product_id == ProductModel.id)
            .where(
                OutletProductModel.outlet_id == outlet_id,
                OutletProductModel.is_available.is_(True),
                ProductModel.is_active.is_(True),
            )
            .order_by(
                ProductModel.category.is_(None),
                ProductModel.category,
                ProductModel.name,
                ProductModel.id,
            )
        )
        return [(product, listing) for product, listing in result.all()]
