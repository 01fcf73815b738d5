"""SQLAlchemy models for the products and outlet_products tables."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from outletbase.infrastructure.persistence.database import Base
from outletbase.infrastructure.persistence.models._common import utc_now


class ProductModel(Base):
    """A catalogue entry owned by the user who created it.

    Products are listed on an outlet through ``outlet_products``; the
    catalogue row carries the default price.

    Attributes:
        id: Primary key (UUID string).
        name: Display name.
        description: Optional long description.
        base_price: Default price, two decimal places.
        category: Optional menu grouping.
        image_url: Picture shown on the menu.
        created_by: Foreign key to users table (catalogue owner).
        is_active: Inactive products are hidden from every menu.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Product ID (UUID)",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Foreign key to users table (catalogue owner)",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name}, base_price={self.base_price})>"


class OutletProductModel(Base):
    """Listing of a product on one outlet's menu.

    ``custom_price`` overrides the catalogue price when set. At most one
    row exists per (outlet, product).
    """

    __tablename__ = "outlet_products"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Listing ID (UUID)",
    )
    outlet_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("outlets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )
    custom_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("outlet_id", "product_id", name="uq_outlet_products_outlet_product"),
    )

    def __repr__(self) -> str:
        return (
            f"<OutletProduct(outlet_id={self.outlet_id}, product_id={self.product_id}, "
            f"is_available={self.is_available})>"
        )
