"""SQLAlchemy models for the orders and order_items tables."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from outletbase.infrastructure.persistence.database import Base
from outletbase.infrastructure.persistence.models._common import utc_now


class OrderModel(Base):
    """A customer order placed with one outlet.

    Attributes:
        id: Primary key (UUID string).
        customer_id: Foreign key to users table (who placed it).
        outlet_id: Foreign key to outlets table.
        customer_name: Name to deliver to.
        customer_phone: Contact number for the rider.
        customer_email: Receipt address.
        delivery_address: Free-text delivery address.
        postal_code: Postal code of the delivery address.
        total_amount: Sum of the line totals.
        status: One of the order statuses, ``pending`` on creation.
        delivery_agent_id: Assigned rider, if any.
        notes: Optional instructions from the customer.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Order ID (UUID)",
    )
    customer_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    outlet_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("outlets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_address: Mapped[str] = mapped_column(Text, nullable=False)
    postal_code: Mapped[str] = mapped_column(String(16), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="pending",
        server_default="pending",
    )
    delivery_agent_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("delivery_agents.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
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

    __table_args__ = (
        Index("ix_orders_outlet_status", "outlet_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, outlet_id={self.outlet_id}, status={self.status})>"


class OrderItemModel(Base):
    """One line of an order.

    Name and price are copied from the menu when the order is placed so
    later catalogue edits do not rewrite history.
    """

    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    order_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
    )
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Unit price at the time of ordering",
    )
    line_total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<OrderItem(order_id={self.order_id}, product={self.product_name}, "
            f"quantity={self.quantity})>"
        )
