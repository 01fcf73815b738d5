"""SQLAlchemy model for the outlets table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, String, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from outletbase.infrastructure.persistence.database import Base
from outletbase.infrastructure.persistence.models._common import utc_now


class OutletModel(Base):
    """A physical outlet that delivers within a radius.

    An outlet without coordinates can only be matched by exact postal
    code. Outlets are deactivated with ``is_active`` rather than deleted;
    explicit deletion cascades to admins and invitations.

    Attributes:
        id: Primary key (UUID string).
        name: Display name.
        address: Free-text street address.
        postal_code: Postal code (6 digits by default).
        phone: Optional contact number.
        latitude: Geocoded or explicit latitude.
        longitude: Geocoded or explicit longitude.
        delivery_radius_km: Maximum delivery distance in kilometres.
        owner_id: Foreign key to users table.
        is_active: Whether the outlet is open for orders.
    """

    __tablename__ = "outlets"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Outlet ID (UUID)",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    postal_code: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        index=True,
    )
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    delivery_radius_km: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=10.0,
        server_default="10",
        comment="Delivery radius in kilometres",
    )
    owner_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Foreign key to users table (owner)",
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

    __table_args__ = (
        Index("ix_outlets_active_postal_code", "is_active", "postal_code"),
    )

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def __repr__(self) -> str:
        return f"<Outlet(id={self.id}, name={self.name}, postal_code={self.postal_code})>"
