"""SQLAlchemy model for the outlet_admins table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from outletbase.infrastructure.persistence.database import Base
from outletbase.infrastructure.persistence.models._common import utc_now


class OutletAdminModel(Base):
    """Administrative grant of a user on an outlet.

    Distinct from ownership: owners have full rights without a row here.
    At most one row exists per (outlet, user).
    """

    __tablename__ = "outlet_admins"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Grant ID (UUID)",
    )
    outlet_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("outlets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="admin",
        server_default="admin",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("outlet_id", "user_id", name="uq_outlet_admins_outlet_user"),
    )

    def __repr__(self) -> str:
        return f"<OutletAdmin(outlet_id={self.outlet_id}, user_id={self.user_id}, role={self.role})>"
