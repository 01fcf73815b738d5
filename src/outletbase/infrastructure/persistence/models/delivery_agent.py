"""SQLAlchemy model for the delivery_agents table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, func, true
from sqlalchemy.orm import Mapped, mapped_column

from outletbase.infrastructure.persistence.database import Base
from outletbase.infrastructure.persistence.models._common import utc_now


class DeliveryAgentModel(Base):
    """A rider attached to one outlet.

    Agents are not users of their own; a signed-in user whose email
    matches an agent row sees the orders assigned to it.
    """

    __tablename__ = "delivery_agents"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Delivery agent ID (UUID)",
    )
    outlet_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("outlets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment="Lower-cased sign-in email of the agent",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )
    created_by: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<DeliveryAgent(id={self.id}, outlet_id={self.outlet_id}, name={self.name})>"
