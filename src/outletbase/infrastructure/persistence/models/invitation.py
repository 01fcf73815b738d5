"""SQLAlchemy model for the invitations table.

Invitations let an outlet owner grant an administrative role to an email
address.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, false, func
from sqlalchemy.orm import Mapped, mapped_column

from outletbase.infrastructure.persistence.database import Base
from outletbase.infrastructure.persistence.models._common import utc_now


class InvitationModel(Base):
    """SQLAlchemy model for the invitations table.

    Attributes:
        id: Primary key (UUID string).
        email: Email address of the invited user.
        outlet_id: Foreign key to outlets table.
        invited_by: Foreign key to users table (inviter).
        role: Role granted on acceptance.
        token: Single-use random token for accepting the invitation.
        status: ``pending`` or ``accepted``.
        expires_at: Timestamp when the invitation expires.
        accepted_at: Timestamp when the invitation was accepted.
        email_sent: Whether the invitation email was delivered.
        email_sent_at: Timestamp of the last successful delivery.
    """

    __tablename__ = "invitations"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Invitation ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Email address of the invited user",
    )
    outlet_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("outlets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to outlets table",
    )
    invited_by: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
        comment="Foreign key to users table (inviter)",
    )
    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="admin",
        server_default="admin",
    )
    token: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="Single-use random token for accepting the invitation",
    )
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="pending",
        server_default="pending",
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Timestamp when the invitation expires",
    )
    accepted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    email_sent: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    email_sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_invitations_outlet_status", "outlet_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Invitation(id={self.id}, email={self.email}, outlet_id={self.outlet_id})>"
