"""SQLAlchemy model for the users table.

Users authenticate with the external auth provider. This table mirrors
the identity claims so outlets and admin grants can reference users and
admin listings can show names and emails.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from outletbase.infrastructure.persistence.database import Base
from outletbase.infrastructure.persistence.models._common import utc_now


class UserModel(Base):
    """Mirror of an auth-provider identity.

    Attributes:
        id: Identifier assigned by the auth provider.
        email: Email address from the token claims.
        name: Optional display name.
        created_at: When the identity was first seen.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="User ID from the auth provider",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
