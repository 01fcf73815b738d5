"""create users, outlets, outlet_admins and invitations tables

Revision ID: 3f1c2a9d7e10
Revises:
Create Date: 2026-03-01 10:12:41.204117

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7e10'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), nullable=False, comment="User ID from the auth provider"),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "outlets",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Outlet ID (UUID)"),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("postal_code", sa.String(length=16), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column(
            "delivery_radius_km",
            sa.Float(),
            server_default="10",
            nullable=False,
            comment="Delivery radius in kilometres",
        ),
        sa.Column(
            "owner_id",
            sa.String(length=64),
            nullable=False,
            comment="Foreign key to users table (owner)",
        ),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_outlets_postal_code", "outlets", ["postal_code"])
    op.create_index("ix_outlets_owner_id", "outlets", ["owner_id"])
    op.create_index("ix_outlets_active_postal_code", "outlets", ["is_active", "postal_code"])

    op.create_table(
        "outlet_admins",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Grant ID (UUID)"),
        sa.Column("outlet_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("role", sa.String(length=32), server_default="admin", nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["outlet_id"], ["outlets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("outlet_id", "user_id", name="uq_outlet_admins_outlet_user"),
    )
    op.create_index("ix_outlet_admins_outlet_id", "outlet_admins", ["outlet_id"])
    op.create_index("ix_outlet_admins_user_id", "outlet_admins", ["user_id"])

    op.create_table(
        "invitations",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Invitation ID (UUID)"),
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="Email address of the invited user",
        ),
        sa.Column(
            "outlet_id",
            sa.String(length=36),
            nullable=False,
            comment="Foreign key to outlets table",
        ),
        sa.Column(
            "invited_by",
            sa.String(length=64),
            nullable=False,
            comment="Foreign key to users table (inviter)",
        ),
        sa.Column("role", sa.String(length=32), server_default="admin", nullable=False),
        sa.Column(
            "token",
            sa.String(length=64),
            nullable=False,
            comment="Single-use random token for accepting the invitation",
        ),
        sa.Column("status", sa.String(length=16), server_default="pending", nullable=False),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Timestamp when the invitation expires",
        ),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_sent", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("email_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["outlet_id"], ["outlets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invited_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_invitations_email", "invitations", ["email"])
    op.create_index("ix_invitations_outlet_id", "invitations", ["outlet_id"])
    op.create_index("ix_invitations_token", "invitations", ["token"], unique=True)
    op.create_index("ix_invitations_outlet_status", "invitations", ["outlet_id", "status"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_invitations_outlet_status", table_name="invitations")
    op.drop_index("ix_invitations_token", table_name="invitations")
    op.drop_index("ix_invitations_outlet_id", table_name="invitations")
    op.drop_index("ix_invitations_email", table_name="invitations")
    op.drop_table("invitations")

    op.drop_index("ix_outlet_admins_user_id", table_name="outlet_admins")
    op.drop_index("ix_outlet_admins_outlet_id", table_name="outlet_admins")
    op.drop_table("outlet_admins")

    op.drop_index("ix_outlets_active_postal_code", table_name="outlets")
    op.drop_index("ix_outlets_owner_id", table_name="outlets")
    op.drop_index("ix_outlets_postal_code", table_name="outlets")
    op.drop_table("outlets")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
