"""create products, outlet_products, delivery_agents, orders and order_items tables

Revision ID: 8b2e4f6a1c33
Revises: 3f1c2a9d7e10
Create Date: 2026-03-12 14:05:19.551820

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '8b2e4f6a1c33'
down_revision: str | Sequence[str] | None = '3f1c2a9d7e10'
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "products",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Product ID (UUID)"),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("base_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column(
            "created_by",
            sa.String(length=64),
            nullable=False,
            comment="Foreign key to users table (catalogue owner)",
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
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_created_by", "products", ["created_by"])

    op.create_table(
        "outlet_products",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Listing ID (UUID)"),
        sa.Column("outlet_id", sa.String(length=36), nullable=False),
        sa.Column("product_id", sa.String(length=36), nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("custom_price", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["outlet_id"], ["outlets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("outlet_id", "product_id", name="uq_outlet_products_outlet_product"),
    )
    op.create_index("ix_outlet_products_outlet_id", "outlet_products", ["outlet_id"])
    op.create_index("ix_outlet_products_product_id", "outlet_products", ["product_id"])

    op.create_table(
        "delivery_agents",
        sa.Column(
            "id", sa.String(length=36), nullable=False, comment="Delivery agent ID (UUID)"
        ),
        sa.Column("outlet_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=True,
            comment="Lower-cased sign-in email of the agent",
        ),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_by", sa.String(length=64), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["outlet_id"], ["outlets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_delivery_agents_outlet_id", "delivery_agents", ["outlet_id"])
    op.create_index("ix_delivery_agents_email", "delivery_agents", ["email"])

    op.create_table(
        "orders",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Order ID (UUID)"),
        sa.Column("customer_id", sa.String(length=64), nullable=False),
        sa.Column("outlet_id", sa.String(length=36), nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=32), nullable=False),
        sa.Column("customer_email", sa.String(length=255), nullable=False),
        sa.Column("delivery_address", sa.Text(), nullable=False),
        sa.Column("postal_code", sa.String(length=16), nullable=False),
        sa.Column("total_amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("status", sa.String(length=32), server_default="pending", nullable=False),
        sa.Column("delivery_agent_id", sa.String(length=36), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
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
        sa.ForeignKeyConstraint(["customer_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["outlet_id"], ["outlets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["delivery_agent_id"], ["delivery_agents.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])
    op.create_index("ix_orders_outlet_id", "orders", ["outlet_id"])
    op.create_index("ix_orders_delivery_agent_id", "orders", ["delivery_agent_id"])
    op.create_index("ix_orders_outlet_status", "orders", ["outlet_id", "status"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("order_id", sa.String(length=36), nullable=False),
        sa.Column("product_id", sa.String(length=36), nullable=True),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column(
            "price",
            sa.Numeric(precision=10, scale=2),
            nullable=False,
            comment="Unit price at the time of ordering",
        ),
        sa.Column("line_total", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_order_items_order_id", table_name="order_items")
    op.drop_table("order_items")

    op.drop_index("ix_orders_outlet_status", table_name="orders")
    op.drop_index("ix_orders_delivery_agent_id", table_name="orders")
    op.drop_index("ix_orders_outlet_id", table_name="orders")
    op.drop_index("ix_orders_customer_id", table_name="orders")
    op.drop_table("orders")

    op.drop_index("ix_delivery_agents_email", table_name="delivery_agents")
    op.drop_index("ix_delivery_agents_outlet_id", table_name="delivery_agents")
    op.drop_table("delivery_agents")

    op.drop_index("ix_outlet_products_product_id", table_name="outlet_products")
    op.drop_index("ix_outlet_products_outlet_id", table_name="outlet_products")
    op.drop_table("outlet_products")

    op.drop_index("ix_products_created_by", table_name="products")
    op.drop_table("products")
