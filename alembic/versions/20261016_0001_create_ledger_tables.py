"""create data_sets, products and daily_records tables

Revision ID: 20261016_0001
Revises:
Create Date: 2026-10-16 09:30:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261016_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "data_sets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_data_sets"),
    )
    op.create_index("ix_data_sets_name", "data_sets", ["name"], unique=False)
    op.create_index("ix_data_sets_created_at", "data_sets", ["created_at"], unique=False)

    op.create_table(
        "products",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("data_set_id", sa.Integer(), nullable=False),
        sa.Column("external_id", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["data_set_id"],
            ["data_sets.id"],
            name="fk_products_data_set_id_data_sets",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_products"),
        sa.UniqueConstraint("data_set_id", "name", name="uq_products_data_set_name"),
    )
    op.create_index("ix_products_data_set_id", "products", ["data_set_id"], unique=False)

    op.create_table(
        "daily_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_id", sa.Text(), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("inventory", sa.BigInteger(), nullable=False),
        sa.Column("procurement_quantity", sa.Integer(), nullable=False),
        sa.Column("procurement_price", sa.Float(), nullable=False),
        sa.Column("procurement_amount", sa.Float(), nullable=False),
        sa.Column("sales_quantity", sa.Integer(), nullable=False),
        sa.Column("sales_price", sa.Float(), nullable=False),
        sa.Column("sales_amount", sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(
            ["product_id"],
            ["products.id"],
            name="fk_daily_records_product_id_products",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_daily_records"),
        sa.UniqueConstraint("product_id", "day", name="uq_daily_records_product_day"),
    )


def downgrade() -> None:
    op.drop_table("daily_records")
    op.drop_index("ix_products_data_set_id", table_name="products")
    op.drop_table("products")
    op.drop_index("ix_data_sets_created_at", table_name="data_sets")
    op.drop_index("ix_data_sets_name", table_name="data_sets")
    op.drop_table("data_sets")
