"""create orders and order items

Revision ID: 20241222_orders
Revises: 20241222_catalog
Create Date: 2024-12-22
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20241222_orders"
down_revision = "20241222_catalog"
branch_labels = None
depends_on = None


def upgrade() -> None:
	op.create_table(
		"orders",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("customer_name", sa.String(255), nullable=False),
		sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
		sa.Column("created_at", sa.DateTime(), nullable=False),
	)
	op.create_table(
		"order_items",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
		sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
		sa.Column("quantity", sa.Integer(), nullable=False),
		sa.Column("price", sa.Numeric(10, 2), nullable=False),
	)


def downgrade() -> None:
	op.drop_table("order_items")
	op.drop_table("orders")
