"""create catalog tables

Revision ID: 20241222_catalog
Revises:
Create Date: 2024-12-22
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20241222_catalog"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
	op.create_table(
		"categories",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("name", sa.String(128), nullable=False, unique=True),
	)
	op.create_table(
		"products",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("name", sa.String(255), nullable=False),
		sa.Column("description", sa.Text(), nullable=True),
		sa.Column("price", sa.Numeric(10, 2), nullable=False),
		sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
		sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
	)
	op.create_table(
		"product_details",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("specifications", sa.Text(), nullable=True),
		sa.Column("manufacturer", sa.String(255), nullable=True),
		sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False, unique=True),
	)


def downgrade() -> None:
	op.drop_table("product_details")
	op.drop_table("products")
	op.drop_table("categories")
