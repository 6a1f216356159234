from decimal import Decimal
from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.session import Base


class Category(Base):
	__tablename__ = "categories"

	id: Mapped[int] = mapped_column(primary_key=True)
	name: Mapped[str] = mapped_column(String(128), unique=True)

	# Relationships
	products: Mapped[list["Product"]] = relationship("Product", back_populates="category")


class Product(Base):
	__tablename__ = "products"

	id: Mapped[int] = mapped_column(primary_key=True)
	name: Mapped[str] = mapped_column(String(255))
	description: Mapped[str | None] = mapped_column(Text(), nullable=True)
	price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
	stock: Mapped[int] = mapped_column(default=0)
	# nullable in storage: deleting a category detaches its products
	category_id: Mapped[int | None] = mapped_column(ForeignKey("categories.id"), nullable=True)

	# Relationships
	category: Mapped["Category | None"] = relationship("Category", back_populates="products")
	details: Mapped["ProductDetail | None"] = relationship(
		"ProductDetail",
		back_populates="product",
		uselist=False,
		cascade="all, delete-orphan",
		passive_deletes=True,
	)


class ProductDetail(Base):
	__tablename__ = "product_details"

	id: Mapped[int] = mapped_column(primary_key=True)
	specifications: Mapped[str | None] = mapped_column(Text(), nullable=True)
	manufacturer: Mapped[str | None] = mapped_column(String(255), nullable=True)
	product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), unique=True)

	product: Mapped[Product] = relationship("Product", back_populates="details")
