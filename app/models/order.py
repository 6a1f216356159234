from datetime import datetime
from decimal import Decimal
from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.session import Base


class Order(Base):
	__tablename__ = "orders"

	id: Mapped[int] = mapped_column(primary_key=True)
	customer_name: Mapped[str] = mapped_column(String(255))
	total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2))
	created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

	items: Mapped[list["OrderItem"]] = relationship(back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id")


class OrderItem(Base):
	__tablename__ = "order_items"

	id: Mapped[int] = mapped_column(primary_key=True)
	order_id: Mapped[int] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"))
	product_id: Mapped[int] = mapped_column(ForeignKey("products.id"))
	quantity: Mapped[int]
	# product price at the moment the order was placed
	price: Mapped[Decimal] = mapped_column(Numeric(10, 2))

	order: Mapped[Order] = relationship(back_populates="items")
