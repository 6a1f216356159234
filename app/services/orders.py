from decimal import Decimal
from typing import Any, Mapping

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import NotFoundError, ValidationError
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.schemas.order import OrderCreate, OrderRecord
from app.schemas.validation import parse_input
from app.services.products import MAX_OFFSET


async def create_order(session: AsyncSession, data: Mapping[str, Any]) -> OrderRecord:
	"""Create an order with its items.

	Each item copies the product's current price, and the order total is the
	sum of those snapshots.
	"""
	payload = parse_input(OrderCreate, data)
	product_ids = {item.product_id for item in payload.items}
	res = await session.execute(select(Product).where(Product.id.in_(product_ids)))
	products = {p.id: p for p in res.scalars().all()}

	errors = {
		f"items.{n}.product_id": "The selected product id is invalid."
		for n, item in enumerate(payload.items)
		if item.product_id not in products
	}
	if errors:
		raise ValidationError(errors)

	order = Order(customer_name=payload.customer_name, total_amount=Decimal("0"))
	total = Decimal("0")
	for item in payload.items:
		price = Decimal(products[item.product_id].price)
		order.items.append(OrderItem(product_id=item.product_id, quantity=item.quantity, price=price))
		total += price * item.quantity
	order.total_amount = total
	session.add(order)
	await session.commit()
	logger.info("Order {} created for {}: {} item(s), total {}", order.id, order.customer_name, len(order.items), total)
	return await get_order(session, order.id)


async def get_order(session: AsyncSession, order_id: int) -> OrderRecord:
	res = await session.execute(
		select(Order).where(Order.id == order_id).options(selectinload(Order.items)).execution_options(populate_existing=True)
	)
	order = res.scalars().first()
	if order is None:
		raise NotFoundError("Order", order_id)
	return OrderRecord.model_validate(order)


async def list_orders(session: AsyncSession, page: int = 1, page_size: int = 10) -> list[OrderRecord]:
	if page < 1:
		raise ValidationError({"page": "The page field must be at least 1."})
	if (page - 1) * page_size > MAX_OFFSET:
		raise ValidationError({"page": "The page field is too large."})
	res = await session.execute(
		select(Order)
		.options(selectinload(Order.items))
		.order_by(Order.created_at.desc(), Order.id.desc())
		.offset((page - 1) * page_size)
		.limit(page_size)
	)
	return [OrderRecord.model_validate(o) for o in res.scalars().all()]
