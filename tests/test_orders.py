from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.errors import NotFoundError, ValidationError
from app.services.orders import create_order, get_order, list_orders
from app.services.products import delete_product, update_product


async def test_order_snapshots_prices_and_totals(session, make_product):
	speaker = await make_product(name="Speaker", price="49.99")
	cable = await make_product(name="Cable", price="5.00")

	order = await create_order(session, {
		"customer_name": "Ada",
		"items": [
			{"product_id": speaker.id, "quantity": 2},
			{"product_id": cable.id, "quantity": 3},
		],
	})

	assert order.total_amount == Decimal("114.98")
	assert [(i.product_id, i.quantity, i.price) for i in order.items] == [
		(speaker.id, 2, Decimal("49.99")),
		(cable.id, 3, Decimal("5.00")),
	]


async def test_later_price_change_does_not_touch_order(session, make_product):
	speaker = await make_product(price="49.99")
	order = await create_order(session, {"customer_name": "Ada", "items": [{"product_id": speaker.id}]})

	await update_product(session, speaker.id, {"price": "10"})

	fetched = await get_order(session, order.id)
	assert fetched.items[0].price == Decimal("49.99")
	assert fetched.total_amount == Decimal("49.99")


async def test_order_validation(session, make_product):
	speaker = await make_product()

	with pytest.raises(ValidationError) as exc_info:
		await create_order(session, {"customer_name": "", "items": []})
	assert set(exc_info.value.errors) == {"customer_name", "items"}

	with pytest.raises(ValidationError) as exc_info:
		await create_order(session, {
			"customer_name": "Ada",
			"items": [{"product_id": speaker.id, "quantity": 0}, {"product_id": 999}],
		})
	assert "items.0.quantity" in exc_info.value.errors

	with pytest.raises(ValidationError) as exc_info:
		await create_order(session, {"customer_name": "Ada", "items": [{"product_id": speaker.id}, {"product_id": 999}]})
	assert exc_info.value.errors == {"items.1.product_id": "The selected product id is invalid."}


async def test_unknown_order(session):
	with pytest.raises(NotFoundError):
		await get_order(session, 1)


async def test_list_orders_newest_first(session, make_product):
	speaker = await make_product()
	first = await create_order(session, {"customer_name": "Ada", "items": [{"product_id": speaker.id}]})
	second = await create_order(session, {"customer_name": "Bob", "items": [{"product_id": speaker.id}]})

	assert [o.id for o in await list_orders(session)] == [second.id, first.id]


async def test_list_orders_rejects_page_past_the_largest_offset(session):
	with pytest.raises(ValidationError) as exc_info:
		await list_orders(session, page=10**19)

	assert "page" in exc_info.value.errors


async def test_ordered_product_cannot_be_deleted(session, make_product):
	speaker = await make_product()
	await create_order(session, {"customer_name": "Ada", "items": [{"product_id": speaker.id}]})

	with pytest.raises(IntegrityError):
		await delete_product(session, speaker.id)
	await session.rollback()
