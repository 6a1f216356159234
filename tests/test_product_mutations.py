from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.errors import NotFoundError, ValidationError
from app.models.product import Product, ProductDetail
from app.services.categories import create_category
from app.services.products import (
	create_product,
	delete_product,
	get_product,
	set_product_details,
	update_product,
)


async def _count(session, model) -> int:
	return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def test_create_stores_exactly_the_validated_input(session, category):
	created = await create_product(session, {
		"name": "Speaker",
		"description": "Portable",
		"price": "49.99",
		"stock": 10,
		"category_id": category.id,
	})

	fetched = await get_product(session, created.id)

	assert fetched == created
	assert (fetched.name, fetched.description, fetched.price, fetched.stock) == ("Speaker", "Portable", Decimal("49.99"), 10)
	assert fetched.category_id == category.id
	assert fetched.category_name == "Electronics"


async def test_create_accepts_float_price(session, category):
	created = await create_product(session, {"name": "Mug", "price": 12.3, "stock": 0, "category_id": category.id})

	assert created.price == Decimal("12.3")


async def test_create_reports_every_missing_field(session):
	with pytest.raises(ValidationError) as exc_info:
		await create_product(session, {})

	assert set(exc_info.value.errors) == {"name", "price", "stock", "category_id"}
	assert exc_info.value.errors["name"] == "The name field is required."
	assert await _count(session, Product) == 0


async def test_create_rejects_out_of_range_values(session, category):
	with pytest.raises(ValidationError) as exc_info:
		await create_product(session, {
			"name": "x" * 256,
			"price": "-1",
			"stock": -5,
			"category_id": category.id,
		})

	errors = exc_info.value.errors
	assert errors["name"] == "The name field must not be greater than 255 characters."
	assert errors["price"] == "The price field must be at least 0."
	assert errors["stock"] == "The stock field must be at least 0."
	assert "category_id" not in errors


async def test_create_rejects_unknown_category_alongside_field_errors(session):
	with pytest.raises(ValidationError) as exc_info:
		await create_product(session, {"name": "", "price": "1", "stock": 1, "category_id": 999})

	assert exc_info.value.errors == {
		"name": "The name field is required.",
		"category_id": "The selected category id is invalid.",
	}
	assert await _count(session, Product) == 0


@pytest.mark.parametrize("price", ["1.999", "abc", "123456789.00"])
async def test_create_rejects_malformed_price(session, category, price):
	with pytest.raises(ValidationError) as exc_info:
		await create_product(session, {"name": "Mug", "price": price, "stock": 1, "category_id": category.id})

	assert "price" in exc_info.value.errors


async def test_create_rejects_fractional_stock(session, category):
	with pytest.raises(ValidationError) as exc_info:
		await create_product(session, {"name": "Mug", "price": "1", "stock": 1.5, "category_id": category.id})

	assert exc_info.value.errors["stock"] == "The stock field must be an integer."


async def test_blank_description_is_stored_as_none(make_product):
	product = await make_product(description="   ")

	assert product.description is None


async def test_partial_update_leaves_omitted_fields_alone(session, make_product):
	product = await make_product(name="Speaker", description="Loud", stock=10)

	updated = await update_product(session, product.id, {"stock": 5})

	assert updated.stock == 5
	assert updated.name == "Speaker"
	assert updated.description == "Loud"
	assert updated.price == product.price
	assert updated.category_id == product.category_id


async def test_update_every_field(session, make_product):
	product = await make_product()
	other = await create_category(session, {"name": "Audio"})

	updated = await update_product(session, product.id, {
		"name": "Big Speaker",
		"description": "Louder",
		"price": "59.00",
		"stock": "7",
		"category_id": other.id,
	})

	assert (updated.name, updated.description, updated.price, updated.stock) == ("Big Speaker", "Louder", Decimal("59.00"), 7)
	assert updated.category_name == "Audio"


async def test_update_rejects_null_for_required_fields(session, make_product):
	product = await make_product()

	with pytest.raises(ValidationError) as exc_info:
		await update_product(session, product.id, {"name": None, "price": None})

	assert exc_info.value.errors == {
		"name": "The name field is required.",
		"price": "The price field is required.",
	}
	assert (await get_product(session, product.id)).name == "Speaker"


async def test_update_null_description_clears_it(session, make_product):
	product = await make_product(description="Loud")

	updated = await update_product(session, product.id, {"description": None})

	assert updated.description is None


async def test_failed_update_writes_nothing(session, make_product):
	product = await make_product(stock=10)

	with pytest.raises(ValidationError):
		await update_product(session, product.id, {"stock": 3, "price": "-2"})

	assert (await get_product(session, product.id)).stock == 10


async def test_update_rejects_unknown_category(session, make_product):
	product = await make_product()

	with pytest.raises(ValidationError) as exc_info:
		await update_product(session, product.id, {"category_id": 404})

	assert exc_info.value.errors == {"category_id": "The selected category id is invalid."}


async def test_update_unknown_product_is_not_found(session):
	with pytest.raises(NotFoundError):
		await update_product(session, 12345, {"stock": 1})


async def test_delete_by_id_cascades_to_details(session, make_product):
	product = await make_product()
	await set_product_details(session, product.id, {"specifications": "40W", "manufacturer": "Acme"})
	assert await _count(session, ProductDetail) == 1

	await delete_product(session, product.id)

	assert await _count(session, ProductDetail) == 0
	with pytest.raises(NotFoundError):
		await get_product(session, product.id)


async def test_delete_accepts_loaded_instance(session, make_product):
	product = await make_product()
	instance = await session.get(Product, product.id)

	await delete_product(session, instance)

	with pytest.raises(NotFoundError):
		await get_product(session, product.id)


async def test_delete_through_stale_handle_is_not_found(session_factory, make_product):
	product = await make_product()
	async with session_factory() as first:
		handle = await first.get(Product, product.id)
	async with session_factory() as second:
		await delete_product(second, product.id)

	async with session_factory() as third:
		with pytest.raises(NotFoundError):
			await delete_product(third, handle)


async def test_delete_unknown_product_changes_nothing(session, make_product):
	await make_product()

	with pytest.raises(NotFoundError):
		await delete_product(session, 999)

	assert await _count(session, Product) == 1


async def test_details_are_upserted_one_per_product(session, make_product):
	product = await make_product()

	await set_product_details(session, product.id, {"specifications": "40W", "manufacturer": "Acme"})
	updated = await set_product_details(session, product.id, {"specifications": "60W", "manufacturer": ""})

	assert await _count(session, ProductDetail) == 1
	assert updated.specifications == "60W"
	assert updated.manufacturer is None


async def test_details_for_unknown_product_is_not_found(session):
	with pytest.raises(NotFoundError):
		await set_product_details(session, 1, {"manufacturer": "Acme"})


async def test_speaker_lifecycle(session):
	category = await create_category(session, {"name": "Electronics"})
	assert category.id == 1

	product = await create_product(session, {"name": "Speaker", "price": 49.99, "stock": 10, "category_id": 1})
	assert product.id == 1

	await update_product(session, 1, {"stock": 5})
	fetched = await get_product(session, 1)
	assert fetched.name == "Speaker"
	assert fetched.stock == 5

	await delete_product(session, 1)
	with pytest.raises(NotFoundError):
		await get_product(session, 1)
