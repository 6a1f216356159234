from typing import Any, Mapping, TypeVar

from loguru import logger
from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import NotFoundError, SortColumnError, ValidationError
from app.models.product import Category, Product, ProductDetail
from app.schemas.product import ProductCreate, ProductDetailsIn, ProductPage, ProductRecord, ProductUpdate
from app.schemas.validation import parse_input


SORT_COLUMNS = {
	"id": Product.id,
	"name": Product.name,
	"price": Product.price,
	"stock": Product.stock,
}
SORT_ORDERS = ("asc", "desc")

PayloadT = TypeVar("PayloadT", ProductCreate, ProductUpdate)

# largest OFFSET a 64-bit signed driver parameter can carry
MAX_OFFSET = 2**63 - 1


def _escape_like(text: str) -> str:
	return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _joined_select() -> Select:
	return (
		select(
			Product,
			Category.name.label("category_name"),
			ProductDetail.specifications,
			ProductDetail.manufacturer,
		)
		.outerjoin(Category, Product.category_id == Category.id)
		.outerjoin(ProductDetail, ProductDetail.product_id == Product.id)
	)


def _to_record(row: Any) -> ProductRecord:
	product, category_name, specifications, manufacturer = row
	return ProductRecord(
		id=product.id,
		name=product.name,
		description=product.description,
		price=product.price,
		stock=product.stock,
		category_id=product.category_id,
		category_name=category_name,
		specifications=specifications,
		manufacturer=manufacturer,
	)


def _search_filter(query: str):
	pattern = f"%{_escape_like(query)}%"
	return or_(
		Product.name.ilike(pattern, escape="\\"),
		Product.description.ilike(pattern, escape="\\"),
	)


async def list_products(
	session: AsyncSession,
	column: str = "id",
	order: str = "asc",
	query: str | None = None,
	page: int = 1,
	page_size: int | None = None,
) -> ProductPage:
	"""Return one page of products joined with category and details.

	An empty or missing ``query`` lists everything. ``column`` is checked
	against SORT_COLUMNS before it gets anywhere near the ORDER BY clause.
	"""
	sort_attr = SORT_COLUMNS.get(column)
	if sort_attr is None:
		raise SortColumnError(column, tuple(SORT_COLUMNS))
	order = (order or "asc").lower()
	if order not in SORT_ORDERS:
		raise ValidationError({"order": "The order field must be one of: asc, desc."})
	page_size = settings.page_size if page_size is None else page_size
	errors: dict[str, str] = {}
	if page < 1:
		errors["page"] = "The page field must be at least 1."
	if page_size < 1:
		errors["page_size"] = "The page size field must be at least 1."
	if not errors and (page - 1) * page_size > MAX_OFFSET:
		errors["page"] = "The page field is too large."
	if errors:
		raise ValidationError(errors)

	stmt = _joined_select()
	count_stmt = select(func.count()).select_from(Product)
	query = (query or "").strip()
	if query:
		stmt = stmt.where(_search_filter(query))
		count_stmt = count_stmt.where(_search_filter(query))

	direction = sort_attr.desc() if order == "desc" else sort_attr.asc()
	stmt = stmt.order_by(direction, Product.id.asc()).offset((page - 1) * page_size).limit(page_size)

	total = (await session.execute(count_stmt)).scalar_one()
	rows = (await session.execute(stmt)).all()
	return ProductPage(items=[_to_record(r) for r in rows], total=total, page=page, page_size=page_size)


async def get_product(session: AsyncSession, product_id: int) -> ProductRecord:
	res = await session.execute(_joined_select().where(Product.id == product_id))
	row = res.first()
	if row is None:
		raise NotFoundError("Product", product_id)
	return _to_record(row)


async def _category_exists(session: AsyncSession, category_id: int) -> bool:
	res = await session.execute(select(Category.id).where(Category.id == category_id))
	return res.scalar_one_or_none() is not None


def _raw_category_id(data: Any) -> int | None:
	if not isinstance(data, Mapping):
		return None
	try:
		return int(data["category_id"])
	except (KeyError, TypeError, ValueError):
		return None


async def _parse_product(session: AsyncSession, model: type[PayloadT], data: Any) -> PayloadT:
	"""Validate field constraints and the category reference together.

	All problems are reported in one ValidationError so the caller sees every
	failing field at once.
	"""
	try:
		payload = parse_input(model, data)
	except ValidationError as exc:
		errors = dict(exc.errors)
		if "category_id" not in errors:
			category_id = _raw_category_id(data)
			if category_id is not None and not await _category_exists(session, category_id):
				errors["category_id"] = "The selected category id is invalid."
		raise ValidationError(errors) from exc
	category_id = payload.model_dump(exclude_unset=True).get("category_id")
	if category_id is not None and not await _category_exists(session, category_id):
		raise ValidationError({"category_id": "The selected category id is invalid."})
	return payload


async def create_product(session: AsyncSession, data: Mapping[str, Any]) -> ProductRecord:
	payload = await _parse_product(session, ProductCreate, data)
	product = Product(**payload.model_dump())
	session.add(product)
	await session.commit()
	logger.info("Product {} created: {}", product.id, product.name)
	return await get_product(session, product.id)


async def update_product(session: AsyncSession, product_id: int, data: Mapping[str, Any]) -> ProductRecord:
	product = await session.get(Product, product_id)
	if product is None:
		raise NotFoundError("Product", product_id)
	changes = (await _parse_product(session, ProductUpdate, data)).changes()
	for field, value in changes.items():
		setattr(product, field, value)
	await session.commit()
	logger.info("Product {} updated: {}", product_id, ", ".join(changes) or "no changes")
	return await get_product(session, product_id)


async def delete_product(session: AsyncSession, product: Product | int) -> None:
	"""Delete a product given either its id or the loaded instance.

	The product's detail row goes with it through ON DELETE CASCADE.
	"""
	product_id = product.id if isinstance(product, Product) else product
	# handles are re-read so a row deleted elsewhere is reported as missing
	current = await session.get(Product, product_id, populate_existing=True)
	if current is None:
		raise NotFoundError("Product", product_id)
	await session.delete(current)
	await session.commit()
	logger.info("Product {} deleted", product_id)


async def set_product_details(session: AsyncSession, product_id: int, data: Mapping[str, Any]) -> ProductRecord:
	product = await session.get(Product, product_id)
	if product is None:
		raise NotFoundError("Product", product_id)
	payload = parse_input(ProductDetailsIn, data)
	res = await session.execute(select(ProductDetail).where(ProductDetail.product_id == product_id))
	detail = res.scalars().first()
	if detail is None:
		detail = ProductDetail(product_id=product_id)
		session.add(detail)
	detail.specifications = payload.specifications
	detail.manufacturer = payload.manufacturer
	await session.commit()
	logger.info("Product {} details saved", product_id)
	return await get_product(session, product_id)
