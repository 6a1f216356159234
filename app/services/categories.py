from typing import Any, Mapping

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.models.product import Category, Product
from app.schemas.category import CategoryIn, CategoryRecord
from app.schemas.validation import parse_input


async def list_categories(session: AsyncSession) -> list[CategoryRecord]:
	result = await session.execute(select(Category).order_by(Category.name))
	return [CategoryRecord.model_validate(c) for c in result.scalars().all()]


async def _ensure_unique_name(session: AsyncSession, name: str, exclude_id: int | None = None) -> None:
	stmt = select(Category.id).where(Category.name == name)
	if exclude_id is not None:
		stmt = stmt.where(Category.id != exclude_id)
	existing = await session.execute(stmt)
	if existing.scalars().first() is not None:
		raise ValidationError({"name": "The name has already been taken."})


async def create_category(session: AsyncSession, data: Mapping[str, Any]) -> CategoryRecord:
	payload = parse_input(CategoryIn, data)
	await _ensure_unique_name(session, payload.name)
	category = Category(name=payload.name)
	session.add(category)
	await session.commit()
	logger.info("Category {} created: {}", category.id, category.name)
	return CategoryRecord.model_validate(category)


async def rename_category(session: AsyncSession, category_id: int, data: Mapping[str, Any]) -> CategoryRecord:
	category = await session.get(Category, category_id)
	if category is None:
		raise NotFoundError("Category", category_id)
	payload = parse_input(CategoryIn, data)
	await _ensure_unique_name(session, payload.name, exclude_id=category_id)
	category.name = payload.name
	await session.commit()
	logger.info("Category {} renamed to {}", category_id, payload.name)
	return CategoryRecord.model_validate(category)


async def delete_category(session: AsyncSession, category_id: int) -> None:
	"""Delete a category; its products stay, with no category."""
	category = await session.get(Category, category_id)
	if category is None:
		raise NotFoundError("Category", category_id)
	# detach products
	await session.execute(update(Product).where(Product.category_id == category_id).values(category_id=None))
	await session.delete(category)
	await session.commit()
	logger.info("Category {} deleted", category_id)
