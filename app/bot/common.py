from html import escape

from aiogram.exceptions import TelegramBadRequest
from aiogram.types import CallbackQuery

from app.core.config import settings
from app.core.errors import ValidationError
from app.schemas.product import ProductPage, ProductRecord


async def safe_edit(callback: CallbackQuery, text: str, reply_markup=None) -> None:
	try:
		await callback.message.edit_text(text, reply_markup=reply_markup)
	except TelegramBadRequest:
		await callback.message.answer(text, reply_markup=reply_markup)


async def safe_answer(callback: CallbackQuery, text: str | None = None, show_alert: bool = False) -> None:
	"""Safely call callback.answer() with error handling for old queries."""
	try:
		await callback.answer(text, show_alert=show_alert)
	except TelegramBadRequest:
		pass  # Ignore old query errors


def is_admin(user_id: int | None) -> bool:
	if user_id is None:
		return False
	return user_id in settings.admin_id_set()


def callback_int(data: str | None, index: int = -1) -> int | None:
	"""Return the numeric part of callback data, or None if it was tampered with."""
	parts = (data or "").split(":")
	try:
		value = parts[index]
	except IndexError:
		return None
	return int(value) if value.isdigit() else None


def na(value: object) -> str:
	return "N/A" if value is None else escape(str(value))


def format_errors(exc: ValidationError) -> str:
	lines = ["Please fix the following:"]
	lines.extend(f"• {escape(field)}: {escape(reason)}" for field, reason in exc.errors.items())
	return "\n".join(lines)


def format_page(page: ProductPage, column: str, order: str, query: str | None = None) -> str:
	lines = [f"<b>Products</b> (page {page.page}/{page.last_page}, {page.total} total)"]
	if query:
		lines.append(f"Search: <i>{escape(query)}</i>")
	lines.append(f"Sorted by {column} ({order})")
	lines.append("")
	if not page.items:
		lines.append("Nothing found.")
	for p in page.items:
		lines.append(f"#{p.id} <b>{escape(p.name)}</b> · {p.price:.2f} · stock {p.stock} · {na(p.category_name)}")
	return "\n".join(lines)


def format_product(product: ProductRecord) -> str:
	lines = [f"<b>{escape(product.name)}</b>", ""]
	if product.description:
		lines.append(escape(product.description))
		lines.append("")
	lines.extend([
		f"Price: <b>{product.price:.2f}</b>",
		f"Stock: <b>{product.stock}</b>",
		f"Category: {na(product.category_name)}",
		f"Specifications: {na(product.specifications)}",
		f"Manufacturer: {na(product.manufacturer)}",
	])
	return "\n".join(lines)
