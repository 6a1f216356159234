from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State, StatesGroup
from aiogram.types import Message, CallbackQuery
from sqlalchemy.ext.asyncio import AsyncSession

from app.bot.common import callback_int, format_errors, format_product, is_admin, safe_answer, safe_edit
from app.bot.handlers.user.catalog import render_catalog
from app.bot.keyboards.inline import (
	admin_categories_keyboard,
	admin_category_keyboard,
	admin_category_list_keyboard,
	admin_menu_keyboard,
	product_view_keyboard,
)
from app.core.errors import NotFoundError, ValidationError
from app.db.session import SessionLocal
from app.services import categories as category_service
from app.services import products as product_service


router = Router(name="admin_products")


class ProductCreateStates(StatesGroup):
	name = State()
	description = State()
	price = State()
	stock = State()
	category = State()


class ProductEditStates(StatesGroup):
	value = State()
	category = State()


class AdminCategoryStates(StatesGroup):
	name = State()
	rename = State()


def _number_text(text: str | None) -> str:
	return (text or "").replace(",", ".").strip()


async def _category_choices(session: AsyncSession) -> list[tuple[int, str]]:
	return [(c.id, c.name) for c in await category_service.list_categories(session)]


@router.callback_query(F.data == "admin:open")
async def admin_open(callback: CallbackQuery) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	await safe_edit(callback, "Admin menu", reply_markup=admin_menu_keyboard().as_markup())
	await safe_answer(callback)


# --- product creation ---

@router.message(Command("addproduct"))
async def add_product(message: Message, state: FSMContext) -> None:
	if not is_admin(message.from_user.id):  # type: ignore[union-attr]
		await message.answer("Access denied")
		return
	await state.set_state(ProductCreateStates.name)
	await state.set_data({})
	await message.answer("Enter the product name")


@router.callback_query(F.data == "admin:product:add")
async def admin_product_add_from_menu(callback: CallbackQuery, state: FSMContext) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	await state.set_state(ProductCreateStates.name)
	await state.set_data({})
	await safe_edit(callback, "Enter the product name")
	await safe_answer(callback)


@router.message(ProductCreateStates.name, F.text)
async def pc_name(message: Message, state: FSMContext) -> None:
	await state.update_data(name=message.text)
	await state.set_state(ProductCreateStates.description)
	await message.answer("Enter a description (or send '-' to skip)")


@router.message(ProductCreateStates.description, F.text)
async def pc_description(message: Message, state: FSMContext) -> None:
	desc = None if (message.text or "").strip() == "-" else message.text
	await state.update_data(description=desc)
	await state.set_state(ProductCreateStates.price)
	await message.answer("Enter the price, e.g. 49.99")


@router.message(ProductCreateStates.price, F.text)
async def pc_price(message: Message, state: FSMContext) -> None:
	await state.update_data(price=_number_text(message.text))
	await state.set_state(ProductCreateStates.stock)
	await message.answer("Enter the stock quantity")


@router.message(ProductCreateStates.stock, F.text)
async def pc_stock(message: Message, state: FSMContext) -> None:
	await state.update_data(stock=(message.text or "").strip())
	async with SessionLocal() as session:
		cats = await _category_choices(session)
	if not cats:
		await state.clear()
		await message.answer("Create a category first: /addcat Name", reply_markup=admin_menu_keyboard().as_markup())
		return
	await state.set_state(ProductCreateStates.category)
	await message.answer("Choose a category", reply_markup=admin_categories_keyboard(cats).as_markup())


@router.callback_query(ProductCreateStates.category, F.data.startswith("admincat:"))
async def pc_category(callback: CallbackQuery, state: FSMContext) -> None:
	_, cid = (callback.data or "").split(":", 1)
	data = await state.get_data()
	data["category_id"] = cid
	await state.clear()
	try:
		async with SessionLocal() as session:
			product = await product_service.create_product(session, data)
	except ValidationError as exc:
		await safe_edit(callback, format_errors(exc), reply_markup=admin_menu_keyboard().as_markup())
		await safe_answer(callback)
		return
	kb = product_view_keyboard(product.id, True)
	await safe_edit(callback, "Product created ✅\n\n" + format_product(product), reply_markup=kb.as_markup())
	await safe_answer(callback)


# --- inline per-field editing ---

def _parse_edit(data: str) -> tuple[str, int] | None:
	# data format: admin:edit:<field>:<product_id>
	parts = data.split(":")
	if len(parts) != 4 or not parts[3].isdigit():
		return None
	return parts[2], int(parts[3])


_EDIT_PROMPTS = {
	"name": "Send the new name",
	"description": "Send the new description (or '-' to clear it)",
	"price": "Send the new price, e.g. 49.99",
	"stock": "Send the new stock quantity",
}


@router.callback_query(F.data.startswith("admin:edit:"))
async def edit_start(callback: CallbackQuery, state: FSMContext) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	parsed = _parse_edit(callback.data or "")
	if parsed is None:
		await safe_answer(callback)
		return
	field, pid = parsed
	if field == "category":
		async with SessionLocal() as session:
			cats = await _category_choices(session)
		if not cats:
			await safe_edit(callback, "Create a category first", reply_markup=admin_menu_keyboard().as_markup())
			await safe_answer(callback)
			return
		await state.set_state(ProductEditStates.category)
		await state.set_data({"product_id": pid})
		await safe_edit(callback, "Choose the new category", reply_markup=admin_categories_keyboard(cats).as_markup())
		await safe_answer(callback)
		return
	if field not in _EDIT_PROMPTS:
		await safe_answer(callback)
		return
	await state.set_state(ProductEditStates.value)
	await state.set_data({"product_id": pid, "field": field})
	await safe_edit(callback, _EDIT_PROMPTS[field])
	await safe_answer(callback)


async def _apply_edit(pid: int, changes: dict) -> tuple[str, object]:
	"""Run a one-field update and return (text, keyboard) to show."""
	try:
		async with SessionLocal() as session:
			product = await product_service.update_product(session, pid, changes)
	except NotFoundError:
		return "Product not found", admin_menu_keyboard().as_markup()
	except ValidationError as exc:
		return format_errors(exc), product_view_keyboard(pid, True).as_markup()
	return "Saved ✅\n\n" + format_product(product), product_view_keyboard(pid, True).as_markup()


@router.message(ProductEditStates.value)
async def edit_value_save(message: Message, state: FSMContext) -> None:
	data = await state.get_data()
	await state.clear()
	field = data["field"]
	text = (message.text or "").strip()
	if field == "description":
		value = None if text == "-" else text
	elif field == "price":
		value = _number_text(text)
	else:
		value = text
	reply, kb = await _apply_edit(int(data["product_id"]), {field: value})
	await message.answer(reply, reply_markup=kb)


@router.callback_query(ProductEditStates.category, F.data.startswith("admincat:"))
async def edit_category_save(callback: CallbackQuery, state: FSMContext) -> None:
	cid = (callback.data or "").split(":")[-1]
	data = await state.get_data()
	await state.clear()
	reply, kb = await _apply_edit(int(data["product_id"]), {"category_id": cid})
	await safe_edit(callback, reply, reply_markup=kb)
	await safe_answer(callback)


# --- deletion ---

@router.callback_query(F.data.startswith("admin:product:delete:"))
async def admin_product_delete(callback: CallbackQuery, state: FSMContext) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	pid = callback_int(callback.data)
	if pid is None:
		await safe_edit(callback, "Invalid product ID", reply_markup=admin_menu_keyboard().as_markup())
		await safe_answer(callback)
		return
	try:
		async with SessionLocal() as session:
			await product_service.delete_product(session, pid)
	except NotFoundError:
		await safe_edit(callback, "Product not found", reply_markup=admin_menu_keyboard().as_markup())
		await safe_answer(callback)
		return
	# back to the listing
	await render_catalog(callback, state)


# --- categories ---

@router.message(Command("addcat"))
async def add_category(message: Message, command: CommandObject) -> None:
	if not is_admin(message.from_user.id):  # type: ignore[union-attr]
		await message.answer("Access denied")
		return
	if not command.args:
		await message.answer("Usage: /addcat CategoryName", reply_markup=admin_menu_keyboard().as_markup())
		return
	try:
		async with SessionLocal() as session:
			await category_service.create_category(session, {"name": command.args})
	except ValidationError as exc:
		await message.answer(format_errors(exc), reply_markup=admin_menu_keyboard().as_markup())
		return
	await message.answer("Category added", reply_markup=admin_menu_keyboard().as_markup())


@router.callback_query(F.data == "admin:category:add")
async def admin_category_add_open(callback: CallbackQuery, state: FSMContext) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	await state.set_state(AdminCategoryStates.name)
	await safe_edit(callback, "Send the category name")
	await safe_answer(callback)


@router.message(AdminCategoryStates.name)
async def admin_category_create_name(message: Message, state: FSMContext) -> None:
	await state.clear()
	try:
		async with SessionLocal() as session:
			await category_service.create_category(session, {"name": message.text or ""})
	except ValidationError as exc:
		await message.answer(format_errors(exc), reply_markup=admin_menu_keyboard().as_markup())
		return
	await message.answer("Category added", reply_markup=admin_menu_keyboard().as_markup())


@router.callback_query(F.data == "admin:category:list")
async def admin_category_list(callback: CallbackQuery) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	async with SessionLocal() as session:
		cats = await category_service.list_categories(session)
	kb = admin_category_list_keyboard([(c.id, c.name) for c in cats])
	await safe_edit(callback, "Categories:" if cats else "No categories yet", reply_markup=kb.as_markup())
	await safe_answer(callback)


@router.callback_query(F.data.startswith("admin:category:open:"))
async def admin_category_open(callback: CallbackQuery) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	cid = callback_int(callback.data)
	if cid is None:
		await safe_answer(callback)
		return
	await safe_edit(callback, f"Category ID {cid}", reply_markup=admin_category_keyboard(cid).as_markup())
	await safe_answer(callback)


@router.callback_query(F.data.startswith("admin:category:rename:"))
async def admin_category_rename_start(callback: CallbackQuery, state: FSMContext) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	cid = callback_int(callback.data)
	if cid is None:
		await safe_answer(callback)
		return
	await state.set_state(AdminCategoryStates.rename)
	await state.set_data({"category_id": cid})
	await safe_edit(callback, "Send the new category name")
	await safe_answer(callback)


@router.message(AdminCategoryStates.rename)
async def admin_category_rename_save(message: Message, state: FSMContext) -> None:
	data = await state.get_data()
	await state.clear()
	try:
		async with SessionLocal() as session:
			await category_service.rename_category(session, int(data["category_id"]), {"name": message.text or ""})
	except NotFoundError:
		await message.answer("Category not found", reply_markup=admin_menu_keyboard().as_markup())
		return
	except ValidationError as exc:
		await message.answer(format_errors(exc), reply_markup=admin_menu_keyboard().as_markup())
		return
	await message.answer("Category renamed", reply_markup=admin_menu_keyboard().as_markup())


@router.callback_query(F.data.startswith("admin:category:delete:"))
async def admin_category_delete(callback: CallbackQuery) -> None:
	if not is_admin(callback.from_user.id):  # type: ignore[union-attr]
		await safe_answer(callback)
		return
	cid = callback_int(callback.data)
	if cid is None:
		await safe_answer(callback)
		return
	try:
		async with SessionLocal() as session:
			await category_service.delete_category(session, cid)
	except NotFoundError:
		await safe_edit(callback, "Category not found", reply_markup=admin_menu_keyboard().as_markup())
		await safe_answer(callback)
		return
	await safe_edit(callback, "Category deleted", reply_markup=admin_menu_keyboard().as_markup())
	await safe_answer(callback)
