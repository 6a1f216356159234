from aiogram import Router, F
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.bot.common import callback_int, format_page, format_product, is_admin, safe_answer, safe_edit
from app.bot.keyboards.inline import catalog_page_keyboard, main_menu_keyboard, product_view_keyboard
from app.core.errors import CatalogError, NotFoundError
from app.db.session import SessionLocal
from app.schemas.product import ProductPage
from app.services import products as product_service


router = Router(name="user_catalog")

WELCOME_TEXT = "Welcome! Open the catalog to browse, search and sort products."
DEFAULT_COLUMN = "id"
DEFAULT_ORDER = "asc"


async def _load_page(session: AsyncSession, column: str, order: str, query: str | None, page: int) -> ProductPage:
	return await product_service.list_products(session, column=column, order=order, query=query, page=page)


async def render_catalog(callback: CallbackQuery, state: FSMContext, column: str = DEFAULT_COLUMN, order: str = DEFAULT_ORDER, page: int = 1) -> None:
	data = await state.get_data()
	query = data.get("catalog_query")
	try:
		async with SessionLocal() as session:
			result = await _load_page(session, column, order, query, page)
	except CatalogError as exc:
		# crafted callback data: unknown column, bad order or page
		logger.warning("Rejected catalog listing request {!r}: {}", callback.data, exc)
		await safe_answer(callback, "This listing is not available", show_alert=True)
		return
	kb = catalog_page_keyboard(result, column, order)
	await safe_edit(callback, format_page(result, column, order, query), reply_markup=kb.as_markup())
	await safe_answer(callback)


@router.message(CommandStart())
async def start(message: Message) -> None:
	admin = is_admin(message.from_user.id if message.from_user else None)
	await message.answer(WELCOME_TEXT, reply_markup=main_menu_keyboard(admin).as_markup())


@router.callback_query(F.data == "nav:home")
async def nav_home(callback: CallbackQuery) -> None:
	admin = is_admin(callback.from_user.id if callback.from_user else None)
	await safe_edit(callback, WELCOME_TEXT, reply_markup=main_menu_keyboard(admin).as_markup())
	await safe_answer(callback)


@router.callback_query(F.data == "catalog:open")
async def open_catalog(callback: CallbackQuery, state: FSMContext) -> None:
	await render_catalog(callback, state)


@router.callback_query(F.data.startswith("catalog:list:"))
async def catalog_list(callback: CallbackQuery, state: FSMContext) -> None:
	# data format: catalog:list:<column>:<order>:<page>
	parts = (callback.data or "").split(":")
	if len(parts) != 5 or not parts[4].isdigit():
		await safe_answer(callback)
		return
	await render_catalog(callback, state, column=parts[2], order=parts[3], page=int(parts[4]))


@router.message(Command("search"))
async def search(message: Message, command: CommandObject, state: FSMContext) -> None:
	# no text means "show everything", same as the plain listing
	query = (command.args or "").strip() or None
	await state.update_data(catalog_query=query)
	async with SessionLocal() as session:
		result = await _load_page(session, DEFAULT_COLUMN, DEFAULT_ORDER, query, 1)
	kb = catalog_page_keyboard(result, DEFAULT_COLUMN, DEFAULT_ORDER)
	await message.answer(format_page(result, DEFAULT_COLUMN, DEFAULT_ORDER, query), reply_markup=kb.as_markup())


@router.callback_query(F.data.startswith("product:"))
async def open_product(callback: CallbackQuery) -> None:
	# data format: product:<product_id>
	product_id = callback_int(callback.data, 1)
	if product_id is None:
		await safe_answer(callback)
		return
	try:
		async with SessionLocal() as session:
			product = await product_service.get_product(session, product_id)
	except NotFoundError:
		await safe_edit(callback, "Product not found.")
		await safe_answer(callback)
		return
	admin = is_admin(callback.from_user.id if callback.from_user else None)
	kb = product_view_keyboard(product.id, admin)
	await safe_edit(callback, format_product(product), reply_markup=kb.as_markup())
	await safe_answer(callback)


@router.callback_query(F.data == "noop")
async def noop(callback: CallbackQuery) -> None:
	await safe_answer(callback)
