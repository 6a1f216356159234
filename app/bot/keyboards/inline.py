from aiogram.utils.keyboard import InlineKeyboardBuilder
from aiogram.types import InlineKeyboardButton

from app.schemas.product import ProductPage


SORT_LABELS = {
	"id": "#",
	"name": "Name",
	"price": "Price",
	"stock": "Stock",
}

EDITABLE_FIELDS = {
	"name": "✏️ Name",
	"description": "📝 Description",
	"price": "💲 Price",
	"stock": "📦 Stock",
	"category": "📂 Category",
}


def main_menu_keyboard(is_admin: bool) -> InlineKeyboardBuilder:
	builder = InlineKeyboardBuilder()
	builder.button(text="🏷️ Catalog", callback_data="catalog:open")
	if is_admin:
		builder.button(text="⚙️ Admin", callback_data="admin:open")
	builder.adjust(2)
	return builder



def catalog_page_keyboard(page: ProductPage, column: str, order: str) -> InlineKeyboardBuilder:
	builder = InlineKeyboardBuilder()
	for product in page.items:
		builder.button(text=f"📦 {product.name}", callback_data=f"product:{product.id}")
	builder.adjust(1)
	# clicking the active column flips its direction, any other column starts ascending
	sort_row = []
	for col, label in SORT_LABELS.items():
		if col == column:
			arrow = "▲" if order == "asc" else "▼"
			next_order = "desc" if order == "asc" else "asc"
			sort_row.append(InlineKeyboardButton(text=f"{label} {arrow}", callback_data=f"catalog:list:{col}:{next_order}:1"))
		else:
			sort_row.append(InlineKeyboardButton(text=label, callback_data=f"catalog:list:{col}:asc:1"))
	builder.row(*sort_row)
	nav_row = []
	if page.page > 1:
		nav_row.append(InlineKeyboardButton(text="⬅️", callback_data=f"catalog:list:{column}:{order}:{page.page - 1}"))
	nav_row.append(InlineKeyboardButton(text=f"{page.page}/{page.last_page}", callback_data="noop"))
	if page.page < page.last_page:
		nav_row.append(InlineKeyboardButton(text="➡️", callback_data=f"catalog:list:{column}:{order}:{page.page + 1}"))
	builder.row(*nav_row)
	builder.row(InlineKeyboardButton(text="🏠 Home", callback_data="nav:home"))
	return builder



def product_view_keyboard(product_id: int, is_admin: bool) -> InlineKeyboardBuilder:
	builder = InlineKeyboardBuilder()
	if is_admin:
		for field, label in EDITABLE_FIELDS.items():
			builder.button(text=label, callback_data=f"admin:edit:{field}:{product_id}")
		builder.button(text="🗑 Delete", callback_data=f"admin:product:delete:{product_id}")
		builder.adjust(2)
	builder.row(InlineKeyboardButton(text="⬅️ To catalog", callback_data="catalog:open"))
	return builder



def admin_categories_keyboard(categories: list[tuple[int, str]]) -> InlineKeyboardBuilder:
	builder = InlineKeyboardBuilder()
	for category_id, category_name in categories:
		builder.button(text=f"📂 {category_name}", callback_data=f"admincat:{category_id}")
	builder.adjust(2)
	return builder



def admin_menu_keyboard() -> InlineKeyboardBuilder:
	builder = InlineKeyboardBuilder()
	builder.row(
		InlineKeyboardButton(text="➕📦 Product", callback_data="admin:product:add"),
		InlineKeyboardButton(text="➕📂 Category", callback_data="admin:category:add"),
	)
	builder.row(
		InlineKeyboardButton(text="📋 Categories", callback_data="admin:category:list"),
		InlineKeyboardButton(text="📦 Products", callback_data="catalog:open"),
	)
	builder.row(
		InlineKeyboardButton(text="🏠 Home", callback_data="nav:home"),
	)
	return builder



def admin_category_keyboard(category_id: int) -> InlineKeyboardBuilder:
	builder = InlineKeyboardBuilder()
	builder.button(text="✏️ Rename", callback_data=f"admin:category:rename:{category_id}")
	builder.button(text="🗑 Delete", callback_data=f"admin:category:delete:{category_id}")
	builder.button(text="↩️ Back", callback_data="admin:category:list")
	builder.adjust(2)
	return builder



def admin_category_list_keyboard(categories: list[tuple[int, str]]) -> InlineKeyboardBuilder:
	builder = InlineKeyboardBuilder()
	for category_id, category_name in categories:
		builder.button(text=f"📂 {category_name}", callback_data=f"admin:category:open:{category_id}")
	builder.adjust(1)
	builder.row(InlineKeyboardButton(text="↩️ Back", callback_data="admin:open"))
	return builder
