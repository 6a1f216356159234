import asyncio
from loguru import logger
from aiogram import Bot, Dispatcher
from aiogram.enums import ParseMode
from aiogram.client.default import DefaultBotProperties

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.session import engine, init_db
from app.bot.handlers.user.catalog import router as user_router
from app.bot.handlers.admin.products import router as admin_router
from app import models  # noqa: F401  registers every table on Base.metadata


async def main() -> None:
	setup_logging()
	if not settings.bot_token:
		raise RuntimeError("BOT_TOKEN is not set")
	# ensure DB is up and metadata loaded; create tables if not exist
	await init_db(engine)

	async with Bot(
		token=settings.bot_token,
		default=DefaultBotProperties(parse_mode=ParseMode.HTML)
	) as bot:
		dp = Dispatcher()
		dp.include_routers(user_router, admin_router)
		logger.info("Bot started")
		await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())


if __name__ == "__main__":
	asyncio.run(main())
