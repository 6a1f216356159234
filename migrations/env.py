import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from app.core.config import settings
from app.db.session import Base, create_engine
from app import models  # noqa: F401


config = context.config
if config.config_file_name is not None:
	fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
	context.configure(
		url=settings.database_url,
		target_metadata=target_metadata,
		literal_binds=True,
		dialect_opts={"paramstyle": "named"},
		render_as_batch=True,
	)
	with context.begin_transaction():
		context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
	context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
	with context.begin_transaction():
		context.run_migrations()


async def run_migrations_online() -> None:
	db_engine = create_engine(settings.database_url)
	async with db_engine.connect() as connection:
		await connection.run_sync(do_run_migrations)
	await db_engine.dispose()


if context.is_offline_mode():
	run_migrations_offline()
else:
	asyncio.run(run_migrations_online())
