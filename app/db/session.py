from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from app.core.config import settings


class Base(DeclarativeBase):
	pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
	# sqlite ignores ON DELETE CASCADE unless asked per connection
	cursor = dbapi_connection.cursor()
	cursor.execute("PRAGMA foreign_keys=ON")
	cursor.close()


def create_engine(url: str | None = None, **kwargs) -> AsyncEngine:
	url = url or settings.database_url
	kwargs.setdefault("echo", settings.sql_echo)
	kwargs.setdefault("pool_pre_ping", True)
	db_engine = create_async_engine(url, **kwargs)
	if db_engine.dialect.name == "sqlite":
		event.listen(db_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
	return db_engine


def create_sessionmaker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
	return async_sessionmaker(bind=db_engine, expire_on_commit=False)


engine: AsyncEngine = create_engine()
SessionLocal: async_sessionmaker[AsyncSession] = create_sessionmaker(engine)


async def init_db(db_engine: AsyncEngine = engine) -> None:
	async with db_engine.begin() as conn:
		await conn.run_sync(Base.metadata.create_all)
