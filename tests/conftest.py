import os

# settings are read at import time; point them at a throwaway database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio

from app import models  # noqa: F401
from app.db.session import Base, create_engine, create_sessionmaker
from app.services.categories import create_category
from app.services.products import create_product


@pytest_asyncio.fixture
async def engine(tmp_path):
	db_engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
	async with db_engine.begin() as conn:
		await conn.run_sync(Base.metadata.create_all)
	yield db_engine
	await db_engine.dispose()


@pytest.fixture
def session_factory(engine):
	return create_sessionmaker(engine)


@pytest_asyncio.fixture
async def session(session_factory):
	async with session_factory() as session:
		yield session


@pytest_asyncio.fixture
async def category(session):
	return await create_category(session, {"name": "Electronics"})


@pytest.fixture
def make_product(session, category):
	async def _make(**fields):
		data = {"name": "Speaker", "price": "49.99", "stock": 10, "category_id": category.id}
		data.update(fields)
		return await create_product(session, data)
	return _make
