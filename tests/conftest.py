from decimal import Decimal

import pytest
import pytest_asyncio

from optistore.core.db import init_db, close_db
from optistore.models import Category, CategoryType, Company, Customer, InventoryItem


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database per test."""
    await init_db(db_url="sqlite://:memory:", generate_schemas=True)
    yield
    await close_db()


@pytest_asyncio.fixture
async def company(db):
    return await Company.create(name="Vision Plus Opticians")


@pytest_asyncio.fixture
async def other_company(db):
    return await Company.create(name="Competitor Optics")


@pytest_asyncio.fixture
async def customer(company):
    return await Customer.create(company=company, name="Jane Doe", phone="555-0101")


@pytest_asyncio.fixture
async def frames(company):
    return await Category.create(company=company, name="Frames", type=CategoryType.FRAME)


@pytest_asyncio.fixture
async def lenses(company):
    return await Category.create(company=company, name="Lenses", type=CategoryType.LENS)


@pytest.fixture
def make_item():
    """Factory for stocked inventory rows."""
    async def _make(company, category, name, stock, price="100.00"):
        return await InventoryItem.create(
            company=company,
            category=category,
            name=name,
            item_code=f"TST-{name[:6].upper()}",
            unit_price=Decimal(price),
            total_stock=stock,
        )
    return _make


@pytest.fixture
def stock_of():
    """Reads an item's current stock from the database."""
    async def _read(item) -> int:
        await item.refresh_from_db()
        return item.total_stock
    return _read
