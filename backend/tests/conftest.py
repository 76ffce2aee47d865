from datetime import date, timedelta
from decimal import Decimal

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select

from pharmacy.main import app
from pharmacy.db.database import Database, get_session
from pharmacy.models import Customer, Product


@pytest.fixture
async def database(tmp_path):
    """Fresh SQLite file database for each test."""
    test_db = Database(f"sqlite:///{tmp_path / 'pharmacy.db'}", "sqlite")
    await test_db.create_tables()
    yield test_db
    await test_db.disconnect()


@pytest.fixture
async def session(database):
    session = await database.session()
    async with session:
        yield session


@pytest.fixture
def make_product(database):
    """Insert a product directly and return it."""

    async def _make(
        name: str = "Test Product",
        current_stock: int = 10,
        selling_price: str = "10.00",
        purchase_price: str = "5.00",
        expiration_date: date | None = None
    ) -> Product:
        product = Product(
            name=name,
            current_stock=current_stock,
            selling_price=Decimal(selling_price),
            purchase_price=Decimal(purchase_price),
            expiration_date=expiration_date or date.today() + timedelta(days=365)
        )
        session = await database.session()
        async with session:
            async with session.begin():
                session.add(product)
        return product

    return _make


@pytest.fixture
def make_customer(database):
    async def _make(name: str = "John Doe") -> Customer:
        customer = Customer(name=name, phone=None, email=None, address=None)
        session = await database.session()
        async with session:
            async with session.begin():
                session.add(customer)
        return customer

    return _make


@pytest.fixture
def stock_of(database):
    """Read current_stock from a fresh session."""

    async def _stock(product_id: int) -> int:
        session = await database.session()
        async with session:
            product = await session.get(Product, product_id)
            return product.current_stock

    return _stock


@pytest.fixture
def count_rows(database):
    async def _count(model) -> int:
        session = await database.session()
        async with session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return _count


@pytest.fixture
async def client(database):
    """Async test client bound to the test database."""

    async def override_get_session():
        session = await database.session()
        async with session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def mock_client():
    """Async test client with a mocked session, for tests that patch the services."""

    async def override_get_session():
        yield AsyncMock()

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
