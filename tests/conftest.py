import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from card_market.application.products import ProductService, ProductDTO
from card_market.application.users import UserService, UserDTO
from card_market.database import build_session_factory, create_tables
from card_market.infrastructure.unit_of_work import UnitOfWork
from card_market.main import app
from card_market.presentation.dependencies import get_unit_of_work


@pytest.fixture
def engine(tmp_path):
    # NullPool: каждый asyncio.run получает свое соединение в своем event loop
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'card_market.db'}", poolclass=NullPool)
    asyncio.run(create_tables(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def uow(engine):
    return UnitOfWork(build_session_factory(engine))


@pytest.fixture
def client(uow):
    app.dependency_overrides[get_unit_of_work] = lambda: uow
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(uow):
    return asyncio.run(
        UserService(uow).create(UserDTO(username="collector", email="collector@example.com"))
    )


@pytest.fixture
def make_product(uow):
    def _make(name="Black Lotus", price="10.00", stock=5):
        return asyncio.run(
            ProductService(uow).create(
                ProductDTO(name=name, price=Decimal(price), stock_quantity=stock, edition="Alpha", rarity="Rare")
            )
        )
    return _make
