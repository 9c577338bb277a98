import asyncio
import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from card_market.database import build_session_factory
from card_market.infrastructure.unit_of_work import UnitOfWork
from card_market.main import app
from card_market.presentation.dependencies import get_unit_of_work


@pytest.fixture
def broken_client(tmp_path):
    # Схема не создана: любой запрос к таблицам падает в драйвере
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}", poolclass=NullPool)
    app.dependency_overrides[get_unit_of_work] = lambda: UnitOfWork(build_session_factory(engine))
    yield TestClient(app)
    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


def test_database_failure_returns_generic_500(broken_client, caplog):
    with caplog.at_level(logging.ERROR, logger="card_market.infrastructure.unit_of_work"):
        response = broken_client.get("/api/products")

    assert response.status_code == 500
    body = response.json()
    assert body == {
        "success": False,
        "message": "Не удалось выполнить операцию, повторите запрос позже",
        "data": None
    }
    assert "no such table" not in response.text
    assert any("no such table" in record.getMessage() for record in caplog.records)


def test_database_failure_on_write(broken_client):
    response = broken_client.post("/api/users", json={"username": "liliana", "email": "l@example.com"})

    assert response.status_code == 500
    assert response.json()["success"] is False
