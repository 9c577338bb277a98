import asyncio
from decimal import Decimal

import pytest

from card_market.application.create_order import (
    CreateOrderUseCase, CreateOrderDTO, OrderLineDTO, ShippingDetailsDTO,
)
from card_market.application.get_order import GetOrderUseCase, ListOrdersUseCase
from card_market.application.products import ProductService, ProductDTO
from card_market.domain.exceptions import InsufficientStockError, InvalidOrderError
from card_market.domain.models import Order, ShippingStatus


def _stock(uow, product_id):
    return asyncio.run(ProductService(uow).get(product_id)).stock_quantity


def test_order_total_includes_shipping_and_stock_is_decremented(uow, user, make_product):
    product = make_product(price="10.00", stock=5)
    dto = CreateOrderDTO(
        user_id=user.id,
        items=[OrderLineDTO(product_id=product.id, quantity=2)],
        shipping=ShippingDetailsDTO(address="Rua 1", city="Recife", shipping_cost=Decimal("3.50"))
    )

    order = asyncio.run(CreateOrderUseCase(uow)(dto))

    assert order.total_price == Decimal("23.50")
    assert order.status == "pending"
    assert _stock(uow, product.id) == 3

    stored = asyncio.run(GetOrderUseCase(uow)(order.id))
    assert stored.total_price == Decimal("23.50")
    assert len(stored.items) == 1
    assert stored.items[0].quantity == 2
    assert stored.items[0].price == Decimal("10.00")
    assert stored.shipping.status == ShippingStatus.PREPARING
    assert stored.shipping.shipping_cost == Decimal("3.50")


def test_order_without_shipping_totals_lines_only(uow, user, make_product):
    first = make_product(name="Mox Pearl", price="4.25", stock=10)
    second = make_product(name="Time Walk", price="1.50", stock=10)
    dto = CreateOrderDTO(
        user_id=user.id,
        items=[
            OrderLineDTO(product_id=first.id, quantity=2),
            OrderLineDTO(product_id=second.id, quantity=3),
        ]
    )

    order = asyncio.run(CreateOrderUseCase(uow)(dto))

    assert order.total_price == Decimal("13.00")
    assert order.shipping is None
    assert _stock(uow, first.id) == 8
    assert _stock(uow, second.id) == 7


def test_insufficient_stock_names_product_and_keeps_stock(uow, user, make_product):
    product = make_product(stock=2)
    dto = CreateOrderDTO(user_id=user.id, items=[OrderLineDTO(product_id=product.id, quantity=3)])

    with pytest.raises(InsufficientStockError) as exc_info:
        asyncio.run(CreateOrderUseCase(uow)(dto))

    assert product.id in str(exc_info.value)
    assert exc_info.value.available == 2
    assert exc_info.value.required == 3
    assert _stock(uow, product.id) == 2
    assert asyncio.run(ListOrdersUseCase(uow)()) == []


def test_failure_on_later_line_restores_earlier_lines(uow, user, make_product):
    plenty = make_product(name="Plenty", stock=5)
    scarce = make_product(name="Scarce", stock=2)
    dto = CreateOrderDTO(
        user_id=user.id,
        items=[
            OrderLineDTO(product_id=plenty.id, quantity=2),
            OrderLineDTO(product_id=scarce.id, quantity=3),
        ]
    )

    with pytest.raises(InsufficientStockError):
        asyncio.run(CreateOrderUseCase(uow)(dto))

    assert _stock(uow, plenty.id) == 5
    assert _stock(uow, scarce.id) == 2
    assert asyncio.run(ListOrdersUseCase(uow)()) == []


def test_unknown_product_is_rejected(uow, user):
    dto = CreateOrderDTO(user_id=user.id, items=[OrderLineDTO(product_id="missing", quantity=1)])

    with pytest.raises(InsufficientStockError) as exc_info:
        asyncio.run(CreateOrderUseCase(uow)(dto))

    assert "missing" in str(exc_info.value)


def test_line_price_is_a_snapshot(uow, user, make_product):
    product = make_product(price="10.00", stock=5)
    dto = CreateOrderDTO(user_id=user.id, items=[OrderLineDTO(product_id=product.id, quantity=1)])
    order = asyncio.run(CreateOrderUseCase(uow)(dto))

    asyncio.run(ProductService(uow).update(
        product.id,
        ProductDTO(name=product.name, price=Decimal("99.00"), stock_quantity=4)
    ))

    stored = asyncio.run(GetOrderUseCase(uow)(order.id))
    assert stored.items[0].price == Decimal("10.00")
    assert stored.total_price == Decimal("10.00")


def test_unknown_user_is_rejected(uow, make_product):
    product = make_product(stock=5)
    dto = CreateOrderDTO(user_id="nobody", items=[OrderLineDTO(product_id=product.id, quantity=1)])

    with pytest.raises(InvalidOrderError):
        asyncio.run(CreateOrderUseCase(uow)(dto))

    assert _stock(uow, product.id) == 5


def test_empty_order_is_rejected(uow, user):
    with pytest.raises(InvalidOrderError):
        asyncio.run(CreateOrderUseCase(uow)(CreateOrderDTO(user_id=user.id, items=[])))


def test_concurrent_orders_do_not_oversell(uow, user, make_product):
    product = make_product(stock=3)
    dto = CreateOrderDTO(user_id=user.id, items=[OrderLineDTO(product_id=product.id, quantity=2)])

    async def place_both():
        use_case = CreateOrderUseCase(uow)
        return await asyncio.gather(use_case(dto), use_case(dto), return_exceptions=True)

    results = asyncio.run(place_both())

    created = [r for r in results if isinstance(r, Order)]
    rejected = [r for r in results if isinstance(r, InsufficientStockError)]
    assert len(created) == 1
    assert len(rejected) == 1
    assert _stock(uow, product.id) == 1
    assert [o.id for o in asyncio.run(ListOrdersUseCase(uow)())] == [created[0].id]


def test_lines_are_returned_in_request_order(uow, user, make_product):
    products = [make_product(name=name, stock=5) for name in ("Zodiac", "Ancestral Recall", "Mox Ruby")]
    dto = CreateOrderDTO(
        user_id=user.id,
        items=[OrderLineDTO(product_id=p.id, quantity=i + 1) for i, p in enumerate(products)]
    )

    order = asyncio.run(CreateOrderUseCase(uow)(dto))

    stored = asyncio.run(GetOrderUseCase(uow)(order.id))
    assert [item.product_id for item in stored.items] == [p.id for p in products]
    assert [item.quantity for item in stored.items] == [1, 2, 3]
