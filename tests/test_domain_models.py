from datetime import datetime, timezone
from decimal import Decimal

import pytest

from card_market.domain.exceptions import InsufficientStockError, OrderCompletionError
from card_market.domain.models import (
    Order, OrderItem, Payment, PaymentMethod, PaymentStatus, ShippingInfo, ShippingStatus, UserRole,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize("raw, expected", [
    ("Delivered", ShippingStatus.DELIVERED),
    ("delivered", ShippingStatus.DELIVERED),
    (" SHIPPED ", ShippingStatus.SHIPPED),
    ("lost-in-transit", ShippingStatus.PREPARING),
    ("", ShippingStatus.PREPARING),
    (None, ShippingStatus.PREPARING),
])
def test_shipping_status_parse(raw, expected):
    assert ShippingStatus.parse(raw) == expected


def test_other_enums_fall_back():
    assert PaymentStatus.parse("weird") == PaymentStatus.UNDEFINED
    assert PaymentMethod.parse("barter") == PaymentMethod.ALTERNATIVE
    assert UserRole.parse(None) == UserRole.CUSTOMER
    assert PaymentMethod.parse("applepay") == PaymentMethod.APPLE_PAY


def test_db_value_is_the_canonical_spelling():
    assert PaymentStatus.parse("completed").as_db_value() == "Completed"
    assert UserRole.SERVICE_ACCOUNT.as_db_value() == "ServiceAccount"


def test_order_item_subtotal():
    item = OrderItem(id="i1", order_id="o1", product_id="p1", quantity=3, price=Decimal("2.50"))
    assert item.subtotal == Decimal("7.50")


@pytest.mark.parametrize("status, expected", [
    ("completed", True),
    ("Completed", True),
    (" COMPLETED ", True),
    ("processing", False),
    ("complete", False),
])
def test_is_completion_request(status, expected):
    assert Order.is_completion_request(status) is expected


def _payment(status):
    return Payment(id="pay", order_id="o1", amount=Decimal("1"), status=status, transaction_id="tx", created_at=NOW)


def _shipping(status):
    return ShippingInfo(id="s", order_id="o1", status=status)


def test_can_be_completed():
    assert Order.can_be_completed(_payment(PaymentStatus.COMPLETED), _shipping(ShippingStatus.DELIVERED))
    assert not Order.can_be_completed(_payment(PaymentStatus.PENDING), _shipping(ShippingStatus.DELIVERED))
    assert not Order.can_be_completed(_payment(PaymentStatus.COMPLETED), _shipping(ShippingStatus.SHIPPED))
    assert not Order.can_be_completed(None, _shipping(ShippingStatus.DELIVERED))
    assert not Order.can_be_completed(_payment(PaymentStatus.COMPLETED), None)


def test_error_messages():
    assert "Доступно: 2, требуется: 3" in str(InsufficientStockError("p1", 2, 3))
    assert "Доступно" not in str(InsufficientStockError("p1"))

    message = str(OrderCompletionError("o1", "Pending", None))
    assert "'Pending'" in message
    assert "shipping: 'отсутствует'" in message
