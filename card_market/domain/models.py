from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel


class _ParsableEnum(str, Enum):
    """Строковый enum, который хранится в БД как текст.

    Поиск значения регистронезависимый. parse() никогда не падает:
    неизвестная строка превращается в значение из _fallback().
    """

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None

    @classmethod
    def _fallback(cls):
        raise NotImplementedError

    @classmethod
    def parse(cls, value: Optional[str]):
        if value is None:
            return cls._fallback()
        try:
            return cls(value)
        except ValueError:
            return cls._fallback()

    def as_db_value(self) -> str:
        return self.value


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class UserRole(_ParsableEnum):
    ADMIN = "Admin"
    CUSTOMER = "Customer"
    SERVICE_ACCOUNT = "ServiceAccount"
    SUPER_ADMIN = "SuperAdmin"

    @classmethod
    def _fallback(cls):
        return cls.CUSTOMER


class PaymentMethod(_ParsableEnum):
    PAYPAL = "PayPal"
    CREDIT_CARD = "CreditCard"
    DEBIT_CARD = "DebitCard"
    PIX = "Pix"
    BOLETO = "Boleto"
    APPLE_PAY = "ApplePay"
    GOOGLE_PAY = "GooglePay"
    VENMO = "Venmo"
    OXXO = "Oxxo"
    CASH = "Cash"
    ALTERNATIVE = "Alternative"

    @classmethod
    def _fallback(cls):
        return cls.ALTERNATIVE


class PaymentStatus(_ParsableEnum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    DENIED = "Denied"
    REFUNDED = "Refunded"
    REVERTED = "Reverted"
    UNDEFINED = "Undefined"

    @classmethod
    def _fallback(cls):
        return cls.UNDEFINED


class ShippingStatus(_ParsableEnum):
    PREPARING = "Preparing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    RETURNED = "Returned"
    CANCELLED = "Cancelled"

    @classmethod
    def _fallback(cls):
        # Испорченные данные в БД не должны ронять чтение доставки
        return cls.PREPARING


class User(BaseModel):
    """Domain Entity: пользователь"""
    id: str
    username: str
    email: str
    role: UserRole = UserRole.CUSTOMER
    created_at: datetime
    updated_at: datetime


class Product(BaseModel):
    """Domain Entity: карта в каталоге"""
    id: str
    name: str
    description: str = ""
    image_url: str = ""
    price: Decimal
    stock_quantity: int
    edition: str = ""
    rarity: str = ""
    created_at: datetime
    updated_at: datetime

    def has_stock(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity


class OrderItem(BaseModel):
    """Строка заказа. price: цена товара на момент создания заказа"""
    id: str
    order_id: str
    product_id: str
    quantity: int
    price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class ShippingInfo(BaseModel):
    id: str
    order_id: str
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    postal_code: str = ""
    shipping_cost: Decimal = Decimal("0")
    status: ShippingStatus = ShippingStatus.PREPARING
    tracking_number: str = ""
    estimated_delivery: Optional[datetime] = None
    shipped_date: Optional[datetime] = None
    delivered_date: Optional[datetime] = None

    def is_delivered(self) -> bool:
        return self.status == ShippingStatus.DELIVERED


class Payment(BaseModel):
    id: str
    order_id: str
    amount: Decimal
    method: PaymentMethod = PaymentMethod.CREDIT_CARD
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: str
    created_at: datetime
    completed_at: Optional[datetime] = None

    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED


class Order(BaseModel):
    """Domain Entity: заказ"""
    id: str
    user_id: str
    status: str = OrderStatus.PENDING.value
    total_price: Decimal
    created_at: datetime
    updated_at: datetime
    items: List[OrderItem] = []
    shipping: Optional[ShippingInfo] = None

    @staticmethod
    def is_completion_request(status: str) -> bool:
        """Запрошенный статус означает завершение заказа"""
        return status.strip().lower() == OrderStatus.COMPLETED.value

    @staticmethod
    def can_be_completed(payment: Optional[Payment], shipping: Optional[ShippingInfo]) -> bool:
        """Бизнес-правило: завершить можно только оплаченный и доставленный заказ"""
        return (
            payment is not None and payment.is_completed()
            and shipping is not None and shipping.is_delivered()
        )


class ShoppingCartItem(BaseModel):
    id: str
    cart_id: str
    product_id: str
    quantity: int


class ShoppingCart(BaseModel):
    id: str
    user_id: str
    created_at: datetime
    items: List[ShoppingCartItem] = []


class UserFavorite(BaseModel):
    id: str
    user_id: str
    product_id: str
    added_at: datetime
