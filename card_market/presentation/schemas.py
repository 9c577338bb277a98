from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from decimal import Decimal
from typing import Generic, Optional, List, TypeVar

from card_market.domain.models import (
    UserRole, PaymentMethod, PaymentStatus, ShippingStatus,
)

T = TypeVar("T")


class ServiceResponse(BaseModel, Generic[T]):
    """Единый конверт ответа"""
    success: bool = True
    message: str = ""
    data: Optional[T] = None


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)


class ShippingRequest(BaseModel):
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    postal_code: str = ""
    shipping_cost: Decimal = Field(default=Decimal("0"), ge=0)
    tracking_number: str = ""
    estimated_delivery: Optional[datetime] = None


class CreateOrderRequest(BaseModel):
    user_id: str
    items: List[OrderItemRequest] = Field(min_length=1)
    shipping: Optional[ShippingRequest] = None


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(min_length=1)


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class OrderItemResponse(_FromAttributes):
    id: str
    product_id: str
    quantity: int
    price: Decimal


class ShippingInfoResponse(_FromAttributes):
    id: str
    order_id: str
    address: str
    city: str
    state: str
    country: str
    postal_code: str
    shipping_cost: Decimal
    status: ShippingStatus
    tracking_number: str
    estimated_delivery: Optional[datetime] = None
    shipped_date: Optional[datetime] = None
    delivered_date: Optional[datetime] = None


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    total_price: Decimal
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemResponse]
    shipping: Optional[ShippingInfoResponse] = None

    @classmethod
    def from_domain(cls, order):
        return cls(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            total_price=order.total_price,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[OrderItemResponse.model_validate(item) for item in order.items],
            shipping=ShippingInfoResponse.model_validate(order.shipping) if order.shipping else None
        )


class ProductResponse(_FromAttributes):
    id: str
    name: str
    description: str
    image_url: str
    price: Decimal
    stock_quantity: int
    edition: str
    rarity: str
    created_at: datetime
    updated_at: datetime


class UserResponse(_FromAttributes):
    id: str
    username: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


class PaymentResponse(_FromAttributes):
    id: str
    order_id: str
    amount: Decimal
    method: PaymentMethod
    status: PaymentStatus
    transaction_id: str
    created_at: datetime
    completed_at: Optional[datetime] = None


class ShoppingCartItemResponse(_FromAttributes):
    id: str
    cart_id: str
    product_id: str
    quantity: int


class ShoppingCartResponse(_FromAttributes):
    id: str
    user_id: str
    created_at: datetime
    items: List[ShoppingCartItemResponse]


class UserFavoriteResponse(_FromAttributes):
    id: str
    user_id: str
    product_id: str
    added_at: datetime
