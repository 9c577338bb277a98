from abc import ABC, abstractmethod
from typing import Optional, List
from card_market.domain.models import (
    Order, Product, User, Payment, ShippingInfo, ShoppingCart, ShoppingCartItem, UserFavorite,
)


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def list(self, user_id: Optional[str] = None) -> List[Order]:
        pass

    @abstractmethod
    async def create(self, order: Order) -> None:
        pass

    @abstractmethod
    async def update_status(self, order_id: str, status: str) -> None:
        pass

    @abstractmethod
    async def delete(self, order_id: str) -> None:
        pass

    @abstractmethod
    async def exists_for_user(self, user_id: str) -> bool:
        pass

    @abstractmethod
    async def references_product(self, product_id: str) -> bool:
        pass


class ProductRepository(ABC):
    @abstractmethod
    async def get_by_id(self, product_id: str, for_update: bool = False) -> Optional[Product]:
        pass

    @abstractmethod
    async def list(self) -> List[Product]:
        pass

    @abstractmethod
    async def create(self, product: Product) -> None:
        pass

    @abstractmethod
    async def update(self, product: Product) -> None:
        pass

    @abstractmethod
    async def delete(self, product_id: str) -> None:
        pass

    @abstractmethod
    async def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Списывает остаток, только если его хватает. Возвращает False, если не хватило"""
        pass


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def list(self) -> List[User]:
        pass

    @abstractmethod
    async def create(self, user: User) -> None:
        pass

    @abstractmethod
    async def update(self, user: User) -> None:
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        pass


class PaymentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def get_by_order_id(self, order_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def list(self, order_id: Optional[str] = None) -> List[Payment]:
        pass

    @abstractmethod
    async def create(self, payment: Payment) -> None:
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> None:
        pass

    @abstractmethod
    async def delete(self, payment_id: str) -> None:
        pass


class ShippingInfoRepository(ABC):
    @abstractmethod
    async def get_by_id(self, shipping_id: str) -> Optional[ShippingInfo]:
        pass

    @abstractmethod
    async def get_by_order_id(self, order_id: str) -> Optional[ShippingInfo]:
        pass

    @abstractmethod
    async def list(self) -> List[ShippingInfo]:
        pass

    @abstractmethod
    async def create(self, shipping: ShippingInfo) -> None:
        pass

    @abstractmethod
    async def update(self, shipping: ShippingInfo) -> None:
        pass

    @abstractmethod
    async def delete(self, shipping_id: str) -> None:
        pass


class ShoppingCartRepository(ABC):
    @abstractmethod
    async def get_by_id(self, cart_id: str) -> Optional[ShoppingCart]:
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Optional[ShoppingCart]:
        pass

    @abstractmethod
    async def create(self, cart: ShoppingCart) -> None:
        pass

    @abstractmethod
    async def delete_for_user(self, user_id: str) -> None:
        pass

    @abstractmethod
    async def get_item(self, item_id: str) -> Optional[ShoppingCartItem]:
        pass

    @abstractmethod
    async def add_item(self, item: ShoppingCartItem) -> None:
        pass

    @abstractmethod
    async def remove_item(self, item_id: str) -> None:
        pass

    @abstractmethod
    async def clear(self, cart_id: str) -> int:
        pass

    @abstractmethod
    async def remove_product(self, product_id: str) -> None:
        pass


class UserFavoriteRepository(ABC):
    @abstractmethod
    async def get_by_id(self, favorite_id: str) -> Optional[UserFavorite]:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[UserFavorite]:
        pass

    @abstractmethod
    async def exists(self, user_id: str, product_id: str) -> bool:
        pass

    @abstractmethod
    async def create(self, favorite: UserFavorite) -> None:
        pass

    @abstractmethod
    async def delete(self, favorite_id: str) -> None:
        pass

    @abstractmethod
    async def delete_for_user(self, user_id: str) -> None:
        pass

    @abstractmethod
    async def delete_for_product(self, product_id: str) -> None:
        pass


class UnitOfWork(ABC):
    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        pass

    @property
    @abstractmethod
    def products(self) -> ProductRepository:
        pass

    @property
    @abstractmethod
    def users(self) -> UserRepository:
        pass

    @property
    @abstractmethod
    def payments(self) -> PaymentRepository:
        pass

    @property
    @abstractmethod
    def shipping(self) -> ShippingInfoRepository:
        pass

    @property
    @abstractmethod
    def carts(self) -> ShoppingCartRepository:
        pass

    @property
    @abstractmethod
    def favorites(self) -> UserFavoriteRepository:
        pass

    @abstractmethod
    async def __call__(self):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
