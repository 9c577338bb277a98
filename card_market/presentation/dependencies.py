from fastapi import Depends

from card_market.database import AsyncSessionLocal
from card_market.infrastructure.unit_of_work import UnitOfWork
from card_market.application.create_order import CreateOrderUseCase
from card_market.application.update_order_status import UpdateOrderStatusUseCase
from card_market.application.get_order import GetOrderUseCase, ListOrdersUseCase, DeleteOrderUseCase
from card_market.application.products import ProductService
from card_market.application.users import UserService
from card_market.application.payments import PaymentService
from card_market.application.shipping import ShippingInfoService
from card_market.application.carts import ShoppingCartService
from card_market.application.favorites import UserFavoriteService


def get_unit_of_work() -> UnitOfWork:
    return UnitOfWork(AsyncSessionLocal)


# Фабрики для создания use cases
def get_create_order_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return CreateOrderUseCase(uow)


def get_update_order_status_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return UpdateOrderStatusUseCase(uow)


def get_get_order_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return GetOrderUseCase(uow)


def get_list_orders_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return ListOrdersUseCase(uow)


def get_delete_order_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return DeleteOrderUseCase(uow)


# Сервисы сущностей
def get_product_service(uow: UnitOfWork = Depends(get_unit_of_work)):
    return ProductService(uow)


def get_user_service(uow: UnitOfWork = Depends(get_unit_of_work)):
    return UserService(uow)


def get_payment_service(uow: UnitOfWork = Depends(get_unit_of_work)):
    return PaymentService(uow)


def get_shipping_service(uow: UnitOfWork = Depends(get_unit_of_work)):
    return ShippingInfoService(uow)


def get_cart_service(uow: UnitOfWork = Depends(get_unit_of_work)):
    return ShoppingCartService(uow)


def get_favorite_service(uow: UnitOfWork = Depends(get_unit_of_work)):
    return UserFavoriteService(uow)
