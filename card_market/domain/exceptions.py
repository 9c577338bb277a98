from typing import Optional


class DomainException(Exception):
    pass


class NotFoundError(DomainException):
    pass


class ValidationFailedError(DomainException):
    pass


class StateConflictError(DomainException):
    pass


class PersistenceError(DomainException):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class ProductNotFoundError(NotFoundError):
    pass


class PaymentNotFoundError(NotFoundError):
    pass


class ShippingInfoNotFoundError(NotFoundError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class CartNotFoundError(NotFoundError):
    pass


class CartItemNotFoundError(NotFoundError):
    pass


class FavoriteNotFoundError(NotFoundError):
    pass


class InvalidOrderError(ValidationFailedError):
    pass


class EmptyCartError(ValidationFailedError):
    pass


class InsufficientStockError(ValidationFailedError):
    def __init__(self, product_id: str, available: Optional[int] = None, required: Optional[int] = None):
        self.product_id = product_id
        self.available = available
        self.required = required
        message = f"Товар {product_id} отсутствует в нужном количестве или не существует"
        if available is not None and required is not None:
            message += f". Доступно: {available}, требуется: {required}"
        super().__init__(message)


class OrderCompletionError(StateConflictError):
    def __init__(self, order_id: str, payment_status: Optional[str], shipping_status: Optional[str]):
        self.order_id = order_id
        self.payment_status = payment_status
        self.shipping_status = shipping_status
        super().__init__(
            f"Заказ {order_id} нельзя завершить, пока платеж не завершен и заказ не доставлен. "
            f"payment: '{payment_status or 'отсутствует'}', shipping: '{shipping_status or 'отсутствует'}'"
        )


class DuplicateEntityError(StateConflictError):
    pass


class EntityInUseError(StateConflictError):
    pass
