from typing import Optional, List
from datetime import datetime, timezone
from sqlalchemy import select, insert, update, delete, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from card_market.domain.models import (
    Order, OrderItem, Product, User, UserRole, Payment, PaymentMethod, PaymentStatus,
    ShippingInfo, ShippingStatus, ShoppingCart, ShoppingCartItem, UserFavorite,
)
from card_market.domain.exceptions import DuplicateEntityError
from card_market.infrastructure.db_schema import (
    orders_tbl, order_items_tbl, products_tbl, users_tbl, payments_tbl, shipping_infos_tbl,
    shopping_carts_tbl, shopping_cart_items_tbl, user_favorites_tbl,
)
from card_market.application.interfaces import (
    OrderRepository, ProductRepository, UserRepository, PaymentRepository,
    ShippingInfoRepository, ShoppingCartRepository, UserFavoriteRepository,
)


def _shipping_to_domain(row) -> ShippingInfo:
    return ShippingInfo(
        id=row.id,
        order_id=row.order_id,
        address=row.address,
        city=row.city,
        state=row.state,
        country=row.country,
        postal_code=row.postal_code,
        shipping_cost=row.shipping_cost,
        status=ShippingStatus.parse(row.status),
        tracking_number=row.tracking_number,
        estimated_delivery=row.estimated_delivery,
        shipped_date=row.shipped_date,
        delivered_date=row.delivered_date
    )


def _shipping_values(shipping: ShippingInfo) -> dict:
    return dict(
        address=shipping.address,
        city=shipping.city,
        state=shipping.state,
        country=shipping.country,
        postal_code=shipping.postal_code,
        shipping_cost=shipping.shipping_cost,
        status=shipping.status.as_db_value(),
        tracking_number=shipping.tracking_number,
        estimated_delivery=shipping.estimated_delivery,
        shipped_date=shipping.shipped_date,
        delivered_date=shipping.delivered_date
    )


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self._session.execute(
            select(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        row = result.fetchone()
        if not row:
            return None
        return await self._load(row)

    async def list(self, user_id: Optional[str] = None) -> List[Order]:
        stmt = select(orders_tbl).order_by(orders_tbl.c.created_at.desc())
        if user_id is not None:
            stmt = stmt.where(orders_tbl.c.user_id == user_id)
        result = await self._session.execute(stmt)
        return [await self._load(row) for row in result.fetchall()]

    async def create(self, order: Order) -> None:
        await self._session.execute(
            insert(orders_tbl).values(
                id=order.id,
                user_id=order.user_id,
                status=order.status,
                total_price=order.total_price,
                created_at=order.created_at,
                updated_at=order.updated_at
            )
        )
        if order.items:
            await self._session.execute(
                insert(order_items_tbl),
                [
                    {
                        "id": item.id,
                        "order_id": order.id,
                        "product_id": item.product_id,
                        "quantity": item.quantity,
                        "price": item.price,
                        "position": position
                    }
                    for position, item in enumerate(order.items)
                ]
            )
        if order.shipping:
            await self._session.execute(
                insert(shipping_infos_tbl).values(
                    id=order.shipping.id,
                    order_id=order.id,
                    **_shipping_values(order.shipping)
                )
            )

    async def update_status(self, order_id: str, status: str) -> None:
        stmt = (
            update(orders_tbl)
            .where(orders_tbl.c.id == order_id)
            .values(
                status=status,
                updated_at=datetime.now(timezone.utc)
            )
        )
        await self._session.execute(stmt)

    async def delete(self, order_id: str) -> None:
        # SQLite не включает каскады без PRAGMA, поэтому удаляем явно
        await self._session.execute(
            delete(order_items_tbl).where(order_items_tbl.c.order_id == order_id)
        )
        await self._session.execute(
            delete(shipping_infos_tbl).where(shipping_infos_tbl.c.order_id == order_id)
        )
        await self._session.execute(
            delete(orders_tbl).where(orders_tbl.c.id == order_id)
        )

    async def exists_for_user(self, user_id: str) -> bool:
        result = await self._session.execute(
            select(exists().where(orders_tbl.c.user_id == user_id))
        )
        return bool(result.scalar())

    async def references_product(self, product_id: str) -> bool:
        result = await self._session.execute(
            select(exists().where(order_items_tbl.c.product_id == product_id))
        )
        return bool(result.scalar())

    async def _load(self, row) -> Order:
        items_result = await self._session.execute(
            select(order_items_tbl)
            .where(order_items_tbl.c.order_id == row.id)
            .order_by(order_items_tbl.c.position.asc())
        )
        shipping_result = await self._session.execute(
            select(shipping_infos_tbl).where(shipping_infos_tbl.c.order_id == row.id)
        )
        shipping_row = shipping_result.fetchone()
        return self._to_domain(row, items_result.fetchall(), shipping_row)

    def _to_domain(self, row, item_rows, shipping_row) -> Order:
        """Трансформация DB → Domain"""
        return Order(
            id=row.id,
            user_id=row.user_id,
            status=row.status,
            total_price=row.total_price,
            created_at=row.created_at,
            updated_at=row.updated_at,
            items=[
                OrderItem(
                    id=item.id,
                    order_id=item.order_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price
                )
                for item in item_rows
            ],
            shipping=_shipping_to_domain(shipping_row) if shipping_row else None
        )


class SQLAlchemyProductRepository(ProductRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, product_id: str, for_update: bool = False) -> Optional[Product]:
        stmt = select(products_tbl).where(products_tbl.c.id == product_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def list(self) -> List[Product]:
        result = await self._session.execute(
            select(products_tbl).order_by(products_tbl.c.name.asc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def create(self, product: Product) -> None:
        stmt = insert(products_tbl).values(id=product.id, **self._values(product))
        await self._session.execute(stmt)

    async def update(self, product: Product) -> None:
        stmt = (
            update(products_tbl)
            .where(products_tbl.c.id == product.id)
            .values(**self._values(product))
        )
        await self._session.execute(stmt)

    async def delete(self, product_id: str) -> None:
        await self._session.execute(
            delete(products_tbl).where(products_tbl.c.id == product_id)
        )

    async def decrement_stock(self, product_id: str, quantity: int) -> bool:
        # Условное списание: параллельный заказ не сможет увести остаток в минус
        stmt = (
            update(products_tbl)
            .where(
                products_tbl.c.id == product_id,
                products_tbl.c.stock_quantity >= quantity
            )
            .values(stock_quantity=products_tbl.c.stock_quantity - quantity)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    def _values(self, product: Product) -> dict:
        return dict(
            name=product.name,
            description=product.description,
            image_url=product.image_url,
            price=product.price,
            stock_quantity=product.stock_quantity,
            edition=product.edition,
            rarity=product.rarity,
            created_at=product.created_at,
            updated_at=product.updated_at
        )

    def _to_domain(self, row) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            image_url=row.image_url,
            price=row.price,
            stock_quantity=row.stock_quantity,
            edition=row.edition,
            rarity=row.rarity,
            created_at=row.created_at,
            updated_at=row.updated_at
        )


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = await self._session.execute(
            select(users_tbl).where(users_tbl.c.id == user_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(users_tbl).where(users_tbl.c.email == email)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def list(self) -> List[User]:
        result = await self._session.execute(
            select(users_tbl).order_by(users_tbl.c.username.asc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def create(self, user: User) -> None:
        stmt = insert(users_tbl).values(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role.as_db_value(),
            created_at=user.created_at,
            updated_at=user.updated_at
        )
        await self._execute_unique_email(stmt, user.email)

    async def update(self, user: User) -> None:
        stmt = (
            update(users_tbl)
            .where(users_tbl.c.id == user.id)
            .values(
                username=user.username,
                email=user.email,
                role=user.role.as_db_value(),
                updated_at=user.updated_at
            )
        )
        await self._execute_unique_email(stmt, user.email)

    async def delete(self, user_id: str) -> None:
        await self._session.execute(
            delete(users_tbl).where(users_tbl.c.id == user_id)
        )

    async def _execute_unique_email(self, stmt, email: str) -> None:
        # На email уникальный индекс, нарушение означает дубликат
        try:
            await self._session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateEntityError(f"Пользователь с email {email} уже существует") from e

    def _to_domain(self, row) -> User:
        return User(
            id=row.id,
            username=row.username,
            email=row.email,
            role=UserRole.parse(row.role),
            created_at=row.created_at,
            updated_at=row.updated_at
        )


class SQLAlchemyPaymentRepository(PaymentRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        result = await self._session.execute(
            select(payments_tbl).where(payments_tbl.c.id == payment_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def get_by_order_id(self, order_id: str) -> Optional[Payment]:
        result = await self._session.execute(
            select(payments_tbl).where(payments_tbl.c.order_id == order_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def list(self, order_id: Optional[str] = None) -> List[Payment]:
        stmt = select(payments_tbl).order_by(payments_tbl.c.created_at.desc())
        if order_id is not None:
            stmt = stmt.where(payments_tbl.c.order_id == order_id)
        result = await self._session.execute(stmt)
        return [self._to_domain(row) for row in result.fetchall()]

    async def create(self, payment: Payment) -> None:
        stmt = insert(payments_tbl).values(
            id=payment.id,
            order_id=payment.order_id,
            created_at=payment.created_at,
            **self._values(payment)
        )
        await self._session.execute(stmt)

    async def update(self, payment: Payment) -> None:
        stmt = (
            update(payments_tbl)
            .where(payments_tbl.c.id == payment.id)
            .values(**self._values(payment))
        )
        await self._session.execute(stmt)

    async def delete(self, payment_id: str) -> None:
        await self._session.execute(
            delete(payments_tbl).where(payments_tbl.c.id == payment_id)
        )

    def _values(self, payment: Payment) -> dict:
        return dict(
            amount=payment.amount,
            method=payment.method.as_db_value(),
            status=payment.status.as_db_value(),
            transaction_id=payment.transaction_id,
            completed_at=payment.completed_at
        )

    def _to_domain(self, row) -> Payment:
        return Payment(
            id=row.id,
            order_id=row.order_id,
            amount=row.amount,
            method=PaymentMethod.parse(row.method),
            status=PaymentStatus.parse(row.status),
            transaction_id=row.transaction_id,
            created_at=row.created_at,
            completed_at=row.completed_at
        )


class SQLAlchemyShippingInfoRepository(ShippingInfoRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, shipping_id: str) -> Optional[ShippingInfo]:
        result = await self._session.execute(
            select(shipping_infos_tbl).where(shipping_infos_tbl.c.id == shipping_id)
        )
        row = result.fetchone()
        return _shipping_to_domain(row) if row else None

    async def get_by_order_id(self, order_id: str) -> Optional[ShippingInfo]:
        result = await self._session.execute(
            select(shipping_infos_tbl).where(shipping_infos_tbl.c.order_id == order_id)
        )
        row = result.fetchone()
        return _shipping_to_domain(row) if row else None

    async def list(self) -> List[ShippingInfo]:
        result = await self._session.execute(select(shipping_infos_tbl))
        return [_shipping_to_domain(row) for row in result.fetchall()]

    async def create(self, shipping: ShippingInfo) -> None:
        stmt = insert(shipping_infos_tbl).values(
            id=shipping.id,
            order_id=shipping.order_id,
            **_shipping_values(shipping)
        )
        await self._session.execute(stmt)

    async def update(self, shipping: ShippingInfo) -> None:
        stmt = (
            update(shipping_infos_tbl)
            .where(shipping_infos_tbl.c.id == shipping.id)
            .values(**_shipping_values(shipping))
        )
        await self._session.execute(stmt)

    async def delete(self, shipping_id: str) -> None:
        await self._session.execute(
            delete(shipping_infos_tbl).where(shipping_infos_tbl.c.id == shipping_id)
        )


class SQLAlchemyShoppingCartRepository(ShoppingCartRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, cart_id: str) -> Optional[ShoppingCart]:
        result = await self._session.execute(
            select(shopping_carts_tbl).where(shopping_carts_tbl.c.id == cart_id)
        )
        row = result.fetchone()
        return await self._load(row) if row else None

    async def get_by_user_id(self, user_id: str) -> Optional[ShoppingCart]:
        result = await self._session.execute(
            select(shopping_carts_tbl).where(shopping_carts_tbl.c.user_id == user_id)
        )
        row = result.fetchone()
        return await self._load(row) if row else None

    async def create(self, cart: ShoppingCart) -> None:
        stmt = insert(shopping_carts_tbl).values(
            id=cart.id,
            user_id=cart.user_id,
            created_at=cart.created_at
        )
        await self._session.execute(stmt)

    async def delete_for_user(self, user_id: str) -> None:
        cart_ids = select(shopping_carts_tbl.c.id).where(shopping_carts_tbl.c.user_id == user_id)
        await self._session.execute(
            delete(shopping_cart_items_tbl).where(shopping_cart_items_tbl.c.cart_id.in_(cart_ids))
        )
        await self._session.execute(
            delete(shopping_carts_tbl).where(shopping_carts_tbl.c.user_id == user_id)
        )

    async def get_item(self, item_id: str) -> Optional[ShoppingCartItem]:
        result = await self._session.execute(
            select(shopping_cart_items_tbl).where(shopping_cart_items_tbl.c.id == item_id)
        )
        row = result.fetchone()
        return self._item_to_domain(row) if row else None

    async def add_item(self, item: ShoppingCartItem) -> None:
        stmt = insert(shopping_cart_items_tbl).values(
            id=item.id,
            cart_id=item.cart_id,
            product_id=item.product_id,
            quantity=item.quantity
        )
        await self._session.execute(stmt)

    async def remove_item(self, item_id: str) -> None:
        await self._session.execute(
            delete(shopping_cart_items_tbl).where(shopping_cart_items_tbl.c.id == item_id)
        )

    async def clear(self, cart_id: str) -> int:
        result = await self._session.execute(
            delete(shopping_cart_items_tbl).where(shopping_cart_items_tbl.c.cart_id == cart_id)
        )
        return result.rowcount

    async def remove_product(self, product_id: str) -> None:
        await self._session.execute(
            delete(shopping_cart_items_tbl).where(shopping_cart_items_tbl.c.product_id == product_id)
        )

    async def _load(self, row) -> ShoppingCart:
        items_result = await self._session.execute(
            select(shopping_cart_items_tbl).where(shopping_cart_items_tbl.c.cart_id == row.id)
        )
        return ShoppingCart(
            id=row.id,
            user_id=row.user_id,
            created_at=row.created_at,
            items=[self._item_to_domain(item) for item in items_result.fetchall()]
        )

    def _item_to_domain(self, row) -> ShoppingCartItem:
        return ShoppingCartItem(
            id=row.id,
            cart_id=row.cart_id,
            product_id=row.product_id,
            quantity=row.quantity
        )


class SQLAlchemyUserFavoriteRepository(UserFavoriteRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, favorite_id: str) -> Optional[UserFavorite]:
        result = await self._session.execute(
            select(user_favorites_tbl).where(user_favorites_tbl.c.id == favorite_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def list_by_user(self, user_id: str) -> List[UserFavorite]:
        result = await self._session.execute(
            select(user_favorites_tbl)
            .where(user_favorites_tbl.c.user_id == user_id)
            .order_by(user_favorites_tbl.c.added_at.asc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def exists(self, user_id: str, product_id: str) -> bool:
        result = await self._session.execute(
            select(user_favorites_tbl.c.id).where(
                user_favorites_tbl.c.user_id == user_id,
                user_favorites_tbl.c.product_id == product_id
            )
        )
        return result.fetchone() is not None

    async def create(self, favorite: UserFavorite) -> None:
        stmt = insert(user_favorites_tbl).values(
            id=favorite.id,
            user_id=favorite.user_id,
            product_id=favorite.product_id,
            added_at=favorite.added_at
        )
        await self._session.execute(stmt)

    async def delete(self, favorite_id: str) -> None:
        await self._session.execute(
            delete(user_favorites_tbl).where(user_favorites_tbl.c.id == favorite_id)
        )

    async def delete_for_user(self, user_id: str) -> None:
        await self._session.execute(
            delete(user_favorites_tbl).where(user_favorites_tbl.c.user_id == user_id)
        )

    async def delete_for_product(self, product_id: str) -> None:
        await self._session.execute(
            delete(user_favorites_tbl).where(user_favorites_tbl.c.product_id == product_id)
        )

    def _to_domain(self, row) -> UserFavorite:
        return UserFavorite(
            id=row.id,
            user_id=row.user_id,
            product_id=row.product_id,
            added_at=row.added_at
        )
