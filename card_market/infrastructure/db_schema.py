from sqlalchemy import (
    Table, Column, String, Integer, Numeric, DateTime, MetaData, ForeignKey, UniqueConstraint,
)
from sqlalchemy.sql import func

metadata = MetaData()

# Enum-поля храним строками, разбор делают репозитории через parse()

users_tbl = Table(
    "users",
    metadata,
    Column("id", String, primary_key=True),
    Column("username", String(50), nullable=False),
    Column("email", String, nullable=False, unique=True, index=True),
    Column("role", String, nullable=False, default="Customer"),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


products_tbl = Table(
    "products",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("description", String, nullable=False, default=""),
    Column("image_url", String, nullable=False, default=""),
    Column("price", Numeric(10, 2), nullable=False),
    Column("stock_quantity", Integer, nullable=False, default=0),
    Column("edition", String, nullable=False, default=""),
    Column("rarity", String, nullable=False, default=""),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


orders_tbl = Table(
    "orders",
    metadata,
    Column("id", String, primary_key=True),
    Column("user_id", String, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True),
    Column("status", String, nullable=False, default="pending"),
    Column("total_price", Numeric(10, 2), nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


order_items_tbl = Table(
    "order_items",
    metadata,
    Column("id", String, primary_key=True),
    Column("order_id", String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("product_id", String, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    Column("position", Integer, nullable=False, default=0)
)


payments_tbl = Table(
    "payments",
    metadata,
    Column("id", String, primary_key=True),
    Column("order_id", String, ForeignKey("orders.id", ondelete="RESTRICT"), nullable=False, unique=True),
    Column("amount", Numeric(10, 2), nullable=False, default=0),
    Column("method", String, nullable=False, default="CreditCard"),
    Column("status", String, nullable=False, default="Pending"),
    Column("transaction_id", String, nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("completed_at", DateTime(timezone=True), nullable=True)
)


shipping_infos_tbl = Table(
    "shipping_infos",
    metadata,
    Column("id", String, primary_key=True),
    Column("order_id", String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("address", String, nullable=False, default=""),
    Column("city", String, nullable=False, default=""),
    Column("state", String, nullable=False, default=""),
    Column("country", String, nullable=False, default=""),
    Column("postal_code", String, nullable=False, default=""),
    Column("shipping_cost", Numeric(10, 2), nullable=False, default=0),
    Column("status", String, nullable=False, default="Preparing"),
    Column("tracking_number", String, nullable=False, default=""),
    Column("estimated_delivery", DateTime(timezone=True), nullable=True),
    Column("shipped_date", DateTime(timezone=True), nullable=True),
    Column("delivered_date", DateTime(timezone=True), nullable=True)
)


shopping_carts_tbl = Table(
    "shopping_carts",
    metadata,
    Column("id", String, primary_key=True),
    Column("user_id", String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now())
)


shopping_cart_items_tbl = Table(
    "shopping_cart_items",
    metadata,
    Column("id", String, primary_key=True),
    Column("cart_id", String, ForeignKey("shopping_carts.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("product_id", String, ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
    Column("quantity", Integer, nullable=False)
)


user_favorites_tbl = Table(
    "user_favorites",
    metadata,
    Column("id", String, primary_key=True),
    Column("user_id", String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("product_id", String, ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
    Column("added_at", DateTime(timezone=True), server_default=func.now()),
    UniqueConstraint("user_id", "product_id", name="uq_user_favorites_user_product")
)
