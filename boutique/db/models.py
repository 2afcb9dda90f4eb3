# boutique/db/models.py
import uuid
from datetime import datetime, timezone
from enum import Enum as PyEnum

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from boutique.db.database import Base


# storage limits; money columns are 64-bit, quantities and stock 32-bit
MAX_PRICE = 10**12
MAX_STOCK = 2**31 - 1
MAX_QUANTITY = 10_000
MAX_ORDER_TOTAL = 2**63 - 1


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# User roles
class RoleEnum(str, PyEnum):
    customer = "customer"
    admin = "admin"


class OrderStatus(str, PyEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, PyEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Product(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(BigInteger, nullable=False)  # smallest currency unit
    category = Column(String, index=True, nullable=False)
    image = Column(String, nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(RoleEnum), nullable=False, default=RoleEnum.customer)
    address = Column(JSON, nullable=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # cart lines in insertion order
    cart_items = relationship(
        "CartItem",
        back_populates="user",
        order_by="CartItem.id",
        cascade="all, delete-orphan",
    )
    orders = relationship("Order", back_populates="user")


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_cart_items_user_product"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    # no FK: the snapshot outlives the product
    product_id = Column(String(32), nullable=False)
    name = Column(String, nullable=False)
    price = Column(BigInteger, nullable=False)
    image = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False, default=1)

    user = relationship("User", back_populates="cart_items")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    total_amount = Column(BigInteger, nullable=False)
    status = Column(Enum(OrderStatus), nullable=False, default=OrderStatus.PENDING)
    shipping_address = Column(JSON, nullable=True)
    payment_method = Column(String, nullable=False)
    payment_status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.id",
        cascade="all, delete-orphan",
    )


# Order line items
class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(32), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(32), nullable=False)
    name = Column(String, nullable=False)
    price = Column(BigInteger, nullable=False)
    image = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")
