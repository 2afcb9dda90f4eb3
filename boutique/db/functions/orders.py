# boutique/db/functions/orders.py
import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from boutique.db.database import commit_or_raise
from boutique.db.functions.cart import clear_user_cart
from boutique.db.functions.users import get_user_by_id
from boutique.db.models import MAX_ORDER_TOTAL, CartItem, Order, OrderItem, OrderStatus, PaymentStatus, new_id
from boutique.errors import NotFoundError, ValidationError

logger = logging.getLogger("boutique.orders")


# Create a new order
async def create_order(db: AsyncSession, user_id: str, shipping_address: dict, payment_method: str) -> Order:
    """
    Turn the user's cart into an order and empty the cart.

    The cart read, the order insert and the cart delete share one transaction,
    so either the order exists and the cart is empty or nothing changed.
    """
    await get_user_by_id(db, user_id)

    result = await db.execute(
        select(CartItem)
        .filter(CartItem.user_id == user_id)
        .order_by(CartItem.id)
        .with_for_update()
    )
    cart_items = result.scalars().all()
    if not cart_items:
        raise ValidationError("Cart is empty")

    total_amount = sum(item.price * item.quantity for item in cart_items)
    if total_amount > MAX_ORDER_TOTAL:
        raise ValidationError("Order total is too large")
    new_order = Order(
        id=new_id(),
        user_id=user_id,
        total_amount=total_amount,
        status=OrderStatus.PENDING,
        shipping_address=shipping_address,
        payment_method=payment_method,
        payment_status=PaymentStatus.PENDING,
        items=[
            OrderItem(
                product_id=item.product_id,
                name=item.name,
                price=item.price,
                image=item.image,
                quantity=item.quantity,
            )
            for item in cart_items
        ],
    )
    db.add(new_order)
    await clear_user_cart(db, user_id)
    await commit_or_raise(db, "create_order")

    logger.info("Order %s placed by user %s: %s items, total %s",
                new_order.id, user_id, len(new_order.items), total_amount)
    return new_order


# List all orders of a user
async def get_user_orders(db: AsyncSession, user_id: str) -> List[Order]:
    await get_user_by_id(db, user_id)
    result = await db.execute(
        select(Order)
        .filter(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id)
        .options(selectinload(Order.items))
    )
    return list(result.scalars().all())


# Get one order with its items
async def get_order_with_items(db: AsyncSession, user_id: str, order_id: str) -> Order:
    result = await db.execute(
        select(Order)
        .filter(Order.id == order_id, Order.user_id == user_id)
        .options(selectinload(Order.items))
    )
    order = result.scalar_one_or_none()
    if not order:
        raise NotFoundError("Order not found")
    return order


async def count_orders(db: AsyncSession) -> int:
    return await db.scalar(select(func.count()).select_from(Order)) or 0
