# boutique/db/functions/cart.py
import logging
from typing import List, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from boutique.db.database import commit_or_raise
from boutique.db.functions.catalog import get_product_by_id
from boutique.db.functions.users import get_user_by_id
from boutique.db.models import MAX_QUANTITY, CartItem
from boutique.errors import InternalError, ValidationError

logger = logging.getLogger("boutique.cart")


async def get_cart_items(db: AsyncSession, user_id: str) -> List[CartItem]:
    """
    Return the user's cart lines in insertion order.
    """
    await get_user_by_id(db, user_id)

    result = await db.execute(
        select(CartItem)
        .filter(CartItem.user_id == user_id)
        .order_by(CartItem.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def _increment_quantity(db: AsyncSession, user_id: str, product_id: str, quantity: int) -> bool:
    # single UPDATE so concurrent increments on the same row cannot overwrite each other
    result = await db.execute(
        update(CartItem)
        .where(CartItem.user_id == user_id, CartItem.product_id == product_id)
        .values(quantity=CartItem.quantity + quantity)
    )
    return result.rowcount > 0


# Add a product to the cart
async def add_product_to_cart(db: AsyncSession, user_id: str, product_id: str,
                              quantity: Optional[int] = None) -> List[CartItem]:
    if not quantity or quantity < 1:
        quantity = 1
    if quantity > MAX_QUANTITY:
        raise ValidationError("Quantity is too large")

    await get_user_by_id(db, user_id)
    product = await get_product_by_id(db, product_id)

    if await _increment_quantity(db, user_id, product_id, quantity):
        await commit_or_raise(db, "add_product_to_cart")
        logger.debug("add_product_to_cart user=%s product=%s: +%s", user_id, product_id, quantity)
        return await get_cart_items(db, user_id)

    # not in the cart yet: insert a new line with a price snapshot
    db.add(CartItem(
        user_id=user_id,
        product_id=product.id,
        name=product.name,
        price=product.price,
        image=product.image,
        quantity=quantity,
    ))
    try:
        await commit_or_raise(db, "add_product_to_cart")
    except IntegrityError:
        logger.debug("add_product_to_cart user=%s product=%s: lost insert race, incrementing", user_id, product_id)
        if not await _increment_quantity(db, user_id, product_id, quantity):
            raise InternalError()
        await commit_or_raise(db, "add_product_to_cart")

    logger.debug("add_product_to_cart user=%s product=%s: new entry x%s", user_id, product_id, quantity)
    return await get_cart_items(db, user_id)


async def clear_user_cart(db: AsyncSession, user_id: str) -> None:
    """Empty the user's cart. Commit is left to the caller's transaction."""
    await db.execute(delete(CartItem).where(CartItem.user_id == user_id))
