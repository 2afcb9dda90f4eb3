# boutique/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.db.database import get_db
from boutique.db.functions import add_product_to_cart, get_cart_items
from boutique.db.schemas import CartItem as CartItemSchema, CartItemAdd, CartResponse, CartUpdateResponse
from boutique.dependencies import get_current_user

router = APIRouter(tags=["cart"])


@router.get("/cart", response_model=CartResponse)
async def get_cart(claims: dict = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    items = await get_cart_items(db, claims["userId"])
    return CartResponse(cart=[CartItemSchema.model_validate(item) for item in items])


@router.post("/cart", response_model=CartUpdateResponse)
async def add_to_cart(payload: CartItemAdd, claims: dict = Depends(get_current_user),
                      db: AsyncSession = Depends(get_db)):
    items = await add_product_to_cart(db, claims["userId"], payload.product_id, payload.quantity)
    return CartUpdateResponse(
        message="Product added to cart",
        cart=[CartItemSchema.model_validate(item) for item in items],
    )
