# boutique/routers/orders.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.db.database import get_db
from boutique.db.functions import create_order, get_order_with_items, get_user_orders
from boutique.db.schemas import Order as OrderSchema, OrderCreate, OrderCreated, OrderList
from boutique.dependencies import get_current_user

router = APIRouter(tags=["orders"])


@router.post("/orders", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
async def place_order(payload: OrderCreate, claims: dict = Depends(get_current_user),
                      db: AsyncSession = Depends(get_db)):
    new_order = await create_order(
        db,
        claims["userId"],
        shipping_address=payload.shipping_address.model_dump(by_alias=True, exclude_none=True),
        payment_method=payload.payment_method,
    )
    return OrderCreated(message="Order created successfully", order_id=new_order.id)


@router.get("/orders", response_model=OrderList)
async def list_orders(claims: dict = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    orders = await get_user_orders(db, claims["userId"])
    return OrderList(orders=[OrderSchema.model_validate(o) for o in orders])


@router.get("/orders/{order_id}", response_model=OrderSchema)
async def read_order(order_id: str, claims: dict = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    order = await get_order_with_items(db, claims["userId"], order_id)
    return OrderSchema.model_validate(order)
