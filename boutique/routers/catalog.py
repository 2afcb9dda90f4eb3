# boutique/routers/catalog.py
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.db.database import get_db
from boutique.db.functions import (
    create_product,
    delete_product,
    get_all_categories,
    get_all_products,
    get_product_by_id,
    update_product,
)
from boutique.db.functions.catalog import DEFAULT_PAGE_SIZE, MAX_PAGE
from boutique.db.schemas import Message, Product as ProductSchema, ProductCreate, ProductPage, ProductUpdate
from boutique.dependencies import require_admin

router = APIRouter(tags=["catalog"])


@router.get("/products", response_model=ProductPage)
async def read_products(
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    products, total = await get_all_products(
        db, category=category, featured=featured, search=search, page=page, limit=limit
    )
    return ProductPage(
        products=[ProductSchema.model_validate(p) for p in products],
        total=total,
        total_pages=math.ceil(total / limit),
        current_page=page,
    )


@router.get("/products/{product_id}", response_model=ProductSchema)
async def read_product(product_id: str, db: AsyncSession = Depends(get_db)):
    product = await get_product_by_id(db, product_id)
    return ProductSchema.model_validate(product)


@router.get("/categories")
async def read_categories(db: AsyncSession = Depends(get_db)):
    return {"categories": await get_all_categories(db)}


@router.post("/products", response_model=ProductSchema, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_new_product(product: ProductCreate, db: AsyncSession = Depends(get_db)):
    new_product = await create_product(db, product.model_dump())
    return ProductSchema.model_validate(new_product)


@router.put("/products/{product_id}", response_model=ProductSchema, dependencies=[Depends(require_admin)])
async def update_existing_product(product_id: str, product: ProductUpdate, db: AsyncSession = Depends(get_db)):
    # explicit nulls are ignored, every product column is mandatory
    changes = product.model_dump(exclude_unset=True, exclude_none=True)
    updated_product = await update_product(db, product_id, changes)
    return ProductSchema.model_validate(updated_product)


@router.delete("/products/{product_id}", response_model=Message, dependencies=[Depends(require_admin)])
async def delete_existing_product(product_id: str, db: AsyncSession = Depends(get_db)):
    await delete_product(db, product_id)
    return Message(message="Product deleted")
