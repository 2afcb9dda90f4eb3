# boutique/db/functions/catalog.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import distinct, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from boutique.db.database import commit_or_raise
from boutique.db.models import Product
from boutique.errors import NotFoundError

logger = logging.getLogger("boutique.catalog")

DEFAULT_PAGE_SIZE = 12
MAX_PAGE = 1_000_000


def _product_filters(category: Optional[str], featured: Optional[bool], search: Optional[str]) -> list:
    filters = []
    if category and category != "all":
        filters.append(Product.category == category)
    if featured is not None:
        filters.append(Product.featured == featured)
    if search:
        filters.append(or_(
            Product.name.icontains(search, autoescape=True),
            Product.description.icontains(search, autoescape=True),
        ))
    return filters


# List products with filters and pagination
async def get_all_products(
    db: AsyncSession,
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> Tuple[List[Product], int]:
    """Return one page of matching products and the total number of matches."""
    filters = _product_filters(category, featured, search)

    total = await db.scalar(select(func.count()).select_from(Product).where(*filters))
    result = await db.execute(
        select(Product)
        .where(*filters)
        .order_by(Product.name, Product.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    products = result.scalars().all()
    logger.debug("get_all_products category=%s featured=%s search=%r page=%s -> %s/%s",
                 category, featured, search, page, len(products), total)
    return list(products), total or 0


# Get a single product
async def get_product_by_id(db: AsyncSession, product_id: str) -> Product:
    result = await db.execute(select(Product).filter(Product.id == product_id))
    product = result.scalar_one_or_none()
    if not product:
        raise NotFoundError("Product not found")
    return product


async def get_all_categories(db: AsyncSession) -> List[str]:
    result = await db.execute(select(distinct(Product.category)).order_by(Product.category))
    return list(result.scalars().all())


async def count_products(db: AsyncSession) -> int:
    return await db.scalar(select(func.count()).select_from(Product)) or 0


# Create a new product
async def create_product(db: AsyncSession, product_data: dict) -> Product:
    new_product = Product(**product_data)
    db.add(new_product)
    await commit_or_raise(db, "create_product")
    await db.refresh(new_product)
    logger.info("Product %s created: %s", new_product.id, new_product.name)
    return new_product


# Update a product
async def update_product(db: AsyncSession, product_id: str, changes: dict) -> Product:
    product = await get_product_by_id(db, product_id)
    for key, value in changes.items():
        setattr(product, key, value)
    await commit_or_raise(db, "update_product")
    await db.refresh(product)
    logger.info("Product %s updated: %s", product_id, sorted(changes))
    return product


# Delete a product
async def delete_product(db: AsyncSession, product_id: str) -> None:
    product = await get_product_by_id(db, product_id)
    await db.delete(product)
    await commit_or_raise(db, "delete_product")
    logger.info("Product %s deleted", product_id)
