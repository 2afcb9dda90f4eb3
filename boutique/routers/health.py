# boutique/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.db.database import get_db
from boutique.db.functions import count_orders, count_products, count_users

router = APIRouter(tags=["health"])
api_router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness check."""
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@api_router.get("/test")
async def api_status(db: AsyncSession = Depends(get_db)):
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "productsCount": await count_products(db),
        "usersCount": await count_users(db),
        "ordersCount": await count_orders(db),
    }
