# boutique/db/init_db.py
from sqlalchemy.ext.asyncio import AsyncEngine

from boutique.db.database import Base
from boutique.db import models  # noqa: F401  registers the tables on Base.metadata


async def init_db(engine: AsyncEngine):
    async with engine.begin() as conn:
        # Create all tables
        await conn.run_sync(Base.metadata.create_all)
