# boutique/db/database.py
import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from boutique.errors import InternalError

logger = logging.getLogger("boutique.db")

# Declarative base for the models
Base = declarative_base()


async def commit_or_raise(db: AsyncSession, action: str) -> None:
    """Commit the current transaction; on failure roll back and raise InternalError.

    IntegrityError is re-raised untouched so callers can map unique-key
    violations to a domain error.
    """
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise
    except SQLAlchemyError:
        logger.exception("Commit failed during %s, transaction rolled back", action)
        await db.rollback()
        raise InternalError()


def create_engine_and_sessionmaker(database_url: str, echo: bool = False):
    """Build the async engine and the session factory bound to it."""
    engine = create_async_engine(database_url, echo=echo)
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return engine, session_factory


async def dispose_engine(engine: AsyncEngine) -> None:
    await engine.dispose()


# Session dependency
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.session_factory() as session:
        yield session
