# boutique/main.py
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from boutique.config import Settings
from boutique.db.database import create_engine_and_sessionmaker, dispose_engine
from boutique.db.init_db import init_db
from boutique.db.seed import seed_demo_data
from boutique.errors import InternalError, ShopError
from boutique.logging_config import configure_logging, set_request_id
from boutique.routers import cart, catalog, health, orders, users

logger = logging.getLogger("boutique.main")


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # submitted values (passwords included) are never echoed back
        details = [
            {key: value for key, value in error.items() if key not in ("input", "ctx", "url")}
            for error in exc.errors()
        ]
        return _error(400, "Invalid request", details=jsonable_encoder(details))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return _error(exc.status_code, message)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("%s %s database failure", request.method, request.url.path, exc_info=exc)
        return _error(500, InternalError.default_message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("%s %s unhandled error", request.method, request.url.path, exc_info=exc)
        response = _error(500, InternalError.default_message)
        rid = getattr(request.state, "request_id", None)
        if rid:
            response.headers["x-request-id"] = rid
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    # Application lifespan: engine and session factory live on app.state
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        engine, session_factory = create_engine_and_sessionmaker(settings.database_url, echo=settings.db_echo)
        app.state.engine = engine
        app.state.session_factory = session_factory
        await init_db(engine)
        if settings.seed_demo_data:
            async with session_factory() as db:
                await seed_demo_data(db, settings)
        logger.info("Boutique API started")
        yield
        await dispose_engine(engine)
        logger.info("Boutique API stopped")

    app = FastAPI(title="Boutique API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = rid
        set_request_id(rid)
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = rid
            return response
        finally:
            logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path,
                        status_code, (time.perf_counter() - started) * 1000)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(health.api_router, prefix=settings.api_prefix)
    app.include_router(catalog.router, prefix=settings.api_prefix)
    app.include_router(users.router, prefix=settings.api_prefix)
    app.include_router(cart.router, prefix=settings.api_prefix)
    app.include_router(orders.router, prefix=settings.api_prefix)

    return app


def run():
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(create_app(), host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
