import time
import traceback
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.products import router as products_router
from app.cache.factory import get_cache_backend
from app.core.config import Settings, get_settings
from app.core.db import (
    check_database_connection,
    create_engine_from_settings,
    create_session_factory,
    init_models,
)
from app.core.exceptions import ServerException
from app.core.seed import seed_products
from app.logging.setup import get_logger, setup_logging

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    settings: Settings = app.state.settings
    logger.info("Starting products catalog API...")

    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)
    await init_models(engine)

    if not await check_database_connection(session_factory):
        logger.error("Database connection failed! Requests will fail until it recovers.")

    if settings.SEED_DATABASE:
        async with session_factory() as session:
            await seed_products(session)

    cache = await get_cache_backend(settings=settings)

    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.cache = cache

    try:
        yield
    finally:
        logger.info("Shutting down products catalog API...")
        await cache.close()
        await engine.dispose()


def create_main_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the main FastAPI application."""
    settings = settings or get_settings()
    setup_logging(settings)
    logger.info("Initializing FastAPI application...")

    app = FastAPI(**settings.fastapi_kwargs, lifespan=lifespan)
    app.state.settings = settings

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        """Add a unique request ID and process time to each request."""
        request_id = str(uuid.uuid4())
        start_time = time.time()
        request.state.request_id = request_id
        request.state.start_time = start_time

        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)
        return response

    if settings.BACKEND_CORS_ORIGINS:
        logger.debug(f"Configuring CORS with origins: {settings.BACKEND_CORS_ORIGINS}")
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
            allow_methods=settings.CORS_ALLOW_METHODS,
            allow_headers=settings.CORS_ALLOW_HEADERS,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Global exception handler: lỗi không xử lý (ví dụ database lỗi) được
        ghi log kèm traceback và trả về 500 với error_id để theo dõi.
        """
        # Lỗi đi xuyên qua middleware nên header được gắn tại đây
        error_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
        start_time = getattr(request.state, "start_time", None) or time.time()
        logger.error(
            f"Unhandled exception - ID: {error_id} - Path: {request.url.path}",
            extra={
                "error_id": error_id,
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
                "error_type": exc.__class__.__name__,
            },
        )
        logger.error(f"Traceback for {error_id}:\n{traceback.format_exc()}")

        server_error = ServerException()
        content = server_error.to_response()
        content.update(
            {
                "error_id": error_id,
                "type": exc.__class__.__name__,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )
        if settings.DEBUG:
            content["detail"] = str(exc)

        return JSONResponse(
            status_code=server_error.status_code,
            content=content,
            headers={
                "X-Request-ID": error_id,
                "X-Process-Time": str(time.time() - start_time),
            },
        )

    app.include_router(products_router)

    logger.info(
        f"FastAPI application initialized. Available at http://{settings.SERVER_HOST}:{settings.SERVER_PORT}"
    )
    return app


# Create the main app instance
app = create_main_app()

if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    logger.info(f"Starting server at {_settings.SERVER_HOST}:{_settings.SERVER_PORT}")
    uvicorn.run(
        "app.main:app",
        host=_settings.SERVER_HOST,
        port=_settings.SERVER_PORT,
        reload=_settings.DEBUG,
    )
