"""FastAPI application factory and setup."""

import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.api.http.routers.service.book import router as book_router
from src.bookstore.api.utils.app_startup import configure_logging
from src.bookstore.core.exceptions import PersistenceError
from src.bookstore.core.services import DbManageService, DbSessionService
from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.context import get_config

__all__ = ["app", "create_app", "startup", "shutdown"]


# --- Lifecycle hooks ---
def startup(app: FastAPI, config: ConfigData) -> ApplicationDependencies:
    """Open the database, ensure the schema exists and publish the dependencies."""
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config.database)
    DbManageService(database_service.engine).create_all()

    deps = ApplicationDependencies(config=config, database_service=database_service)
    app.state.app_dependencies = deps
    return deps


def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or "-"


async def _log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")

        response.headers.setdefault("X-Request-ID", request_id)
        return response


async def _persistence_error_handler(
    request: Request, exc: PersistenceError
) -> JSONResponse:
    request_id = _request_id(request)
    logger.bind(request_id=request_id, error_type=type(exc).__name__).error(
        "Persistence failure: {}", exc
    )
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "request_id": request_id},
    )


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application for ``config`` (the current context config by default)."""
    config = config or get_config()
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        startup(app, config)
        try:
            yield
        finally:
            shutdown(app)

    docs_enabled = config.app.docs_enabled
    application = FastAPI(
        title="Bookstore API",
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    application.middleware("http")(_log_requests)
    application.add_exception_handler(PersistenceError, _persistence_error_handler)

    # --- Router registration ---
    application.include_router(book_router, prefix="/book", tags=["books"])

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # Request logging is done by the middleware
    )
