# app/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.middleware import CORS_HEADERS, build_middleware
from app.api.routers import health, users
from app.data.database import create_db_engine, init_db, make_session_factory
from app.domain.errors import (
    InvalidUserIdError,
    QueryTimeoutError,
    StorageError,
    UserNotFoundError,
)
from app.utils import settings
from app.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidUserIdError)
    async def invalid_id_handler(request: Request, exc: InvalidUserIdError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Invalid request body for {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse({"error": "invalid request body"}, status_code=400)

    @app.exception_handler(UserNotFoundError)
    async def not_found_handler(request: Request, exc: UserNotFoundError):
        return Response(status_code=404)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        return JSONResponse({"error": "internal server error"}, status_code=500)

    @app.exception_handler(QueryTimeoutError)
    async def timeout_handler(request: Request, exc: QueryTimeoutError):
        return JSONResponse({"error": "request timed out"}, status_code=504)

    # trafia do ServerErrorMiddleware, czyli poza nasze middleware: nagłówki ustawiamy tutaj
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error for {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            {"error": "internal server error"}, status_code=500, headers=CORS_HEADERS
        )


def create_app(database_url: str | None = None, request_timeout: float | None = None) -> FastAPI:
    """
    Buduje aplikację: engine, schemat, middleware i routery.
    Brak bazy albo błąd DDL przerywa start (bez retry).
    request_timeout to limit czasu każdego zapytania SQL (0 = bez limitu).
    """
    url = settings.require_database_url(database_url)
    if request_timeout is None:
        request_timeout = settings.REQUEST_TIMEOUT_SECONDS

    engine = create_db_engine(url, statement_timeout=request_timeout)
    try:
        init_db(engine)
    except Exception:
        engine.dispose()
        raise

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            logger.info("Disposing database engine")
            engine.dispose()

    app = FastAPI(
        title="Users API",
        version="1.0.0",
        lifespan=lifespan,
        middleware=build_middleware(),
    )
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)

    return app
