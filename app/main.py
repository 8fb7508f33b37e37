# app/main.py

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.companies import router as companies_router
from app.api.invoices import router as invoices_router
from app.config import get_settings
from app.exceptions import ApiError, StorageError, ValidationError
from app.models.common import HealthResponse

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def _render(exc: ApiError, headers=None) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    The single place errors turn into HTTP responses.
    """

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError):
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return _render(exc)

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError):
        logger.error(
            "%s %s -> storage error",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _render(StorageError())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning("%s %s -> invalid request: %s", request.method, request.url.path, exc.errors())
        return _render(ValidationError("Request body or path parameter is malformed"))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _render(
            ApiError(str(exc.detail), status_code=exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("%s %s -> unhandled error", request.method, request.url.path, exc_info=exc)
        return _render(ApiError())


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
    )

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        return HealthResponse()

    app.include_router(companies_router)
    app.include_router(invoices_router)
    register_exception_handlers(app)

    return app


app = create_app()
