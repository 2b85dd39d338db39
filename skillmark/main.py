import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skillmark.core.config import Settings, settings as default_settings
from skillmark.core.log_config import configure_logging

# 1. Infrastructure & Domain Imports
from skillmark.domain.errors import OrderError, StorageError, ValidationError
from skillmark.infrastructure.repositories.order_repository import CsvOrderRepository, StoreConfig
from skillmark.application.order_service import OrderService
from skillmark.interfaces import orders_router

logger = logging.getLogger(__name__)


async def order_error_handler(request: Request, exc: OrderError):
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.__cause__ or exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # A body that is not a JSON object counts as "nothing sent";
    # a bad value in a named field is reported as invalid.
    field_errors = [
        e for e in exc.errors()
        if e.get("type") != "json_invalid" and len(e.get("loc", ())) > 1
    ]
    error = ValidationError("Invalid order fields") if field_errors else ValidationError()
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME)

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > settings.MAX_BODY_BYTES:
            logger.info(f"Rejected {request.method} {request.url.path}: body of {length} bytes")
            return JSONResponse(status_code=413, content={"error": "Request body too large"})
        return await call_next(request)

    # Outermost middleware, so 413 responses also carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------------------------------------
    # COMPOSITION ROOT
    # ---------------------------------------------------------
    order_repo = CsvOrderRepository(StoreConfig(csv_path=settings.ORDERS_CSV_PATH, encoding=settings.CSV_ENCODING))
    try:
        order_repo.initialize_sync()
    except StorageError as e:
        # Keep serving; the first append retries creating the file
        logger.error(f"Error initializing orders file: {e.__cause__ or e}")

    app.state.order_service = OrderService(order_repo=order_repo, order_timezone=settings.ORDER_TIMEZONE)

    app.add_exception_handler(OrderError, order_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include Routers
    app.include_router(orders_router.router)

    @app.get("/")
    def health_check():
        return {"ok": True, "service": settings.PROJECT_NAME}

    return app
