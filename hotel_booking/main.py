import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hotel_booking.api.deps import engine
from hotel_booking.api.routers.bookings import router as bookings_router
from hotel_booking.api.routers.catalog import router as catalog_router
from hotel_booking.api.routers.health import router as health_router
from hotel_booking.api.routers.worker import router as worker_router
from hotel_booking.config import get_settings
from hotel_booking.domain.errors import (
    CapacityError,
    ConflictError,
    DomainError,
    InvalidRangeError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
    UpstreamTimeoutError,
    ValidationError,
)
from hotel_booking.infrastructure.db.seed import seed_catalog
from hotel_booking.infrastructure.db.tables import metadata
from hotel_booking.infrastructure.in_memory import SAMPLE_CATEGORIES, SAMPLE_HOTELS, SAMPLE_ROOMS

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Orden relevante: las subclases antes que sus bases
DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (InvalidRangeError, 422),
    (CapacityError, 422),
    (ValidationError, 422),
    (NotFoundError, 404),
    (ConflictError, 409),
    (InvalidStateError, 409),
    (UnauthorizedError, 403),
    (UpstreamTimeoutError, 504),
]


def status_for(exc: DomainError) -> int:
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if not settings.use_in_memory:
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
            if settings.seed_sample_catalog:
                await seed_catalog(conn, SAMPLE_HOTELS, SAMPLE_CATEGORIES, SAMPLE_ROOMS)
    yield
    # Cleanup
    await engine.dispose()

app = FastAPI(
    title="Hotel Booking API",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = status_for(exc)
    log = logger.warning if status_code >= 500 else logger.info
    log(
        "Domain error",
        extra={"code": exc.code, "path": request.url.path, "method": request.method},
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": exc.code})


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(catalog_router, prefix="/api/v1", tags=["Catalog"])
app.include_router(bookings_router, prefix="/api/v1", tags=["Bookings"])
app.include_router(worker_router, prefix="/api/v1", tags=["Worker"])
