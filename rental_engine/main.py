import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rental_engine.api.dependencies import get_fee_settings_provider
from rental_engine.api.routers.availability import router as availability_router
from rental_engine.api.routers.health import router as health_router
from rental_engine.api.routers.pricing import router as pricing_router
from rental_engine.config import get_settings
from rental_engine.domain.errors import (
    AvailabilityConflict,
    CouponError,
    DomainError,
    FieldValidationError,
    SubmissionInProgressError,
    SubmissionRejected,
    TransientError,
    VehicleNotFoundError,
)

# Configure structured logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DOMAIN_ERROR_STATUS = {
    FieldValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    CouponError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    SubmissionRejected: status.HTTP_422_UNPROCESSABLE_ENTITY,
    VehicleNotFoundError: status.HTTP_404_NOT_FOUND,
    AvailabilityConflict: status.HTTP_409_CONFLICT,
    SubmissionInProgressError: status.HTTP_409_CONFLICT,
    TransientError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load remote fee settings once; defaults stay in place if the API is down
    await get_fee_settings_provider().refresh()
    yield


app = FastAPI(
    title="Rental Engine API",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = DOMAIN_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(
        "Domain error",
        extra={"code": exc.code, "path": request.url.path, "status_code": status_code},
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


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
app.include_router(pricing_router, prefix="/api/v1", tags=["Pricing"])
app.include_router(availability_router, prefix="/api/v1", tags=["Availability"])
