import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.exceptions import ListingError
from app.core.logging_config import setup_logging
from app.api.endpoints import health, listings

setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info(f"Starting up {settings.PROJECT_NAME} (store backend: {settings.STORE_BACKEND})")

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Job listing record management API",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(listings.router, prefix=settings.API_V1_STR)
app.include_router(health.router)


@app.exception_handler(ListingError)
async def listing_error_handler(request: Request, exc: ListingError) -> JSONResponse:
    """Report job listing errors with the same body as the Lambda handlers"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests (e.g. a body that is not JSON) get a 400 message body"""
    logger.warning(f"{request.method} {request.url.path} rejected: malformed request")
    return JSONResponse(
        status_code=400,
        content={
            "message": "Request body must be valid JSON.",
            "errors": [".".join(str(part) for part in error["loc"]) for error in exc.errors()],
        },
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
