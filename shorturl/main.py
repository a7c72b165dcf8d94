"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware and exception handlers.
"""

import os
import time

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from shorturl.api import api_router
from shorturl.core.config import settings
from shorturl.core.logging import setup_logging
from shorturl.db.base import create_tables, dispose_engine
from shorturl.middleware.logging import LoggingMiddleware

# Ensure logs directory exists
os.makedirs(settings.LOG_DIR, exist_ok=True)

# Setup logging
logger = setup_logging()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.REQUEST_LOGGING_ENABLED:
    app.add_middleware(LoggingMiddleware)

# Include API router
app.include_router(api_router)


# Add exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    if exc.status_code >= 500:
        logger.bind(status_code=exc.status_code, detail=exc.detail).error(
            f"Request failed: {request.method} {request.url.path}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed information."""
    logger.error(f"Request validation error: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation error", "errors": exc.errors()}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"
    error_location = f"{request.method} {request.url.path}"

    logger.bind(
        error_id=error_id,
        url=str(request.url),
        method=request.method,
        path_params=request.path_params,
        client_host=request.client.host if request.client else None
    ).opt(exception=exc).error(f"Unhandled exception in {error_location}")

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error occurred",
            "error_id": error_id,
            "message": str(exc) if settings.DEBUG else "Internal server error"
        }
    )


@app.on_event("startup")
async def startup_event():
    """Run startup tasks."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    if settings.DB_CREATE_TABLES_ON_STARTUP:
        await create_tables()


@app.on_event("shutdown")
async def shutdown_event():
    """Run cleanup tasks."""
    logger.info(f"Shutting down {settings.APP_NAME}")
    await dispose_engine()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    logger.info(f"Listening on port {settings.PORT}")
    uvicorn.run(
        "shorturl.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
