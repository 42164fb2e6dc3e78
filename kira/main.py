"""
FastAPI application entry point for Kira backend.

This module creates the FastAPI app instance, owns the application context
lifecycle (built on startup, closed on shutdown) and registers all routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from kira.config import settings
from kira.context import create_app_context
from kira.errors import InvalidInput, KiraError, NotFound
from kira.routes.chat import router as chat_router
from kira.routes.health import router as health_router
from kira.routes.invoices import router as invoices_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = "GET, POST, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization"


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ORIGINS (no wildcard allowed)
    - Otherwise: Allows all origins for local dev
    """
    if settings.is_production():
        origins = [origin.strip() for origin in settings.CORS_ORIGINS if origin.strip() and origin.strip() != "*"]
        if not origins:
            logger.warning(
                "CORS_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ORIGINS for web clients."
            )
        else:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the application context once and close it on shutdown."""
    app.state.context = create_app_context(settings)
    try:
        yield
    finally:
        app.state.context.close()


# Create FastAPI app
app = FastAPI(
    title="Kira API",
    description="AI carbon consultant and invoice pipeline for Malaysian SMEs",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Missing or invalid request fields are a 400, not FastAPI's default 422.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {len(exc.errors())} errors"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "validation_error",
            "message": "Missing or invalid request fields",
            "details": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.code, "message": str(exc)},
    )


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": exc.code, "message": str(exc)},
    )


@app.exception_handler(KiraError)
async def kira_error_handler(request: Request, exc: KiraError):
    logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.code, "message": str(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Store, SDK or programming errors outside the KiraError hierarchy.

    The exception text is logged but not returned to the client.
    """
    logger.exception(f"{request.method} {request.url.path} failed: {type(exc).__name__}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": KiraError.code, "message": "Internal server error"},
    )


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# Registered after CORSMiddleware so it runs first: every OPTIONS request,
# preflight or not, is answered with 204 and the CORS headers.
@app.middleware("http")
async def options_no_content(request: Request, call_next):
    if request.method != "OPTIONS":
        return await call_next(request)

    origin = request.headers.get("origin")
    if "*" in cors_origins:
        allow_origin = "*"
    elif origin in cors_origins:
        allow_origin = origin
    else:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
            "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        },
    )


# Register routers
app.include_router(health_router)
app.include_router(chat_router)
app.include_router(invoices_router)

logger.info("FastAPI app initialized successfully")
