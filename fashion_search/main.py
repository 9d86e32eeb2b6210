"""Main FastAPI application for the fashion catalogue search service."""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .api import (
    search_router,
    catalog_router,
    health_router,
    metrics_router,
)
from .config import get_settings
from .engine_instance import catalog
from .exceptions import CatalogError, CatalogLoadError
from .logging_config import configure_logging
from .models.response import ErrorResponse

settings = get_settings()
configure_logging(settings)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting fashion catalogue search service", version=settings.app_version)

    try:
        total = catalog.load_file(settings.products_path)
        logger.info("Catalogue ready", total_products=total, source=catalog.source)
    except CatalogLoadError as e:
        logger.error("Failed to load catalogue", path=e.path, reason=e.reason)
        raise

    yield

    # Shutdown
    logger.info("Shutting down fashion catalogue search service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Relevance-ranked, typo-tolerant search over a fashion product catalogue",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    return response


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Handle catalogue errors that escaped the routers."""
    logger.warning(
        "Catalogue error",
        method=request.method,
        url=str(request.url),
        error=str(exc)
    )

    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=type(exc).__name__,
            message=str(exc)
        ).model_dump(mode="json")
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(search_router)
app.include_router(catalog_router)
app.include_router(health_router)
app.include_router(metrics_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Relevance-ranked, typo-tolerant search over a fashion product catalogue",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


# API info endpoint
@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "search": "/api/v1/search?q={query}",
            "suggest": "/api/v1/suggest?q={query}",
            "facets": "/api/v1/facets",
            "attribute_values": "/api/v1/facets/attributes?categories={category}",
            "reload": "/api/v1/catalog/reload",
            "health": "/api/v1/health",
            "metrics": "/api/v1/metrics"
        },
        "features": [
            "Stop-word aware tokenization",
            "Typo tolerance via normalized edit distance",
            "Stacked title and description relevance scoring",
            "Coverage bonus for multi-word queries",
            "Did-you-mean suggestions",
            "Brand, category, price and attribute filters"
        ],
        "scoring": {
            "title_exact": settings.weight_title_exact,
            "title_fuzzy": settings.weight_title_fuzzy,
            "description_exact": settings.weight_description_exact,
            "description_fuzzy": settings.weight_description_fuzzy,
            "title_phrase": settings.weight_title_phrase,
            "description_phrase": settings.weight_description_phrase,
            "coverage": settings.weight_coverage
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fashion_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
