"""Metrics and monitoring API endpoints."""

import os

import psutil
from fastapi import APIRouter

from ..config import get_settings
from ..models.response import MetricsResponse

router = APIRouter(prefix="/api/v1", tags=["metrics"])
settings = get_settings()

# Import the global catalogue instance
from ..engine_instance import catalog


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get query counters of the search engine and process memory usage"
)
def get_metrics() -> MetricsResponse:
    """Get performance metrics for the search engine."""
    stats = catalog.engine.get_stats()

    process = psutil.Process(os.getpid())
    memory_usage_mb = process.memory_info().rss / (1024 * 1024)

    return MetricsResponse(
        total_queries=stats["total_queries"],
        average_response_time_ms=stats["average_execution_time_ms"],
        match_rate=stats["match_rate"],
        no_match_rate=stats["no_match_rate"],
        total_suggestions=stats["total_suggestions"],
        indexed_products=len(catalog.index),
        memory_usage_mb=memory_usage_mb
    )


@router.post(
    "/metrics/reset",
    summary="Reset metrics",
    description="Reset the query counters of the search engine"
)
def reset_metrics() -> dict:
    """Reset engine query statistics."""
    catalog.engine.reset_stats()
    return {"status": "reset"}
