"""Response models for search results and API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .product import Product


class ScoredResult(BaseModel):
    """A product together with its relevance for one query."""

    product: Product = Field(..., description="The matched product")
    score: float = Field(..., description="Relevance score")
    matched_terms: int = Field(0, description="Query terms matched by the product")
    coverage: float = Field(0.0, ge=0.0, le=1.0, description="Fraction of query terms matched")


class SearchResponse(BaseModel):
    """Response for catalogue search queries."""

    query: str = Field(..., description="Original search query")
    tokens: List[str] = Field(default_factory=list, description="Query tokens used for matching")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    total_results: int = Field(..., description="Total number of results before windowing")
    results: List[ScoredResult] = Field(..., description="Ranked search results")
    suggestions: Optional[List[str]] = Field(None, description="Alternative terms if few results")
    summary: str = Field("", description="Human-readable result summary")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class SuggestionResponse(BaseModel):
    """Response for "did you mean" lookups."""

    query: str = Field(..., description="Original query")
    suggestions: List[str] = Field(..., description="Suggested terms in discovery order")
    execution_time_ms: float = Field(..., description="Lookup time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class FacetsResponse(BaseModel):
    """Available filter values for the loaded catalogue."""

    total_products: int = Field(..., description="Number of products in the catalogue")
    brands: List[str] = Field(..., description="Sorted distinct brands")
    categories: List[str] = Field(..., description="Sorted distinct categories")
    category_attributes: Dict[str, List[str]] = Field(..., description="Attribute names per category")


class AttributeValuesResponse(BaseModel):
    """Attribute values available for a set of categories."""

    categories: List[str] = Field(..., description="Selected categories")
    attributes: Dict[str, List[str]] = Field(..., description="Sorted values per attribute")
    labels: Dict[str, str] = Field(default_factory=dict, description="Display name per attribute")
    value_labels: Dict[str, Dict[str, str]] = Field(
        default_factory=dict, description="Display name per attribute value"
    )


class ReloadResponse(BaseModel):
    """Response for catalogue reloads."""

    total_products: int = Field(..., description="Products loaded")
    index_stats: Dict[str, Any] = Field(..., description="Statistics of the rebuilt index")
    execution_time_ms: float = Field(..., description="Reload time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""

    total_queries: int = Field(..., description="Total queries processed")
    average_response_time_ms: float = Field(..., description="Average response time")
    match_rate: float = Field(..., description="Share of filtered queries with results")
    no_match_rate: float = Field(..., description="Share of filtered queries without results")
    total_suggestions: int = Field(..., description="Suggestion lookups served")
    indexed_products: int = Field(..., description="Products in the current index")
    memory_usage_mb: float = Field(..., description="Process memory usage in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
