"""Search and suggestion API endpoints."""

import time
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from ..config import get_settings
from ..exceptions import InvalidFilterError
from ..models.request import CatalogFilters, SearchRequest, SuggestRequest
from ..models.response import SearchResponse, SuggestionResponse

router = APIRouter(prefix="/api/v1", tags=["search"])
settings = get_settings()

# Import the global catalogue instance
from ..engine_instance import catalog


def _split(values: Optional[List[str]]) -> List[str]:
    """Accept both repeated and comma-separated query parameters."""
    items: List[str] = []
    for value in values or []:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def _check_query_length(query: str) -> None:
    """Reject queries longer than the configured maximum."""
    if len(query) > settings.max_query_length:
        raise HTTPException(
            status_code=422,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )


def _run_search(request: SearchRequest) -> SearchResponse:
    _check_query_length(request.query)
    try:
        return catalog.query(
            request.query,
            filters=request.filters,
            limit=request.limit,
            offset=request.offset,
            include_suggestions=request.include_suggestions
        )
    except InvalidFilterError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search products",
    description="Rank catalogue products by relevance to a free-text query"
)
def search_products(
    q: str = Query("", description="Search query; blank lists every product"),
    brands: Optional[List[str]] = Query(None, description="Brands to keep"),
    categories: Optional[List[str]] = Query(None, description="Categories to keep"),
    price_min: Optional[float] = Query(None, ge=0.0, description="Minimum price in EUR"),
    price_max: Optional[float] = Query(None, ge=0.0, description="Maximum price in EUR"),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum results to return"),
    offset: int = Query(0, ge=0, description="Results to skip"),
    include_suggestions: bool = Query(True, description="Include suggestions when nothing matches")
) -> SearchResponse:
    """
    Search products with a free-text query.

    Blank queries list the whole catalogue in confidence order. Facet
    filters are applied after ranking.
    """
    request = SearchRequest(
        query=q,
        filters=CatalogFilters(
            brands=_split(brands),
            categories=_split(categories),
            price_min=price_min,
            price_max=price_max
        ),
        limit=limit,
        offset=offset,
        include_suggestions=include_suggestions
    )
    return _run_search(request)


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Search with request body",
    description="Search products using a structured request body, including attribute filters"
)
def search_with_body(request: SearchRequest) -> SearchResponse:
    """Search products using a structured request body."""
    return _run_search(request)


@router.get(
    "/suggest",
    response_model=SuggestionResponse,
    summary="Did-you-mean suggestions",
    description="Find indexed terms similar to, or containing, the query terms"
)
def suggest_terms(
    q: str = Query(..., min_length=1, description="Query to find alternatives for"),
    max_suggestions: int = Query(5, ge=0, le=50, description="Maximum number of suggestions")
) -> SuggestionResponse:
    """Suggest alternative terms for a query."""
    _check_query_length(q)
    try:
        request = SuggestRequest(query=q, max_suggestions=max_suggestions)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    start_time = time.time()
    suggestions = catalog.engine.suggest(request.query, catalog.index, request.max_suggestions)
    return SuggestionResponse(
        query=request.query,
        suggestions=suggestions,
        execution_time_ms=(time.time() - start_time) * 1000
    )
