"""Data models for the fashion catalogue search service."""

from .product import Product
from .request import CatalogFilters, SearchRequest, SuggestRequest
from .response import (
    ScoredResult,
    SearchResponse,
    SuggestionResponse,
    FacetsResponse,
    AttributeValuesResponse,
    ReloadResponse,
    ErrorResponse,
)

__all__ = [
    "Product",
    "CatalogFilters",
    "SearchRequest",
    "SuggestRequest",
    "ScoredResult",
    "SearchResponse",
    "SuggestionResponse",
    "FacetsResponse",
    "AttributeValuesResponse",
    "ReloadResponse",
    "ErrorResponse",
]
