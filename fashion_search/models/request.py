"""Request models for API endpoints."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, validator


class CatalogFilters(BaseModel):
    """Facet filters applied on top of search results."""

    brands: List[str] = Field(default_factory=list, description="Allowed brands")
    categories: List[str] = Field(default_factory=list, description="Allowed categories")
    price_min: Optional[float] = Field(None, ge=0.0, description="Minimum price in EUR")
    price_max: Optional[float] = Field(None, ge=0.0, description="Maximum price in EUR")
    attributes: Dict[str, List[str]] = Field(
        default_factory=dict, description="Allowed values per attribute"
    )

    @validator('brands', 'categories')
    def strip_values(cls, v: List[str]) -> List[str]:
        """Drop blank entries."""
        return [value.strip() for value in v if value and value.strip()]

    @validator('attributes')
    def drop_empty_attributes(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Drop attributes without any selected value."""
        return {name: values for name, values in v.items() if values}

    @property
    def is_empty(self) -> bool:
        return not (
            self.brands or self.categories or self.attributes
            or self.price_min is not None or self.price_max is not None
        )


class SearchRequest(BaseModel):
    """Request model for search queries."""

    query: str = Field(default="", description="Search query; blank lists everything")
    filters: CatalogFilters = Field(default_factory=CatalogFilters, description="Facet filters")
    limit: Optional[int] = Field(None, ge=1, le=500, description="Maximum results to return")
    offset: int = Field(default=0, ge=0, description="Results to skip")
    include_suggestions: bool = Field(
        default=True, description="Whether to include suggestions when results are scarce"
    )

    @validator('query', pre=True)
    def validate_query(cls, v: Optional[str]) -> str:
        """Treat a missing query as blank."""
        return (v or "").strip()


class SuggestRequest(BaseModel):
    """Request model for suggestion lookups."""

    query: str = Field(..., min_length=1, description="Query to find alternatives for")
    max_suggestions: int = Field(default=5, ge=0, le=50, description="Maximum number of suggestions")

    @validator('query')
    def validate_query(cls, v: str) -> str:
        """Validate and normalize query input."""
        if not v or not v.strip():
            raise ValueError("Query cannot be empty")
        return v.strip()
