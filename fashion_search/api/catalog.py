"""Catalogue facet and maintenance API endpoints."""

import time
from typing import List

import structlog
from fastapi import APIRouter, HTTPException, Query

from ..catalog import format_attribute_name, format_attribute_value
from ..config import get_settings
from ..exceptions import CatalogLoadError
from ..models.response import AttributeValuesResponse, FacetsResponse, ReloadResponse

router = APIRouter(prefix="/api/v1", tags=["catalog"])
settings = get_settings()
logger = structlog.get_logger(__name__)

# Import the global catalogue instance
from ..engine_instance import catalog


@router.get(
    "/facets",
    response_model=FacetsResponse,
    summary="Get filter facets",
    description="Get the brands, categories and per-category attributes of the loaded catalogue"
)
def get_facets() -> FacetsResponse:
    """Get the filter facets of the loaded catalogue."""
    return FacetsResponse(
        total_products=len(catalog),
        brands=catalog.brands,
        categories=catalog.categories,
        category_attributes=catalog.category_attributes
    )


@router.get(
    "/facets/attributes",
    response_model=AttributeValuesResponse,
    summary="Get attribute values",
    description="Get the attribute values offered by products of the selected categories"
)
def get_attribute_values(
    categories: List[str] = Query(..., description="Selected categories")
) -> AttributeValuesResponse:
    """Get attribute values for the selected categories."""
    selected = [part.strip() for value in categories for part in value.split(",") if part.strip()]
    unknown = [category for category in selected if category not in catalog.categories]
    if unknown:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown categories: {', '.join(unknown)}"
        )

    attributes = catalog.attribute_values(selected)
    return AttributeValuesResponse(
        categories=selected,
        attributes=attributes,
        labels={name: format_attribute_name(name) for name in attributes},
        value_labels={
            name: {value: format_attribute_value(value) for value in values}
            for name, values in attributes.items()
        }
    )


@router.post(
    "/catalog/reload",
    response_model=ReloadResponse,
    summary="Reload the catalogue",
    description="Reload the product dataset and rebuild the search index"
)
def reload_catalog() -> ReloadResponse:
    """Reload products from disk and rebuild the index."""
    start_time = time.time()
    try:
        total = catalog.load_file(settings.products_path)
    except CatalogLoadError as e:
        logger.warning("Catalogue reload failed", path=e.path, reason=e.reason)
        raise HTTPException(status_code=500, detail=str(e))

    return ReloadResponse(
        total_products=total,
        index_stats=catalog.index.get_stats(),
        execution_time_ms=(time.time() - start_time) * 1000
    )
