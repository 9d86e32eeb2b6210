"""Product catalogue: dataset loading, facets and filtered search."""

import json
import os
import re
import time
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

import structlog
from pydantic import ValidationError

from .core.engine import SearchEngine
from .core.index import SearchIndex
from .exceptions import CatalogLoadError, InvalidFilterError
from .models.product import Product
from .models.request import CatalogFilters
from .models.response import ScoredResult, SearchResponse

logger = structlog.get_logger(__name__)

DEFAULT_PRODUCTS_PATH = os.path.join(os.path.dirname(__file__), "data", "sample_products.json")

# Suggestions shown inline in the summary line
SUMMARY_SUGGESTIONS = 3


def format_attribute_name(attribute: str) -> str:
    """Turn ``sleeve_length`` into ``Sleeve Length``."""
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), attribute.replace('_', ' '))


def format_attribute_value(value: Optional[str]) -> str:
    """Turn ``LONG_SLEEVE`` into ``Long Sleeve``."""
    if not value:
        return ""
    return format_attribute_name(value.lower())


class ProductCatalog:
    """
    Owns the loaded products and their search index.

    Products are kept sorted by confidence score, highest first, which is
    also the order of a query that filters nothing. The products and their
    index are swapped together whenever the collection is replaced.
    """

    def __init__(
        self,
        engine: SearchEngine,
        max_suggestions: int = 5,
        suggestion_result_limit: int = 0
    ) -> None:
        """
        Initialize an empty catalogue.

        Args:
            engine: Search engine used for indexing and querying
            max_suggestions: Suggestions attached to scarce results
            suggestion_result_limit: Attach suggestions at or below this many results
        """
        self.engine = engine
        self.max_suggestions = max_suggestions
        self.suggestion_result_limit = suggestion_result_limit
        self._snapshot: Tuple[Tuple[Product, ...], SearchIndex] = ((), SearchIndex([]))
        self._brands: List[str] = []
        self._categories: List[str] = []
        self._category_attributes: Dict[str, List[str]] = {}
        self.source: Optional[str] = None

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._snapshot[0]

    @property
    def index(self) -> SearchIndex:
        return self._snapshot[1]

    def __len__(self) -> int:
        return len(self.products)

    def load_file(self, path: Optional[str] = None) -> int:
        """
        Load products from a JSON dataset file.

        Args:
            path: Dataset path (the bundled sample when None)

        Returns:
            Number of products loaded

        Raises:
            CatalogLoadError: If the file is missing, not a JSON list, or holds
                a record that is not a valid product
        """
        path = path or DEFAULT_PRODUCTS_PATH
        try:
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except FileNotFoundError:
            raise CatalogLoadError(path, "file not found")
        except json.JSONDecodeError as e:
            raise CatalogLoadError(path, f"invalid JSON: {e}")

        if not isinstance(records, list):
            raise CatalogLoadError(path, "expected a JSON list of products")

        count = self.load_records(records, source=path)
        self.source = path
        logger.info("Products loaded", path=path, total_products=count)
        return count

    def load_records(self, records: Iterable[Dict[str, Any]], source: str = "<records>") -> int:
        """
        Load products from raw dataset records.

        Every record is parsed before the catalogue changes, so a bad record
        leaves the current products in place.

        Args:
            records: Raw product records
            source: Name of the dataset used in error messages

        Returns:
            Number of products loaded

        Raises:
            CatalogLoadError: If a record cannot be parsed into a product
        """
        products = []
        for position, record in enumerate(records):
            try:
                products.append(Product.from_record(record))
            except (ValidationError, AttributeError, TypeError) as e:
                raise CatalogLoadError(source, f"invalid record {position}: {e}")
        return self.replace(products)

    def replace(self, products: Iterable[Product]) -> int:
        """
        Replace the product collection and rebuild the index.

        Args:
            products: New products, in any order

        Returns:
            Number of products now in the catalogue
        """
        ordered = tuple(sorted(products, key=lambda p: -(p.confidence_score or 0.0)))
        index = self.engine.build_index(ordered)
        self._compute_facets(ordered)
        self._snapshot = (ordered, index)
        return len(ordered)

    @property
    def brands(self) -> List[str]:
        return list(self._brands)

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    @property
    def category_attributes(self) -> Dict[str, List[str]]:
        return {category: list(names) for category, names in self._category_attributes.items()}

    def attribute_values(self, categories: Sequence[str]) -> Dict[str, List[str]]:
        """
        Collect attribute values offered by products of the given categories.

        Args:
            categories: Selected categories

        Returns:
            Sorted distinct values per attribute name, attribute names sorted
        """
        values: Dict[str, Set[str]] = {}
        selected = set(categories)
        for category in selected:
            for attribute in self._category_attributes.get(category, []):
                values.setdefault(attribute, set())

        for product in self.products:
            if product.category not in selected:
                continue
            for attribute, value in product.attributes.items():
                if attribute in values and value:
                    values[attribute].add(value)

        return {attribute: sorted(values[attribute]) for attribute in sorted(values)}

    def query(
        self,
        query: Optional[str],
        filters: Optional[CatalogFilters] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        include_suggestions: bool = True
    ) -> SearchResponse:
        """
        Search the catalogue and apply facet filters.

        Args:
            query: Raw user query; blank lists every product
            filters: Facet filters applied after ranking
            limit: Maximum results to return
            offset: Results to skip
            include_suggestions: Attach suggestions when results are scarce

        Returns:
            SearchResponse with ranked, filtered results

        Raises:
            InvalidFilterError: If price_min exceeds price_max
        """
        start_time = time.time()
        query = (query or "").strip()
        filters = filters or CatalogFilters()
        if (filters.price_min is not None and filters.price_max is not None
                and filters.price_min > filters.price_max):
            raise InvalidFilterError(
                f"price_min ({filters.price_min}) is greater than price_max ({filters.price_max})"
            )

        products, index = self._snapshot
        results = self.engine.search(query, index, products)
        if not filters.is_empty:
            results = self.apply_filters(results, filters)

        tokens = self.engine.tokenize(query)
        suggestions = None
        if include_suggestions and query and len(results) <= self.suggestion_result_limit:
            suggestions = self.engine.suggest(query, index, self.max_suggestions)

        window = results[offset:offset + limit] if limit is not None else results[offset:]
        execution_time = (time.time() - start_time) * 1000

        return SearchResponse(
            query=query,
            tokens=tokens,
            execution_time_ms=execution_time,
            total_results=len(results),
            results=window,
            suggestions=suggestions,
            summary=self.build_summary(query, tokens, len(results), suggestions),
        )

    def apply_filters(
        self,
        results: Sequence[ScoredResult],
        filters: CatalogFilters
    ) -> List[ScoredResult]:
        """
        Keep results whose product passes every filter, preserving rank.

        Products without a price are never excluded by the price range. A
        product lacking a filtered attribute is excluded.
        """
        brands = set(filters.brands)
        categories = set(filters.categories)
        attributes = {name: set(values) for name, values in filters.attributes.items()}

        def passes(product: Product) -> bool:
            if brands and product.brand not in brands:
                return False
            if categories and product.category not in categories:
                return False
            price = product.price_eur
            if price:
                if filters.price_min is not None and price < filters.price_min:
                    return False
                if filters.price_max is not None and price > filters.price_max:
                    return False
            for name, allowed in attributes.items():
                value = product.attributes.get(name)
                if not value or value not in allowed:
                    return False
            return True

        return [result for result in results if passes(result.product)]

    @staticmethod
    def build_summary(
        query: str,
        tokens: Sequence[str],
        total_results: int,
        suggestions: Optional[Sequence[str]] = None
    ) -> str:
        """Describe a search outcome in one line."""
        if not query:
            return ""

        summary = f'{total_results} results for "{query}"'
        if len(tokens) > 1:
            summary += f" (searching: {', '.join(tokens)})"
        if total_results == 0 and suggestions:
            summary += f". Did you mean: {', '.join(suggestions[:SUMMARY_SUGGESTIONS])}?"
        return summary

    def get_stats(self) -> Dict[str, Any]:
        """Get catalogue statistics."""
        return {
            "source": self.source,
            "total_products": len(self.products),
            "total_brands": len(self._brands),
            "total_categories": len(self._categories),
            "index_stats": self.index.get_stats()
        }

    def _compute_facets(self, products: Sequence[Product]) -> None:
        brands: Set[str] = set()
        categories: Set[str] = set()
        category_attributes: Dict[str, Set[str]] = {}

        for product in products:
            if product.brand:
                brands.add(product.brand)
            if product.category:
                categories.add(product.category)
                names = category_attributes.setdefault(product.category, set())
                names.update(name for name, value in product.attributes.items() if value)

        self._brands = sorted(brands)
        self._categories = sorted(categories)
        self._category_attributes = {
            category: sorted(names) for category, names in category_attributes.items()
        }
