"""Unit tests for the product catalogue service."""

import json

import pytest

from fashion_search.catalog import (
    DEFAULT_PRODUCTS_PATH,
    ProductCatalog,
    format_attribute_name,
    format_attribute_value,
)
from fashion_search.core.engine import SearchEngine
from fashion_search.exceptions import CatalogLoadError, InvalidFilterError
from fashion_search.models.product import Product
from fashion_search.models.request import CatalogFilters


class TestProductCatalog:
    """Test cases for the ProductCatalog class."""

    @pytest.fixture
    def catalog(self):
        """Catalogue loaded with the bundled sample dataset."""
        catalog = ProductCatalog(SearchEngine(), max_suggestions=5, suggestion_result_limit=0)
        catalog.load_file()
        return catalog

    def test_load_sample(self, catalog):
        """The bundled dataset loads and is indexed."""
        assert len(catalog) == 12
        assert len(catalog.index) == 12
        assert catalog.source == DEFAULT_PRODUCTS_PATH

    def test_products_sorted_by_confidence(self, catalog):
        """Products are ordered by confidence score, highest first."""
        scores = [p.confidence_score for p in catalog.products]

        assert scores == sorted(scores, reverse=True)
        assert catalog.products[0].id == "p-1003"
        assert catalog.products[-1].id == "p-1012"

    def test_record_parsing(self, catalog):
        """Nested records are flattened into products."""
        dress = next(p for p in catalog.products if p.id == "p-1001")

        assert dress.title == "Floral Wrap Dress"
        assert dress.brand == "Maison Lune"
        assert dress.category == "dresses"
        assert dress.attributes["pattern"] == "FLORAL"
        assert dress.images_url == ["https://cdn.example.com/p-1001-front.jpg"]

        tote = next(p for p in catalog.products if p.id == "p-1012")
        assert tote.description == ""
        assert tote.price_eur is None
        assert tote.confidence_score == 0.0

    def test_facets(self, catalog):
        """Brands and categories are sorted and distinct."""
        assert catalog.brands == ["Atelier Bleu", "Fjellheim", "Maison Lune", "Nordvik", "Pietra"]
        assert catalog.categories == [
            "bags", "dresses", "jeans", "knitwear", "outerwear", "shoes", "tops"
        ]
        assert catalog.category_attributes["dresses"] == ["color", "pattern", "sleeve_length"]
        assert catalog.category_attributes["bags"] == []

    def test_attribute_values(self, catalog):
        """Attribute values are collected for the selected categories only."""
        values = catalog.attribute_values(["dresses"])

        assert values == {
            "color": ["BEIGE", "PINK"],
            "pattern": ["FLORAL", "SOLID"],
            "sleeve_length": ["SHORT_SLEEVE", "SLEEVELESS"],
        }
        assert catalog.attribute_values([]) == {}

    def test_query_ranks_by_relevance(self, catalog):
        """The strongest match comes first."""
        response = catalog.query("floral")
        ids = [r.product.id for r in response.results]

        assert ids[0] == "p-1001"
        assert "p-1009" in ids
        assert response.tokens == ["floral"]
        assert response.suggestions is None
        assert response.summary == f'{response.total_results} results for "floral"'

    def test_blank_query_lists_catalogue(self, catalog):
        """A blank query returns every product in confidence order."""
        response = catalog.query("")

        assert response.total_results == 12
        assert [r.product.id for r in response.results] == [p.id for p in catalog.products]
        assert response.summary == ""

    def test_brand_filter(self, catalog):
        """Brand filters keep the confidence order."""
        response = catalog.query("", CatalogFilters(brands=["Maison Lune"]))

        assert [r.product.id for r in response.results] == ["p-1001", "p-1009", "p-1006"]

    def test_category_filter_on_search(self, catalog):
        """Filters apply after ranking."""
        response = catalog.query("floral", CatalogFilters(categories=["tops"]))

        assert [r.product.id for r in response.results] == ["p-1009"]

    def test_price_filter_keeps_unpriced_products(self, catalog):
        """Products without a price are not excluded by price."""
        response = catalog.query("", CatalogFilters(price_max=60))

        assert [r.product.id for r in response.results] == ["p-1008", "p-1010", "p-1012"]

    def test_attribute_filter(self, catalog):
        """Products lacking the attribute are excluded."""
        response = catalog.query("", CatalogFilters(attributes={"pattern": ["FLORAL"]}))

        assert [r.product.id for r in response.results] == ["p-1001", "p-1009"]

    def test_invalid_price_range(self, catalog):
        """An inverted price range is rejected."""
        with pytest.raises(InvalidFilterError):
            catalog.query("", CatalogFilters(price_min=100, price_max=50))

    def test_no_results_with_suggestion(self, catalog):
        """Suggestions are attached when nothing matches."""
        response = catalog.query("swetr")

        assert response.total_results == 0
        assert response.suggestions == ["sweater"]
        assert response.summary == '0 results for "swetr". Did you mean: sweater?'

    def test_no_results_without_suggestions(self, catalog):
        """Suggestions can be turned off."""
        response = catalog.query("swetr", include_suggestions=False)

        assert response.suggestions is None
        assert response.summary == '0 results for "swetr"'

    def test_multi_token_summary(self, catalog):
        """Multi-token queries list their tokens."""
        response = catalog.query("denim jeans")

        assert response.summary.endswith("(searching: denim, jeans)")

    def test_windowing(self, catalog):
        """limit and offset window the results but not the total."""
        response = catalog.query("", limit=5, offset=10)

        assert response.total_results == 12
        assert len(response.results) == 2

    def test_replace_rebuilds_index(self, catalog):
        """Replacing products swaps in a new index."""
        old_index = catalog.index
        catalog.replace([Product(id="x", title="Velvet Blazer", confidence_score=0.5)])

        assert catalog.index is not old_index
        assert len(catalog) == 1
        assert catalog.brands == []
        assert [r.product.id for r in catalog.query("velvet").results] == ["x"]

    def test_load_missing_file(self, catalog, tmp_path):
        """A missing dataset raises CatalogLoadError."""
        with pytest.raises(CatalogLoadError):
            catalog.load_file(str(tmp_path / "missing.json"))

    def test_load_invalid_json(self, catalog, tmp_path):
        """Invalid JSON raises CatalogLoadError and keeps the old products."""
        path = tmp_path / "broken.json"
        path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(CatalogLoadError):
            catalog.load_file(str(path))
        assert len(catalog) == 12

    def test_load_non_list(self, catalog, tmp_path):
        """A JSON object instead of a list is rejected."""
        path = tmp_path / "object.json"
        path.write_text(json.dumps({"title": "Dress"}), encoding="utf-8")

        with pytest.raises(CatalogLoadError):
            catalog.load_file(str(path))

    @pytest.mark.parametrize("records", [
        [{"original_data": {"title": "Silk Scarf", "price_eur": "n/a"}}],
        ["not a record"],
        [{"id": "ok", "original_data": {"title": "Wool Coat"}}, 42],
    ])
    def test_load_invalid_record(self, catalog, tmp_path, records):
        """Malformed records raise CatalogLoadError and keep the old products."""
        path = tmp_path / "records.json"
        path.write_text(json.dumps(records), encoding="utf-8")

        with pytest.raises(CatalogLoadError) as exc_info:
            catalog.load_file(str(path))

        assert exc_info.value.path == str(path)
        assert "invalid record" in exc_info.value.reason
        assert len(catalog) == 12

    def test_load_records_invalid_record(self, catalog):
        """Records loaded directly report the invalid position."""
        with pytest.raises(CatalogLoadError) as exc_info:
            catalog.load_records([{"title": "Wool Coat"}, {"title": "Rain Coat", "price_eur": "n/a"}])

        assert "invalid record 1" in exc_info.value.reason

    def test_load_flat_records(self, catalog):
        """Flat records load as well as nested ones."""
        count = catalog.load_records([
            {"id": 1, "title": "Wool Coat", "brand": "Fjellheim", "confidence_score": 0.4},
            {"id": 2, "title": "Rain Coat", "brand": "Nordvik", "confidence_score": 0.6},
        ])

        assert count == 2
        assert [p.id for p in catalog.products] == ["2", "1"]

    def test_get_stats(self, catalog):
        """Test catalogue statistics."""
        stats = catalog.get_stats()

        assert stats["total_products"] == 12
        assert stats["total_brands"] == 5
        assert stats["index_stats"]["total_entries"] == 12


class TestFormatting:
    """Test cases for attribute label formatting."""

    def test_format_attribute_name(self):
        assert format_attribute_name("sleeve_length") == "Sleeve Length"
        assert format_attribute_name("color") == "Color"

    def test_format_attribute_value(self):
        assert format_attribute_value("LONG_SLEEVE") == "Long Sleeve"
        assert format_attribute_value(None) == ""
