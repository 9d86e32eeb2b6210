"""Unit tests for the index data structures."""

import pytest
from pydantic import ValidationError

from fashion_search.core.index import IndexEntry, SearchIndex, build_index
from fashion_search.core.normalizer import TextNormalizer
from fashion_search.models.product import Product


class TestIndexEntry:
    """Test cases for the IndexEntry class."""

    @pytest.fixture
    def normalizer(self):
        """Create a normalizer instance for testing."""
        return TextNormalizer()

    def test_from_product(self, normalizer):
        """Test tokenizing a product's title and description."""
        product = Product(title="Floral Dress", description="Summer floral pattern")
        entry = IndexEntry.from_product(product, normalizer)

        assert entry.title_tokens == ("floral", "dress")
        assert entry.description_tokens == ("summer", "floral", "pattern")
        assert entry.normalized_title == "floral dress"
        assert entry.normalized_description == "summer floral pattern"
        assert entry.all_tokens == ("floral", "dress", "summer", "floral", "pattern")

    def test_missing_description(self, normalizer):
        """Missing text degrades to empty sequences."""
        product = Product.from_record({"original_data": {"title": "Woven Straw Tote", "description": None}})
        entry = IndexEntry.from_product(product, normalizer)

        assert entry.title_tokens == ("woven", "straw", "tote")
        assert entry.description_tokens == ()
        assert entry.normalized_description == ""
        assert entry.all_tokens == entry.title_tokens

    def test_entry_is_immutable(self, normalizer):
        """Index entries cannot be modified after creation."""
        entry = IndexEntry.from_product(Product(title="Linen Dress"), normalizer)

        with pytest.raises(ValidationError):
            entry.normalized_title = "changed"


class TestSearchIndex:
    """Test cases for building and reading the SearchIndex."""

    @pytest.fixture
    def products(self):
        """Sample products for testing."""
        return [
            Product(id="1", title="Floral Dress", description="Summer floral pattern"),
            Product(id="2", title="Linen Dress", description="Linen for summer"),
            Product(id="3", title="", description=""),
        ]

    def test_one_entry_per_product(self, products):
        """Entries correspond to products by position."""
        index = build_index(products)

        assert len(index) == len(products)
        assert index[0].title_tokens == ("floral", "dress")
        assert index[1].title_tokens == ("linen", "dress")
        assert index[2].all_tokens == ()

    def test_iteration_order(self, products):
        """Iterating yields entries in product order."""
        index = build_index(products)
        titles = [entry.normalized_title for entry in index]

        assert titles == ["floral dress", "linen dress", ""]

    def test_empty_collection(self):
        """An empty collection builds an empty index."""
        index = build_index([])

        assert len(index) == 0
        assert index.vocabulary == ()

    def test_vocabulary_first_occurrence_order(self, products):
        """Vocabulary lists each token once, in discovery order."""
        index = build_index(products)

        assert index.vocabulary == ("floral", "dress", "summer", "pattern", "linen")

    def test_shared_normalizer(self, products):
        """The supplied normalizer's rules are used."""
        index = build_index(products, TextNormalizer(stop_words=["dress"]))

        assert index[0].title_tokens == ("floral",)
        assert "for" in index[1].description_tokens

    def test_get_stats(self, products):
        """Test index statistics."""
        stats = build_index(products).get_stats()

        assert stats["total_entries"] == 3
        assert stats["total_tokens"] == 9
        assert stats["vocabulary_size"] == 5
        assert stats["built_at"] is not None

    def test_direct_construction(self):
        """An index can be built from ready-made entries."""
        entries = [IndexEntry(title_tokens=("silk",), all_tokens=("silk",), normalized_title="silk")]
        index = SearchIndex(entries)

        assert len(index) == 1
        assert index.vocabulary == ("silk",)
