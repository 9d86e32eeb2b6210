"""Per-product token index built once per product set."""

import time
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from ..models.product import Product
from .normalizer import TextNormalizer


class IndexEntry(BaseModel):
    """Pre-tokenized title and description of one product."""

    model_config = ConfigDict(frozen=True)

    title_tokens: Tuple[str, ...] = ()
    description_tokens: Tuple[str, ...] = ()
    normalized_title: str = ""
    normalized_description: str = ""
    all_tokens: Tuple[str, ...] = ()  # title tokens, then description tokens

    @classmethod
    def from_product(cls, product: Product, normalizer: TextNormalizer) -> "IndexEntry":
        """
        Tokenize a product's searchable text.

        Args:
            product: Product to index
            normalizer: Normalizer shared with query tokenization

        Returns:
            IndexEntry for the product
        """
        title = product.title or ""
        description = product.description or ""
        title_tokens = tuple(normalizer.tokenize(title))
        description_tokens = tuple(normalizer.tokenize(description))

        return cls(
            title_tokens=title_tokens,
            description_tokens=description_tokens,
            normalized_title=normalizer.normalize(title),
            normalized_description=normalizer.normalize(description),
            all_tokens=title_tokens + description_tokens,
        )


class SearchIndex:
    """
    Read-only sequence of index entries.

    Entry ``i`` belongs to product ``i`` of the collection the index was
    built from, so scores map back to products by position.
    """

    def __init__(self, entries: Sequence[IndexEntry]) -> None:
        """
        Initialize the index.

        Args:
            entries: One entry per product, in product order
        """
        self._entries: Tuple[IndexEntry, ...] = tuple(entries)
        self._vocabulary: Optional[Tuple[str, ...]] = None
        self._stats = {
            "total_entries": len(self._entries),
            "total_tokens": sum(len(entry.all_tokens) for entry in self._entries),
            "built_at": time.time()
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, position: int) -> IndexEntry:
        return self._entries[position]

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    @property
    def vocabulary(self) -> Tuple[str, ...]:
        """Distinct tokens across all entries, in first-occurrence order."""
        if self._vocabulary is None:
            seen: Dict[str, None] = {}
            for entry in self._entries:
                for token in entry.all_tokens:
                    seen.setdefault(token, None)
            self._vocabulary = tuple(seen)
        return self._vocabulary

    def get_stats(self) -> Dict[str, Any]:
        """Get index statistics."""
        stats = self._stats.copy()
        stats["vocabulary_size"] = len(self.vocabulary)
        return stats


def build_index(
    products: Sequence[Product],
    normalizer: Optional[TextNormalizer] = None
) -> SearchIndex:
    """
    Build the search index for a product collection.

    Missing text fields produce empty token sequences; building never fails
    on malformed text.

    Args:
        products: Products in the order results should map back to
        normalizer: Normalizer shared with query tokenization

    Returns:
        SearchIndex with one entry per product
    """
    normalizer = normalizer or TextNormalizer()
    entries: List[IndexEntry] = [
        IndexEntry.from_product(product, normalizer) for product in products
    ]
    return SearchIndex(entries)
