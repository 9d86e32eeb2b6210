"""
Fashion Search - relevance-ranked, typo-tolerant search for a fashion product catalogue.

This package tokenizes product titles and descriptions once into a positional
index, scores free-text queries against it with stacked exact, fuzzy and
phrase bonuses plus a coverage bonus, and proposes "did you mean" terms when
a query finds nothing.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .core.index import SearchIndex, build_index
from .models.product import Product
from .models.response import ScoredResult

__all__ = [
    "SearchEngine",
    "SearchIndex",
    "build_index",
    "Product",
    "ScoredResult",
]
