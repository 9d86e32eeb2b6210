"""Main search engine implementation."""

import threading
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import structlog

from ..config import Settings
from ..models.product import Product
from ..models.response import ScoredResult
from .fuzzy_matcher import FuzzyMatcher
from .index import SearchIndex, build_index
from .normalizer import TextNormalizer
from .scorer import RelevanceScorer, ScoringWeights

logger = structlog.get_logger(__name__)

TieBreaker = Callable[[Product], float]


def _confidence(product: Product) -> float:
    return product.confidence_score or 0.0


class SearchEngine:
    """
    Relevance search over a product collection.

    The engine holds only configuration and counters. The index and the
    products are passed into every call, so one engine can serve any number
    of indexes and a search never changes the index it reads.
    """

    def __init__(
        self,
        fuzzy_threshold: float = 0.8,
        suggestion_threshold: float = 0.7,
        min_fuzzy_length: int = 3,
        weights: Optional[ScoringWeights] = None,
        skip_fuzzy_on_exact: bool = False,
        normalizer: Optional[TextNormalizer] = None
    ) -> None:
        """
        Initialize the search engine.

        Args:
            fuzzy_threshold: Similarity needed for a fuzzy hit while scoring
            suggestion_threshold: Looser similarity used for suggestions
            min_fuzzy_length: Shorter tokens only match exactly
            weights: Scoring weights (defaults to ScoringWeights())
            skip_fuzzy_on_exact: Do not award a fuzzy bonus to the identical token
            normalizer: Normalizer shared by indexing and querying
        """
        self.fuzzy_threshold = fuzzy_threshold
        self.suggestion_threshold = suggestion_threshold
        self.normalizer = normalizer or TextNormalizer()
        self.fuzzy_matcher = FuzzyMatcher(fuzzy_threshold, min_length=min_fuzzy_length)
        self.scorer = RelevanceScorer(
            self.fuzzy_matcher,
            weights=weights,
            skip_fuzzy_on_exact=skip_fuzzy_on_exact
        )

        # Performance tracking, shared by concurrent requests
        self._stats_lock = threading.Lock()
        self._stats = self._empty_stats()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchEngine":
        """Create an engine configured from application settings."""
        return cls(
            fuzzy_threshold=settings.fuzzy_threshold,
            suggestion_threshold=settings.suggestion_threshold,
            min_fuzzy_length=settings.min_fuzzy_length,
            weights=ScoringWeights.from_settings(settings),
            skip_fuzzy_on_exact=settings.skip_fuzzy_on_exact,
        )

    def tokenize(self, query: Optional[str]) -> List[str]:
        """Tokenize a query exactly as product text is tokenized."""
        return self.normalizer.tokenize(query)

    def build_index(self, products: Sequence[Product]) -> SearchIndex:
        """
        Build the index for a product collection.

        Call once after the products load and again whenever the
        collection is replaced.

        Args:
            products: Products in result order

        Returns:
            SearchIndex positionally aligned with ``products``
        """
        start_time = time.time()
        index = build_index(products, self.normalizer)
        self._increment("indexes_built")

        stats = index.get_stats()
        logger.info(
            "Search index built",
            products=stats["total_entries"],
            tokens=stats["total_tokens"],
            vocabulary=stats["vocabulary_size"],
            build_time_ms=round((time.time() - start_time) * 1000, 2)
        )
        return index

    def search(
        self,
        query: Optional[str],
        index: SearchIndex,
        products: Sequence[Product],
        tie_breaker: Optional[TieBreaker] = None
    ) -> List[ScoredResult]:
        """
        Rank products against a query.

        A blank query, or one made only of stop words and single
        characters, filters nothing: every product comes back with score 0
        in its original order. Otherwise only products matching at least
        one query term are returned, ordered by score, then coverage, then
        the tie breaker (``confidence_score`` by default), all descending.
        Full ties keep their original relative order.

        Args:
            query: Raw user query
            index: Index built from ``products``
            products: Products the index was built from
            tie_breaker: Secondary ranking signal per product

        Returns:
            List of ScoredResult
        """
        start_time = time.time()
        self._increment("total_queries")

        query_tokens = self.tokenize(query)
        if not query_tokens:
            self._increment("pass_through_queries")
            self._record_time(start_time)
            return [ScoredResult(product=product, score=0.0) for product in products]

        secondary = tie_breaker or _confidence
        results = []
        for position, entry in enumerate(index):
            relevance = self.scorer.score(query_tokens, entry)
            if relevance.matched_terms > 0:
                results.append(ScoredResult(
                    product=products[position],
                    score=relevance.score,
                    matched_terms=relevance.matched_terms,
                    coverage=relevance.coverage
                ))

        # list.sort is stable, so full ties keep index order
        results.sort(key=lambda r: (-r.score, -r.coverage, -secondary(r.product)))

        if results:
            self._increment("matched_queries")
        else:
            self._increment("no_matches")
        execution_time = self._record_time(start_time)

        logger.debug(
            "Search completed",
            query=query,
            tokens=query_tokens,
            total_results=len(results),
            execution_time_ms=round(execution_time, 2)
        )
        return results

    def suggest(
        self,
        query: Optional[str],
        index: SearchIndex,
        max_suggestions: int = 5
    ) -> List[str]:
        """
        Propose "did you mean" terms for a query.

        A candidate is any indexed token that differs from a query token and
        either fuzzily matches it at the suggestion threshold or strictly
        contains it. Suggestions come back in order of first discovery,
        not ranked.

        Args:
            query: Raw user query
            index: Index to draw candidates from
            max_suggestions: Maximum number of suggestions

        Returns:
            Distinct suggested tokens
        """
        self._increment("total_suggestions")

        query_tokens = self.tokenize(query)
        if not query_tokens or max_suggestions <= 0:
            return []

        suggestions: List[str] = []
        for token in index.vocabulary:
            for query_token in query_tokens:
                if token == query_token:
                    continue
                if (self.fuzzy_matcher.is_match(query_token, token, self.suggestion_threshold)
                        or (len(token) > len(query_token) and query_token in token)):
                    suggestions.append(token)
                    break
            if len(suggestions) >= max_suggestions:
                break

        return suggestions

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        with self._stats_lock:
            stats = self._stats.copy()

        # Pass-through queries do not filter, so rates cover filtered queries only
        filtered = stats["matched_queries"] + stats["no_matches"]
        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
        else:
            stats["average_execution_time_ms"] = 0.0

        if filtered > 0:
            stats["match_rate"] = stats["matched_queries"] / filtered
            stats["no_match_rate"] = stats["no_matches"] / filtered
        else:
            stats["match_rate"] = 0.0
            stats["no_match_rate"] = 0.0

        return stats

    def reset_stats(self) -> None:
        """Reset query statistics."""
        with self._stats_lock:
            self._stats = self._empty_stats()

    def _increment(self, key: str, amount: float = 1) -> None:
        with self._stats_lock:
            self._stats[key] += amount

    def _record_time(self, start_time: float) -> float:
        execution_time = (time.time() - start_time) * 1000
        self._increment("total_execution_time", execution_time)
        return execution_time

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_queries": 0,
            "pass_through_queries": 0,
            "matched_queries": 0,
            "no_matches": 0,
            "total_suggestions": 0,
            "indexes_built": 0,
            "total_execution_time": 0.0
        }
