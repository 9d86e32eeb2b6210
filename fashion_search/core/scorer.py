"""Multi-factor relevance scoring of a query against one index entry."""

from typing import Dict, Optional, Sequence

from pydantic import BaseModel, Field

from ..config import Settings
from .fuzzy_matcher import FuzzyMatcher
from .index import IndexEntry


class ScoringWeights(BaseModel):
    """Points awarded per match kind."""

    title_exact: float = 3.0
    title_fuzzy: float = 2.0
    description_exact: float = 1.0
    description_fuzzy: float = 0.5
    title_phrase: float = 1.0
    description_phrase: float = 0.5
    coverage: float = 2.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScoringWeights":
        return cls(
            title_exact=settings.weight_title_exact,
            title_fuzzy=settings.weight_title_fuzzy,
            description_exact=settings.weight_description_exact,
            description_fuzzy=settings.weight_description_fuzzy,
            title_phrase=settings.weight_title_phrase,
            description_phrase=settings.weight_description_phrase,
            coverage=settings.weight_coverage,
        )


class RelevanceScore(BaseModel):
    """Outcome of scoring one product for one query."""

    score: float = Field(0.0, description="Total relevance score")
    matched_terms: int = Field(0, description="Query terms that matched anything")
    total_terms: int = Field(0, description="Number of query terms")
    coverage: float = Field(0.0, ge=0.0, le=1.0, description="matched_terms / total_terms")
    breakdown: Dict[str, float] = Field(default_factory=dict, description="Points per match kind")


class RelevanceScorer:
    """
    Scores query tokens against a pre-built index entry.

    Every bonus a term triggers stacks: an exact title hit, one fuzzy bonus
    per fuzzily matching title token, the same pair for the description,
    and substring bonuses on the normalized title and description. A term
    counts once toward ``matched_terms`` however many bonuses it earned.
    After all terms, ``coverage * weights.coverage`` is added.

    With ``skip_fuzzy_on_exact`` off, a token identical to the query term
    earns both the exact bonus and a fuzzy bonus for itself.
    """

    def __init__(
        self,
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
        weights: Optional[ScoringWeights] = None,
        skip_fuzzy_on_exact: bool = False
    ) -> None:
        self.fuzzy_matcher = fuzzy_matcher or FuzzyMatcher()
        self.weights = weights or ScoringWeights()
        self.skip_fuzzy_on_exact = skip_fuzzy_on_exact

    def score(self, query_tokens: Sequence[str], entry: IndexEntry) -> RelevanceScore:
        """
        Score an index entry against query tokens.

        Args:
            query_tokens: Tokenized query, at least one token
            entry: Index entry of the product

        Returns:
            RelevanceScore with totals and per-kind breakdown
        """
        weights = self.weights
        breakdown = {
            "title_exact": 0.0,
            "title_fuzzy": 0.0,
            "description_exact": 0.0,
            "description_fuzzy": 0.0,
            "title_phrase": 0.0,
            "description_phrase": 0.0,
            "coverage": 0.0,
        }
        matched_terms = 0

        for term in query_tokens:
            term_matched = False

            if term in entry.title_tokens:
                breakdown["title_exact"] += weights.title_exact
                term_matched = True

            fuzzy_hits = self._count_fuzzy(term, entry.title_tokens)
            if fuzzy_hits:
                breakdown["title_fuzzy"] += weights.title_fuzzy * fuzzy_hits
                term_matched = True

            if term in entry.description_tokens:
                breakdown["description_exact"] += weights.description_exact
                term_matched = True

            fuzzy_hits = self._count_fuzzy(term, entry.description_tokens)
            if fuzzy_hits:
                breakdown["description_fuzzy"] += weights.description_fuzzy * fuzzy_hits
                term_matched = True

            if term in entry.normalized_title:
                breakdown["title_phrase"] += weights.title_phrase
                term_matched = True

            if term in entry.normalized_description:
                breakdown["description_phrase"] += weights.description_phrase
                term_matched = True

            if term_matched:
                matched_terms += 1

        total_terms = len(query_tokens)
        coverage = matched_terms / total_terms if total_terms else 0.0
        breakdown["coverage"] = coverage * weights.coverage

        return RelevanceScore(
            score=sum(breakdown.values()),
            matched_terms=matched_terms,
            total_terms=total_terms,
            coverage=coverage,
            breakdown=breakdown,
        )

    def _count_fuzzy(self, term: str, tokens: Sequence[str]) -> int:
        """Count tokens that fuzzily match the term."""
        count = 0
        for token in tokens:
            if self.skip_fuzzy_on_exact and token == term:
                continue
            if self.fuzzy_matcher.is_match(term, token):
                count += 1
        return count
