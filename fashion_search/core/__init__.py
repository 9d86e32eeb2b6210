"""Core search engine functionality."""

from .engine import SearchEngine
from .fuzzy_matcher import FuzzyMatcher
from .normalizer import STOP_WORDS, TextNormalizer
from .index import IndexEntry, SearchIndex, build_index
from .scorer import RelevanceScore, RelevanceScorer, ScoringWeights

__all__ = [
    "SearchEngine",
    "FuzzyMatcher",
    "STOP_WORDS",
    "TextNormalizer",
    "IndexEntry",
    "SearchIndex",
    "build_index",
    "RelevanceScore",
    "RelevanceScorer",
    "ScoringWeights",
]
