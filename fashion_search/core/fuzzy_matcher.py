"""Approximate token matching for typo tolerance."""

from typing import Optional

from rapidfuzz.distance import Levenshtein


class FuzzyMatcher:
    """Decides whether two tokens match approximately."""

    def __init__(self, threshold: float = 0.8, min_length: int = 3) -> None:
        """
        Initialize the fuzzy matcher.

        Args:
            threshold: Default minimum similarity for a match
            min_length: Tokens shorter than this only match exactly
        """
        self.threshold = threshold
        self.min_length = min_length

    def edit_distance(self, first: str, second: str) -> int:
        """Unit-cost Levenshtein distance (insert, delete, substitute)."""
        return Levenshtein.distance(first, second)

    def similarity(self, first: str, second: str) -> float:
        """
        Normalized edit-distance similarity.

        Args:
            first: First token
            second: Second token

        Returns:
            Similarity between 0 and 1
        """
        max_len = max(len(first), len(second))
        if max_len == 0:
            return 1.0

        return 1.0 - (self.edit_distance(first, second) / max_len)

    def is_match(
        self,
        first: str,
        second: str,
        threshold: Optional[float] = None
    ) -> bool:
        """
        Check whether two tokens match approximately.

        Identical tokens always match. Short tokens never match fuzzily.
        Containment covers plurals, prefixes and compounds; anything else
        falls back to the similarity threshold.

        Args:
            first: First token
            second: Second token
            threshold: Custom threshold (uses instance threshold if None)

        Returns:
            True if the tokens match
        """
        if first == second:
            return True

        if len(first) < self.min_length or len(second) < self.min_length:
            return False

        if first in second or second in first:
            return True

        if threshold is None:
            threshold = self.threshold

        return self.similarity(first, second) >= threshold
