"""Text normalization and tokenization shared by indexing and querying."""

import re
from typing import FrozenSet, Iterable, List, Optional


STOP_WORDS: FrozenSet[str] = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
    "has", "had", "do", "does", "did", "will", "would", "could", "should",
])


class TextNormalizer:
    """Turns raw product and query text into comparable tokens."""

    def __init__(self, stop_words: Optional[Iterable[str]] = None) -> None:
        """
        Initialize the normalizer.

        Args:
            stop_words: Words dropped by tokenize (defaults to STOP_WORDS)
        """
        self.stop_words = frozenset(stop_words) if stop_words is not None else STOP_WORDS

        # Compile regex patterns for performance
        # Word characters are ASCII only; accented letters become separators
        self.punctuation_regex = re.compile(r'[^\w\s]', re.ASCII)
        self.delimiter_regex = re.compile(r'[-_]')
        self.whitespace_regex = re.compile(r'\s+')

    def normalize(self, text: Optional[str]) -> str:
        """
        Normalize text for substring checks and tokenization.

        Args:
            text: Input text to normalize

        Returns:
            Lowercased text with punctuation, hyphens and underscores
            turned into single spaces
        """
        if not text:
            return ""

        normalized = text.lower()
        normalized = self.punctuation_regex.sub(' ', normalized)
        # Must run before whitespace collapse
        normalized = self.delimiter_regex.sub(' ', normalized)
        normalized = self.whitespace_regex.sub(' ', normalized)

        return normalized.strip()

    def tokenize(self, text: Optional[str]) -> List[str]:
        """
        Tokenize text into searchable words.

        Args:
            text: Input text

        Returns:
            List of tokens in their original order, duplicates kept
        """
        if not text:
            return []

        return [
            token for token in self.normalize(text).split(' ')
            if len(token) > 1 and token not in self.stop_words
        ]
