"""Sound index: phonetic code -> words sharing that code.

Built once from a word list, then queried read-only. A word is filed
under each distinct non-empty code it produces (one or two buckets).
Queries re-encode the query word with the index's code length and union
the buckets for both of its codes.
"""

import logging
from collections import defaultdict
from typing import Iterable, Mapping

from ..core.encoder import (
    DEFAULT_MAX_LENGTH,
    double_metaphone,
    normalize_max_length,
)

logger = logging.getLogger(__name__)


class SoundIndex:
    """In-memory hash table of code -> set of words."""

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH):
        self.max_length = normalize_max_length(max_length)
        self._buckets: dict[str, set[str]] = defaultdict(set)

    @classmethod
    def build(cls, words: Iterable[str],
              max_length: int = DEFAULT_MAX_LENGTH) -> "SoundIndex":
        """Index every word in words."""
        index = cls(max_length)
        skipped = 0
        for word in words:
            if not index._add(word):
                skipped += 1
        logger.debug("Indexed %d codes (max_length=%d, %d words without a code)",
                     len(index._buckets), index.max_length, skipped)
        return index

    @classmethod
    def from_buckets(cls, buckets: Mapping[str, Iterable[str]],
                     max_length: int = DEFAULT_MAX_LENGTH) -> "SoundIndex":
        """Rehydrate an index from a stored code -> words mapping."""
        index = cls(max_length)
        for code, words in buckets.items():
            if code:
                index._buckets[code].update(words)
        return index

    def _add(self, word: str) -> bool:
        added = False
        for code in double_metaphone(word, self.max_length):
            if code:
                self._buckets[code].add(word)
                added = True
        return added

    def match(self, word: str) -> set[str]:
        """All indexed words sharing a code with word. Order is undefined."""
        matches = set()
        for code in double_metaphone(word, self.max_length):
            if code and code in self._buckets:
                matches |= self._buckets[code]
        return matches

    def bucket(self, code: str) -> frozenset[str]:
        """Words filed under code (empty if none)."""
        return frozenset(self._buckets.get(code, ()))

    def codes(self) -> list[str]:
        """Sorted list of indexed codes."""
        return sorted(self._buckets)

    def items(self):
        """(code, words) pairs, for persisting the index."""
        return ((code, sorted(words)) for code, words in self._buckets.items())

    def size(self) -> int:
        """Number of distinct codes, not words."""
        return len(self._buckets)

    __len__ = size

    def __contains__(self, code: str) -> bool:
        return code in self._buckets
