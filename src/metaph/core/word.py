"""Padded word view used by the phonetic rule table.

The encoder reads an uppercased copy of the input word followed by a run
of blanks, so look-ahead rules can peek a few characters past the end
without running off the buffer. Every accessor returns a sentinel (None or
False) for an out-of-range index instead of raising.
"""

from dataclasses import dataclass

# Trailing blanks appended to every word
PAD = "     "

VOWELS = frozenset("AEIOUY")


@dataclass(frozen=True)
class PaddedWord:
    text: str
    length: int

    @classmethod
    def from_word(cls, word: str) -> "PaddedWord":
        """Uppercase and pad a raw word."""
        upper = word.upper()
        return cls(upper + PAD, len(upper))

    @property
    def last(self) -> int:
        """Index of the last real (unpadded) character."""
        return self.length - 1

    def at(self, index: int) -> str | None:
        """Character at index, or None when outside the padded buffer."""
        if index < 0 or index >= len(self.text):
            return None
        return self.text[index]

    def is_vowel(self, index: int) -> bool:
        return self.at(index) in VOWELS

    def string_at(self, start: int, length: int, *candidates: str) -> bool:
        """True if the window text[start:start+length] equals a candidate.

        A window that starts before the buffer or whose end reaches the
        last padded position is rejected outright.
        """
        if start < 0 or start + length >= len(self.text):
            return False
        return self.text[start:start + length] in candidates

    def contains(self, fragment: str) -> bool:
        return fragment in self.text


def is_slavo_germanic(word: PaddedWord) -> bool:
    """Coarse origin test: the word contains W, K or CZ."""
    return word.contains("W") or word.contains("K") or word.contains("CZ")
