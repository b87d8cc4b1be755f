"""Double Metaphone phonetic encoder.

Maps a word to a primary and a secondary phonetic code so that words
which sound alike share a code even when spelled differently:

    >>> double_metaphone("knewmoanya")
    PhoneticCodes(primary='NMN', secondary='')
    >>> double_metaphone("Smith")
    PhoneticCodes(primary='SM0', secondary='XMT')

Codes are drawn from the letters A B F H J K L M N P R S T X plus '0',
which stands for the 'th' sound. The secondary code is empty unless some
rule chose an alternate pronunciation.

The encoder is a pure function: no shared state, safe to call from any
number of threads.
"""

from typing import Callable

from .emit import CodeBuffers, PhoneticCodes
from .rules import apply_rules
from .word import PaddedWord

# Code length of the original algorithm
DEFAULT_MAX_LENGTH = 4

# Silent initial letter pairs: 'gnome', 'knight', 'pneumonia', 'wrack', 'psalm'
_SILENT_STARTS = ("GN", "KN", "PN", "WR", "PS")


def normalize_max_length(max_length: int) -> int:
    """Coerce a non-positive code length to the default of 4."""
    if max_length < 1:
        return DEFAULT_MAX_LENGTH
    return max_length


def double_metaphone(word: str, max_length: int = DEFAULT_MAX_LENGTH,
                     trace: Callable[[int], None] | None = None) -> PhoneticCodes:
    """Compute the primary and secondary codes for word.

    Args:
        word: Input word. Case is ignored; characters with no rule
            (digits, punctuation, blanks) are skipped.
        max_length: Maximum length of each code. Values below 1 fall
            back to 4.
        trace: Optional callable receiving every cursor position the
            pass visits, including the final one.

    Returns:
        PhoneticCodes(primary, secondary), each at most max_length long.
    """
    if not word:
        return PhoneticCodes("", "")
    max_length = normalize_max_length(max_length)

    w = PaddedWord.from_word(word)
    out = CodeBuffers()
    current = 0

    if w.string_at(0, 2, *_SILENT_STARTS):
        current += 1

    # Initial 'X' is pronounced 'Z' as in 'Xavier', which maps to 'S'
    if w.at(0) == "X":
        out.add("S")
        current += 1

    while current < w.length and not out.is_full(max_length):
        if trace is not None:
            trace(current)
        current += apply_rules(w, current, out)

    if trace is not None:
        trace(current)
    return out.finish(max_length)


encode = double_metaphone


def sounds_alike(a: str, b: str, max_length: int = DEFAULT_MAX_LENGTH) -> bool:
    """True if any non-empty code of a equals any non-empty code of b."""
    codes_a = {c for c in double_metaphone(a, max_length) if c}
    codes_b = {c for c in double_metaphone(b, max_length) if c}
    return not codes_a.isdisjoint(codes_b)
