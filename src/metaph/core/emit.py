"""Primary/secondary code accumulators.

Each rule firing emits either one token, appended to both codes, or a
divergent pair: the first token goes to the primary code and the second
to the secondary code. A divergent pair marks the word as having an
alternate pronunciation. A second token starting with a blank suppresses
the secondary emission for that firing.
"""

from typing import NamedTuple


class EmissionArityError(AssertionError):
    """The rule table called the emitter with the wrong number of tokens."""


class PhoneticCodes(NamedTuple):
    primary: str
    secondary: str


class CodeBuffers:
    """The two growing codes for a single encode pass."""

    def __init__(self):
        self.primary = ""
        self.secondary = ""
        self.alternate = False

    def add(self, *tokens: str) -> None:
        if not 1 <= len(tokens) <= 2:
            raise EmissionArityError(
                f"emission takes one or two tokens, got {len(tokens)}")
        main = tokens[0]
        self.primary += main
        if len(tokens) == 1:
            self.secondary += main
            return

        alt = tokens[1]
        if alt:
            self.alternate = True
            if alt[0] != " ":
                self.secondary += alt
        elif main and main[0] != " ":
            self.secondary += main

    def is_full(self, max_length: int) -> bool:
        """True once both codes have reached max_length."""
        return (len(self.primary) >= max_length
                and len(self.secondary) >= max_length)

    def finish(self, max_length: int) -> PhoneticCodes:
        """Truncate both codes; secondary is empty unless a pair diverged."""
        secondary = self.secondary[:max_length] if self.alternate else ""
        return PhoneticCodes(self.primary[:max_length], secondary)
