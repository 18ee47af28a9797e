from __future__ import annotations

from collections.abc import Sequence


class TokenStream:
    """Left-to-right cursor over the directive tokens.

    Command words are upper-cased when read; operands are handed out raw.
    Nothing is ever pushed back.
    """

    def __init__(self, tokens: Sequence[str | None]):
        self._tokens = list(tokens)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._pos

    def __bool__(self) -> bool:
        return self.remaining > 0

    def next_command(self) -> str:
        token = self.take()
        return (token or "").upper()

    def take(self) -> str | None:
        if self._pos >= len(self._tokens):
            raise IndexError("no tokens left")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def discard(self) -> int:
        """Drop every unread token and return how many were dropped."""
        dropped = self.remaining
        self._pos = len(self._tokens)
        return dropped
