"""Neighbour, line and parenthesis lookups over a token sequence."""

from __future__ import annotations

from typing import Sequence

from sqlstyle_linter.common import Token


class TokenIndex:
    """Read-only lookup table built once per file."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens: tuple[Token, ...] = tuple(tokens)
        self._positions = {token.offset: position for position, token in enumerate(self.tokens)}
        self._matches: dict[int, int] = {}
        self._line_heads: dict[int, Token] = {}

        open_positions: list[int] = []
        for position, token in enumerate(self.tokens):
            if token.is_punctuation("("):
                open_positions.append(position)
            elif token.is_punctuation(")") and open_positions:
                opening = open_positions.pop()
                self._matches[opening] = position
                self._matches[position] = opening

            if token.kind != "whitespace":
                self._line_heads.setdefault(token.line, token)

    def position(self, token: Token) -> int:
        return self._positions[token.offset]

    def previous(self, token: Token, *, significant: bool = False) -> Token | None:
        position = self.position(token) - 1
        while position >= 0:
            candidate = self.tokens[position]
            if not significant or candidate.is_significant:
                return candidate
            position -= 1
        return None

    def next(self, token: Token, *, significant: bool = False) -> Token | None:
        position = self.position(token) + 1
        while position < len(self.tokens):
            candidate = self.tokens[position]
            if not significant or candidate.is_significant:
                return candidate
            position += 1
        return None

    def matching(self, token: Token) -> Token | None:
        partner = self._matches.get(self.position(token))
        return None if partner is None else self.tokens[partner]

    def starts_line(self, token: Token) -> bool:
        previous = self.previous(token)
        if previous is None:
            return True
        if previous.kind != "whitespace":
            return False
        return "\n" in previous.text or previous.column == 1

    def line_head(self, line: int) -> Token | None:
        return self._line_heads.get(line)

    def indentation(self, line: int) -> int:
        head = self.line_head(line)
        return 1 if head is None else head.column
