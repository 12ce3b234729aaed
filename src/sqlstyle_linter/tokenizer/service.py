"""Tokenizer service for raw SQL text."""

from __future__ import annotations

from bisect import bisect_right
import re

from sqlstyle_linter.common import LexError, LexResult, Token, TokenKind

from .keywords import is_keyword

_WHITESPACE_PATTERN = re.compile(r"\s+")
_NUMBER_PATTERN = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_WORD_PATTERN = re.compile(r"[^\W\d][\w$#]*")
_PREFIXED_STRING_PATTERN = re.compile(r"[eEnNxXbB]'")
_DOLLAR_TAG_PATTERN = re.compile(r"\$(?:[^\W\d]\w*)?\$")
_PARAMETER_PATTERN = re.compile(r"[:@][^\W\d]\w*|\$\d+|\?")
_OPERATOR_PATTERN = re.compile(r"<=>|=>|<>|!=|<=|>=|:=|::|\|\||->>|->|[=<>+\-*/%~&|^!]")

_PUNCTUATION = frozenset("(),;.[]:")


def tokenize(text: str, *, strict: bool = False) -> LexResult:
    """Splits SQL text into lossless tokens.

    Malformed input produces an ``error`` marker token and a recorded
    ``LexError``; lexing then resumes after the marker. With ``strict`` the
    first ``LexError`` is raised instead.
    """

    scanner = _Scanner(text, strict=strict)
    return scanner.run()


class _Scanner:
    def __init__(self, text: str, *, strict: bool) -> None:
        self._text = text
        self._strict = strict
        self._line_starts = [0] + [match.end() for match in re.finditer(r"\n", text)]
        self._tokens: list[Token] = []
        self._errors: list[LexError] = []
        self._last_significant: Token | None = None

    def run(self) -> LexResult:
        text = self._text
        pos = 0
        while pos < len(text):
            pos = self._scan_one(pos)
        return LexResult(tokens=tuple(self._tokens), errors=tuple(self._errors))

    def _scan_one(self, pos: int) -> int:
        text = self._text
        char = text[pos]

        matched = _WHITESPACE_PATTERN.match(text, pos)
        if matched is not None:
            return self._emit("whitespace", pos, matched.end())

        if text.startswith("--", pos):
            newline = text.find("\n", pos)
            return self._emit("comment", pos, len(text) if newline == -1 else newline)

        if text.startswith("/*", pos):
            closing = text.find("*/", pos + 2)
            if closing == -1:
                return self._fail(pos, len(text), "unterminated block comment")
            return self._emit("comment", pos, closing + 2)

        if _PREFIXED_STRING_PATTERN.match(text, pos) is not None:
            return self._scan_quoted(pos, pos + 1, "'", "literal", "unterminated string literal")

        if char == "'":
            return self._scan_quoted(pos, pos, "'", "literal", "unterminated string literal")

        if char in {'"', "`"}:
            return self._scan_quoted(pos, pos, char, "identifier", "unterminated quoted identifier")

        if char == "$":
            tag = _DOLLAR_TAG_PATTERN.match(text, pos)
            if tag is not None:
                closing = text.find(tag.group(0), tag.end())
                if closing == -1:
                    return self._fail(pos, self._line_end(pos), "unterminated dollar-quoted string")
                return self._emit("literal", pos, closing + len(tag.group(0)))

        if char.isdigit() or (char == "." and self._starts_fraction(pos)):
            number = _NUMBER_PATTERN.match(text, pos)
            if number is not None:
                return self._emit("literal", pos, number.end())

        word = _WORD_PATTERN.match(text, pos)
        if word is not None:
            return self._emit(self._classify_word(word.group(0), word.end()), pos, word.end())

        if not text.startswith("::", pos):
            parameter = _PARAMETER_PATTERN.match(text, pos)
            if parameter is not None:
                return self._emit("literal", pos, parameter.end())

        operator = _OPERATOR_PATTERN.match(text, pos)
        if operator is not None:
            return self._emit("operator", pos, operator.end())

        if char in _PUNCTUATION:
            return self._emit("punctuation", pos, pos + 1)

        return self._fail(pos, pos + 1, f"unexpected character {char!r}")

    def _scan_quoted(
        self,
        start: int,
        quote_pos: int,
        quote: str,
        kind: TokenKind,
        message: str,
    ) -> int:
        text = self._text
        cursor = quote_pos + 1
        while True:
            closing = text.find(quote, cursor)
            if closing == -1:
                return self._fail(start, self._line_end(start), message)
            if text.startswith(quote * 2, closing):
                cursor = closing + 2
                continue
            return self._emit(kind, start, closing + 1)

    def _classify_word(self, word: str, end: int) -> TokenKind:
        if not is_keyword(word):
            return "identifier"
        previous = self._last_significant
        if previous is not None and previous.is_punctuation("."):
            return "identifier"
        following = self._text[end : end + 2]
        if following.startswith(".") and not following[1:].isdigit():
            return "identifier"
        return "keyword"

    def _starts_fraction(self, pos: int) -> bool:
        if not self._text[pos + 1 : pos + 2].isdigit():
            return False
        previous = self._last_significant
        if previous is None or previous.end != pos:
            return True
        return previous.kind not in {"identifier", "keyword"} and not previous.is_punctuation(")")

    def _line_end(self, pos: int) -> int:
        newline = self._text.find("\n", pos)
        return len(self._text) if newline == -1 else newline

    def _emit(self, kind: TokenKind, start: int, end: int) -> int:
        line, column = self._position(start)
        token = Token(kind=kind, text=self._text[start:end], line=line, column=column, offset=start)
        self._tokens.append(token)
        if token.is_significant:
            self._last_significant = token
        return end

    def _fail(self, start: int, end: int, message: str) -> int:
        line, column = self._position(start)
        error = LexError(message, line, column, start)
        if self._strict:
            raise error
        self._errors.append(error)
        return self._emit("error", start, max(end, start + 1))

    def _position(self, offset: int) -> tuple[int, int]:
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1
