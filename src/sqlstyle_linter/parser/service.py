"""Structural parser: statements, clauses and nested subqueries."""

from __future__ import annotations

import logging
from typing import Sequence, cast

from sqlstyle_linter.common import ParseError, Token

from .models import Child, ClauseNode, ClauseType, Node, ParseFailure, ParseResult, StatementTree, UnknownConstruct

logger = logging.getLogger(__name__)

_QUERY_STARTERS = frozenset({"SELECT", "WITH", "VALUES"})
_SIMPLE_ROOTS: dict[str, ClauseType] = {
    "SELECT": "SELECT",
    "WHERE": "WHERE",
    "HAVING": "HAVING",
    "LIMIT": "LIMIT",
    "OFFSET": "OFFSET",
    "RETURNING": "RETURNING",
}
_JOIN_STARTERS = frozenset({"JOIN", "NATURAL", "INNER", "CROSS", "LEFT", "RIGHT", "FULL"})
_JOIN_SIDES = frozenset({"INNER", "CROSS", "LEFT", "RIGHT", "FULL"})
_SET_OPERATORS = frozenset({"UNION", "INTERSECT", "EXCEPT"})
_LEADING_ONLY = frozenset({"INSERT", "UPDATE", "DELETE"})
_CREATE_MODIFIERS = frozenset({"GLOBAL", "LOCAL", "TEMP", "TEMPORARY", "UNIQUE"})
_CREATE_OBJECTS = frozenset({"INDEX", "SCHEMA", "SEQUENCE", "FUNCTION", "PROCEDURE", "TRIGGER"})
_DROP_OBJECTS = frozenset({"TABLE", "VIEW", "INDEX", "SCHEMA", "SEQUENCE", "FUNCTION", "PROCEDURE", "TRIGGER"})


def parse(tokens: Sequence[Token]) -> ParseResult:
    """Splits tokens into statements and parses each one independently."""

    statements: list[StatementTree] = []
    failures: list[ParseFailure] = []
    trivia: list[Token] = []

    for chunk in _split_statements(tokens):
        if not any(token.is_significant and not token.is_punctuation(";") for token in chunk):
            trivia.extend(chunk)
            continue
        try:
            statements.append(parse_statement(chunk))
        except ParseError as exc:
            logger.debug("statement skipped: %s", exc)
            failures.append(ParseFailure(error=exc, tokens=tuple(chunk)))

    return ParseResult(statements=tuple(statements), failures=tuple(failures), trivia=tuple(trivia))


def parse_statement(tokens: Sequence[Token], depth: int = 0) -> StatementTree:
    """Builds the clause tree of one statement.

    Raises ``ParseError`` when parentheses are unbalanced.
    """

    _check_balance(tokens)
    items = _group(tokens, depth)
    return StatementTree(clauses=_build_clauses(items), tokens=tuple(tokens), depth=depth)


def _split_statements(tokens: Sequence[Token]) -> list[list[Token]]:
    chunks: list[list[Token]] = []
    current: list[Token] = []
    for token in tokens:
        current.append(token)
        if token.is_punctuation(";"):
            chunks.append(current)
            current = []
    if current:
        chunks.append(current)
    return chunks


def _check_balance(tokens: Sequence[Token]) -> None:
    open_tokens: list[Token] = []
    for token in tokens:
        if token.is_punctuation("("):
            open_tokens.append(token)
        elif token.is_punctuation(")"):
            if not open_tokens:
                raise ParseError("unmatched closing parenthesis", token.line, token.column, token.offset)
            open_tokens.pop()
    if open_tokens:
        unclosed = open_tokens[-1]
        raise ParseError("unclosed parenthesis", unclosed.line, unclosed.column, unclosed.offset)


def _matching_close(tokens: Sequence[Token], open_position: int) -> int:
    depth = 0
    for position in range(open_position, len(tokens)):
        token = tokens[position]
        if token.is_punctuation("("):
            depth += 1
        elif token.is_punctuation(")"):
            depth -= 1
            if depth == 0:
                return position
    raise ParseError("unclosed parenthesis", tokens[open_position].line, tokens[open_position].column, tokens[open_position].offset)


def _starts_query(tokens: Sequence[Token]) -> bool:
    for token in tokens:
        if token.is_significant:
            return token.is_keyword(*_QUERY_STARTERS)
    return False


def _group(tokens: Sequence[Token], depth: int) -> list[Child]:
    """Replaces parenthesised subqueries with child trees."""

    items: list[Child] = []
    position = 0
    while position < len(tokens):
        token = tokens[position]
        if not token.is_punctuation("("):
            items.append(token)
            position += 1
            continue

        close = _matching_close(tokens, position)
        inner = tokens[position + 1 : close]
        items.append(token)
        if _starts_query(inner):
            items.append(parse_statement(inner, depth + 1))
        else:
            items.extend(_group(inner, depth))
        items.append(tokens[close])
        position = close + 1
    return items


class _ClauseBuilder:
    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.clause_count = 0
        self.current_type: ClauseType | None = None
        self._keywords: tuple[Token, ...] = ()
        self._children: list[Child] = []
        self._unknown: list[Child] = []

    @property
    def at_start(self) -> bool:
        return self.clause_count == 0 and not self._unknown

    def start(self, clause_type: ClauseType, keywords: tuple[Token, ...]) -> None:
        self.flush()
        self.current_type = clause_type
        self._keywords = keywords
        self.clause_count += 1

    def add(self, item: Child) -> None:
        if self.current_type is not None:
            self._children.append(item)
        elif self._unknown or not isinstance(item, Token) or item.is_significant:
            self._unknown.append(item)

    def flush(self) -> None:
        if self.current_type is not None:
            self.nodes.append(ClauseNode(self.current_type, self._keywords, tuple(self._children)))
        elif self._unknown:
            self.nodes.append(UnknownConstruct(tuple(self._unknown)))
        self.current_type = None
        self._keywords = ()
        self._children = []
        self._unknown = []


def _build_clauses(items: list[Child]) -> tuple[Node, ...]:
    builder = _ClauseBuilder()
    depth = 0
    previous: Token | None = None
    position = 0

    while position < len(items):
        item = items[position]
        if isinstance(item, Token):
            if item.is_punctuation(";") and depth == 0:
                position += 1
                continue
            if item.is_punctuation("("):
                depth += 1
            elif item.is_punctuation(")"):
                depth -= 1
            elif depth == 0 and item.kind == "keyword":
                matched = _match_root(item.upper, items, position, builder, previous)
                if matched is not None:
                    clause_type, keyword_positions = matched
                    keywords = tuple(cast(Token, items[index]) for index in keyword_positions)
                    builder.start(clause_type, keywords)
                    previous = keywords[-1]
                    position = keyword_positions[-1] + 1
                    continue
            if item.is_significant:
                previous = item
        builder.add(item)
        position += 1

    builder.flush()
    return tuple(builder.nodes)


def _following_keywords(items: list[Child], position: int, limit: int) -> list[tuple[int, str]]:
    """Collects up to ``limit`` consecutive keywords starting at ``position``."""

    found: list[tuple[int, str]] = []
    for index in range(position, len(items)):
        item = items[index]
        if not isinstance(item, Token):
            break
        if not item.is_significant:
            continue
        if item.kind != "keyword":
            break
        found.append((index, item.upper))
        if len(found) == limit:
            break
    return found


def _match_root(
    word: str,
    items: list[Child],
    position: int,
    builder: _ClauseBuilder,
    previous: Token | None,
) -> tuple[ClauseType, list[int]] | None:
    at_start = builder.at_start
    current = builder.current_type

    if word in _SIMPLE_ROOTS:
        return _SIMPLE_ROOTS[word], [position]

    if word == "FROM":
        if previous is not None and previous.is_keyword("DISTINCT"):
            return None
        return "FROM", [position]

    if word in {"GROUP", "ORDER"}:
        following = _following_keywords(items, position, 2)
        if len(following) == 2 and following[1][1] == "BY":
            return ("GROUP_BY" if word == "GROUP" else "ORDER_BY"), [index for index, _ in following]
        return None

    if word in _JOIN_STARTERS:
        return _match_join(items, position)

    if word == "ON":
        return ("ON", [position]) if current == "JOIN" else None

    if word in _SET_OPERATORS:
        following = _following_keywords(items, position, 2)
        if len(following) == 2 and following[1][1] in {"ALL", "DISTINCT"}:
            return "SET_OPERATION", [index for index, _ in following]
        return "SET_OPERATION", [position]

    if word == "WITH":
        if not at_start:
            return None
        following = _following_keywords(items, position, 2)
        if len(following) == 2 and following[1][1] == "RECURSIVE":
            return "WITH", [index for index, _ in following]
        return "WITH", [position]

    if word in _LEADING_ONLY:
        if not (at_start or current == "WITH"):
            return None
        following = _following_keywords(items, position, 2)
        companion = {"INSERT": "INTO", "DELETE": "FROM"}.get(word)
        keyword_positions = [position]
        if companion is not None and len(following) == 2 and following[1][1] == companion:
            keyword_positions.append(following[1][0])
        return cast(ClauseType, word), keyword_positions

    if word == "VALUES":
        return ("VALUES", [position]) if (at_start or current == "INSERT") else None

    if word == "SET":
        return ("SET", [position]) if current == "UPDATE" else None

    if not at_start:
        return None

    if word == "CREATE":
        return _match_create(items, position)

    if word == "ALTER":
        following = _following_keywords(items, position, 2)
        if len(following) == 2 and following[1][1] == "TABLE":
            return "ALTER_TABLE", [index for index, _ in following]
        return None

    if word == "DROP":
        following = _following_keywords(items, position, 2)
        if len(following) == 2 and following[1][1] in _DROP_OBJECTS:
            return "DROP", [index for index, _ in following]
        return "DROP", [position]

    return None


def _match_join(items: list[Child], position: int) -> tuple[ClauseType, list[int]] | None:
    following = _following_keywords(items, position, 4)
    keyword_positions: list[int] = []
    stage = 0
    for index, word in following:
        if word == "JOIN":
            keyword_positions.append(index)
            return "JOIN", keyword_positions
        if stage == 0 and word == "NATURAL":
            stage = 1
        elif stage <= 1 and word in _JOIN_SIDES:
            stage = 2
        elif stage <= 2 and word == "OUTER":
            stage = 3
        else:
            return None
        keyword_positions.append(index)
    return None


def _match_create(items: list[Child], position: int) -> tuple[ClauseType, list[int]]:
    following = _following_keywords(items, position, 6)
    keyword_positions = [position]
    cursor = 1
    if cursor + 1 < len(following) and following[cursor][1] == "OR" and following[cursor + 1][1] == "REPLACE":
        keyword_positions.extend([following[cursor][0], following[cursor + 1][0]])
        cursor += 2
    while cursor < len(following) and following[cursor][1] in _CREATE_MODIFIERS:
        keyword_positions.append(following[cursor][0])
        cursor += 1
    if cursor < len(following):
        index, word = following[cursor]
        if word == "TABLE":
            return "CREATE_TABLE", keyword_positions + [index]
        if word == "VIEW":
            return "CREATE_VIEW", keyword_positions + [index]
        if word in _CREATE_OBJECTS:
            return "CREATE", keyword_positions + [index]
    return "CREATE", keyword_positions
