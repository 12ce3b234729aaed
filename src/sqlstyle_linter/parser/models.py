"""Structural tree models produced by the statement parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, Union

from sqlstyle_linter.common import ParseError, Token

ClauseType = Literal[
    "WITH",
    "SELECT",
    "FROM",
    "JOIN",
    "ON",
    "WHERE",
    "GROUP_BY",
    "HAVING",
    "ORDER_BY",
    "LIMIT",
    "OFFSET",
    "RETURNING",
    "SET_OPERATION",
    "INSERT",
    "VALUES",
    "UPDATE",
    "SET",
    "DELETE",
    "CREATE_TABLE",
    "CREATE_VIEW",
    "CREATE",
    "ALTER_TABLE",
    "DROP",
]

Child = Union[Token, "StatementTree"]


def _flatten(children: tuple[Child, ...]) -> Iterator[Token]:
    for child in children:
        if isinstance(child, Token):
            yield child
        else:
            yield from child.tokens


@dataclass(frozen=True)
class ClauseNode:
    """One clause: its root keyword tokens followed by its children."""

    clause_type: ClauseType
    keywords: tuple[Token, ...]
    children: tuple[Child, ...] = ()

    @property
    def keyword(self) -> Token:
        return self.keywords[0]

    @property
    def start(self) -> int:
        return self.keyword.offset

    @property
    def end(self) -> int:
        last = self.keyword
        for token in self.tokens():
            last = token
        return last.end

    def tokens(self) -> Iterator[Token]:
        """Keyword tokens and every child token, nested subqueries included."""
        yield from self.keywords
        yield from _flatten(self.children)

    def significant_items(self) -> tuple[Child, ...]:
        return tuple(
            child
            for child in self.children
            if not isinstance(child, Token) or child.is_significant
        )

    def subqueries(self) -> tuple[StatementTree, ...]:
        return tuple(child for child in self.children if isinstance(child, StatementTree))


@dataclass(frozen=True)
class UnknownConstruct:
    """Leading statement region without a recognised root keyword."""

    children: tuple[Child, ...]

    @property
    def start(self) -> int:
        return next(_flatten(self.children)).offset

    def tokens(self) -> Iterator[Token]:
        yield from _flatten(self.children)


Node = Union[ClauseNode, UnknownConstruct]


@dataclass(frozen=True)
class StatementTree:
    """Root of one statement (or of one parenthesised subquery)."""

    clauses: tuple[Node, ...]
    tokens: tuple[Token, ...]
    depth: int = 0

    @property
    def significant_tokens(self) -> tuple[Token, ...]:
        return tuple(token for token in self.tokens if token.is_significant)

    @property
    def first_token(self) -> Token:
        return self.significant_tokens[0]

    @property
    def last_token(self) -> Token:
        return self.significant_tokens[-1]

    @property
    def start(self) -> int:
        return self.tokens[0].offset

    @property
    def end(self) -> int:
        return self.tokens[-1].end

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)

    @property
    def is_multiline(self) -> bool:
        return self.first_token.line != self.last_token.line

    @property
    def base_column(self) -> int:
        """Column every left-aligned root keyword of this statement uses."""
        return self.first_token.column

    def clause_nodes(self) -> tuple[ClauseNode, ...]:
        return tuple(node for node in self.clauses if isinstance(node, ClauseNode))

    def walk(self) -> Iterator[tuple[StatementTree, Node]]:
        """Yields (owner, node) pairs in document order, subqueries included."""
        for node in self.clauses:
            yield self, node
            for child in node.children:
                if isinstance(child, StatementTree):
                    yield from child.walk()


@dataclass(frozen=True)
class ParseFailure:
    error: ParseError
    tokens: tuple[Token, ...]


@dataclass(frozen=True)
class ParseResult:
    statements: tuple[StatementTree, ...]
    failures: tuple[ParseFailure, ...] = ()
    trivia: tuple[Token, ...] = ()
