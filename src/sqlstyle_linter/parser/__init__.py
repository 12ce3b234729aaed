"""Structural parser module."""

from .ddl import ColumnDefinition, TableConstraint, TableDefinition, table_definition
from .index import TokenIndex
from .models import ClauseNode, ClauseType, ParseFailure, ParseResult, StatementTree, UnknownConstruct
from .service import parse, parse_statement

__all__ = [
    "ClauseNode",
    "ClauseType",
    "ColumnDefinition",
    "ParseFailure",
    "ParseResult",
    "StatementTree",
    "TableConstraint",
    "TableDefinition",
    "TokenIndex",
    "UnknownConstruct",
    "parse",
    "parse_statement",
    "table_definition",
]
