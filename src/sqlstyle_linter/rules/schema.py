"""Schema design rules: column type choice and constraint style."""

from __future__ import annotations

from typing import Iterator

from sqlstyle_linter.parser import ClauseNode, table_definition
from sqlstyle_linter.tokenizer import VENDOR_TYPES

from .models import Finding, RuleContext

_FLOATING_TYPES = frozenset({"FLOAT", "REAL", "DOUBLE"})


def check_float_types(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    for column in table_definition(clause).columns:
        if column.type_name in _FLOATING_TYPES:
            yield Finding(
                column.type_tokens[0],
                f"column '{column.name.text}' uses floating point type {column.type_name}; prefer DECIMAL or NUMERIC",
            )


def check_vendor_types(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    for column in table_definition(clause).columns:
        standard = VENDOR_TYPES.get(column.type_name)
        if standard is not None:
            yield Finding(
                column.type_tokens[0],
                f"vendor-specific type {column.type_name}; use the standard {standard}",
            )


def check_uuid_primary_key(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    definition = table_definition(clause)
    keys = set(definition.primary_key_columns)
    for column in definition.columns:
        if column.name.text.lower() in keys and column.type_name != "UUID":
            yield Finding(column.name, f"primary key '{column.name.text}' should use type UUID")


def check_primary_key(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    definition = table_definition(clause)
    if definition.columns and not definition.primary_key_columns:
        location = definition.name or clause.keyword
        yield Finding(location, f"table '{location.text}' does not declare a primary key")


def check_primary_key_first(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    columns = table_definition(clause).columns
    for column in columns[1:]:
        if column.is_primary_key:
            yield Finding(column.name, f"primary key column '{column.name.text}' should be the first column")


def check_named_check(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    definition = table_definition(clause)
    for column in definition.columns:
        tokens = column.constraint_tokens
        for position, token in enumerate(tokens):
            if not token.is_keyword("CHECK"):
                continue
            named = position >= 2 and tokens[position - 2].is_keyword("CONSTRAINT")
            if not named:
                yield Finding(token, f"CHECK constraint on '{column.name.text}' should be named with CONSTRAINT")
    for constraint in definition.constraints:
        if constraint.kind == "CHECK" and constraint.name is None:
            yield Finding(constraint.tokens[0], "table CHECK constraint should be named with CONSTRAINT")


def check_default_order(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    for column in table_definition(clause).columns:
        tokens = column.constraint_tokens
        not_null = next(
            (
                position
                for position in range(len(tokens) - 1)
                if tokens[position].is_keyword("NOT") and tokens[position + 1].is_keyword("NULL")
            ),
            None,
        )
        if not_null is None:
            continue
        default = next(
            (token for token in tokens[not_null + 2 :] if token.is_keyword("DEFAULT")),
            None,
        )
        if default is not None:
            yield Finding(default, f"DEFAULT of column '{column.name.text}' should come before NOT NULL")
