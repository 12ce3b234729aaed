"""Naming convention rules for identifiers, aliases and table definitions."""

from __future__ import annotations

import re
from typing import Iterator

from sqlstyle_linter.common import Token
from sqlstyle_linter.parser import ClauseNode, StatementTree, table_definition

from .models import Finding, RuleContext

_CHARSET_PATTERN = re.compile(r"[A-Za-z0-9_]+")

_SUFFIX_VARIANTS: dict[str, str] = {
    "_address": "_addr",
    "_cnt": "_tally",
    "_count": "_tally",
    "_dt": "_date",
    "_ident": "_id",
    "_nbr": "_num",
    "_nm": "_name",
    "_no": "_num",
    "_number": "_num",
    "_sequence": "_seq",
    "_stat": "_status",
    "_sum": "_total",
}

_HUNGARIAN_PREFIXES = ("tbl", "tb_", "sp_", "usp_", "fn_", "udf_", "vw_")


def identifier_name(token: Token) -> tuple[str, bool] | None:
    """식별자 토큰의 이름과 quoted 여부. 식별자가 아니면 None."""

    if token.kind != "identifier":
        return None
    text = token.text
    if len(text) >= 2 and text[0] in {'"', "`"} and text[-1] == text[0]:
        quote = text[0]
        return text[1:-1].replace(quote * 2, quote), True
    return text, False


def check_length(token: Token, context: RuleContext) -> Iterator[Finding]:
    named = identifier_name(token)
    if named is None:
        return
    name, _ = named
    limit = context.settings.max_identifier_length
    if len(name) > limit:
        yield Finding(token, f"identifier '{name}' is {len(name)} characters long (limit {limit})")


def check_charset(token: Token, context: RuleContext) -> Iterator[Finding]:
    named = identifier_name(token)
    if named is None:
        return
    name, _ = named
    if _CHARSET_PATTERN.fullmatch(name) is None:
        yield Finding(token, f"identifier '{name}' may only contain letters, digits and underscores")
    elif name[0].isdigit():
        yield Finding(token, f"identifier '{name}' must begin with a letter")


def check_underscores(token: Token, context: RuleContext) -> Iterator[Finding]:
    named = identifier_name(token)
    if named is None:
        return
    name, _ = named
    if name.startswith("_") or name.endswith("_"):
        yield Finding(token, f"identifier '{name}' must not begin or end with an underscore")
    elif "__" in name:
        yield Finding(token, f"identifier '{name}' must not contain consecutive underscores")


def check_identifier_case(token: Token, context: RuleContext) -> Iterator[Finding]:
    named = identifier_name(token)
    if named is None:
        return
    name, quoted = named
    if not quoted and name != name.lower():
        yield Finding(token, f"identifier '{name}' should be lower case with underscores ('{_snake_case(name)}')")


def check_quoted(token: Token, context: RuleContext) -> Iterator[Finding]:
    named = identifier_name(token)
    if named is not None and named[1]:
        yield Finding(token, f"avoid quoted identifier {token.text}")


def check_alias_keyword(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    depth = 0
    distinct_on_depth: int | None = None
    before: Token | StatementTree | None = None
    previous: Token | StatementTree | None = None
    for item in clause.significant_items():
        if isinstance(item, Token):
            if item.is_punctuation("("):
                depth += 1
                if _is_distinct_on(before, previous):
                    distinct_on_depth = depth
            elif item.is_punctuation(")"):
                depth -= 1
                if distinct_on_depth is not None and depth < distinct_on_depth:
                    # DISTINCT ON (...) is followed by the select list, not an alias
                    distinct_on_depth = None
                    before, previous = None, None
                    continue
            elif depth == 0 and item.kind == "identifier" and _ends_expression(previous):
                yield Finding(item, f"alias '{item.text}' should be introduced with AS")
        before, previous = previous, item


def check_suffixes(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    for column in table_definition(clause).columns:
        name = _plain_name(column.name)
        for variant, canonical in _SUFFIX_VARIANTS.items():
            if name.endswith(variant) and len(name) > len(variant):
                yield Finding(
                    column.name,
                    f"column '{name}' uses suffix '{variant}'; use the uniform suffix '{canonical}'",
                )
                break


def check_prefixes(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    if clause.clause_type == "CREATE_TABLE":
        name_token = table_definition(clause).name
    else:
        name_token = next(
            (
                child
                for child in clause.children
                if isinstance(child, Token) and child.kind == "identifier"
            ),
            None,
        )
    if name_token is None:
        return
    name = _plain_name(name_token)
    for prefix in _HUNGARIAN_PREFIXES:
        if name.startswith(prefix) and len(name) > len(prefix):
            yield Finding(name_token, f"object name '{name}' uses descriptive prefix '{prefix}'")
            return


def check_table_column_clash(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    definition = table_definition(clause)
    if definition.name is None:
        return
    table_name = _plain_name(definition.name)
    for column in definition.columns:
        if _plain_name(column.name) == table_name:
            yield Finding(column.name, f"column '{column.name.text}' has the same name as its table")


def check_bare_id(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    definition = table_definition(clause)
    for column in definition.columns:
        if _plain_name(column.name) == "id":
            table_name = "" if definition.name is None else _plain_name(definition.name)
            hint = f" such as '{table_name}_id'" if table_name else ""
            yield Finding(column.name, f"avoid a bare 'id' column; use a descriptive name{hint}")


def _is_distinct_on(
    before: Token | StatementTree | None,
    previous: Token | StatementTree | None,
) -> bool:
    if not isinstance(before, Token) or not isinstance(previous, Token):
        return False
    return before.is_keyword("DISTINCT") and previous.is_keyword("ON")


def _ends_expression(item: Token | StatementTree | None) -> bool:
    if item is None or isinstance(item, StatementTree):
        return False
    if item.kind in {"identifier", "literal"}:
        return True
    return item.is_punctuation(")") or item.is_keyword("END")


def _plain_name(token: Token) -> str:
    named = identifier_name(token)
    name = token.text if named is None else named[0]
    return name.lower()


def _snake_case(name: str) -> str:
    spaced = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name)
    return spaced.lower()
