"""CREATE TABLE 절에서 컬럼/제약조건 정의를 추출한다."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from sqlstyle_linter.common import Token

from .models import ClauseNode

ConstraintKind = Literal["PRIMARY KEY", "FOREIGN KEY", "UNIQUE", "CHECK", "OTHER"]

_TABLE_CONSTRAINT_STARTERS = frozenset({"CONSTRAINT", "PRIMARY", "FOREIGN", "UNIQUE", "CHECK", "EXCLUDE"})
_COLUMN_CONSTRAINT_STARTERS = frozenset(
    {
        "AUTO_INCREMENT",
        "CHECK",
        "COLLATE",
        "CONSTRAINT",
        "DEFAULT",
        "GENERATED",
        "IDENTITY",
        "NOT",
        "NULL",
        "PRIMARY",
        "REFERENCES",
        "UNIQUE",
    }
)


@dataclass(frozen=True)
class ColumnDefinition:
    name: Token
    type_tokens: tuple[Token, ...]
    constraint_tokens: tuple[Token, ...]

    @property
    def type_name(self) -> str:
        return self.type_tokens[0].upper if self.type_tokens else ""

    @property
    def is_primary_key(self) -> bool:
        return _contains_sequence(self.constraint_tokens, ("PRIMARY", "KEY"))


@dataclass(frozen=True)
class TableConstraint:
    kind: ConstraintKind
    tokens: tuple[Token, ...]
    name: Token | None = None
    columns: tuple[str, ...] = ()


@dataclass(frozen=True)
class TableDefinition:
    name: Token | None
    columns: tuple[ColumnDefinition, ...] = ()
    constraints: tuple[TableConstraint, ...] = ()

    @property
    def primary_key_columns(self) -> tuple[str, ...]:
        inline = tuple(column.name.text.lower() for column in self.columns if column.is_primary_key)
        declared = tuple(
            name
            for constraint in self.constraints
            if constraint.kind == "PRIMARY KEY"
            for name in constraint.columns
        )
        return inline + declared


def table_definition(clause: ClauseNode) -> TableDefinition:
    """CREATE_TABLE 절을 TableDefinition으로 변환한다. 괄호가 없으면 컬럼 없이 반환."""

    tokens = [
        child for child in clause.children if isinstance(child, Token) and child.is_significant
    ]

    open_position = next(
        (position for position, token in enumerate(tokens) if token.is_punctuation("(")),
        None,
    )
    head = tokens if open_position is None else tokens[:open_position]
    name = next((token for token in reversed(head) if token.kind == "identifier"), None)
    if open_position is None:
        return TableDefinition(name=name)

    columns: list[ColumnDefinition] = []
    constraints: list[TableConstraint] = []
    for part in _split_definitions(tokens, open_position):
        if not part:
            continue
        if part[0].is_keyword(*_TABLE_CONSTRAINT_STARTERS):
            constraints.append(_table_constraint(part))
        else:
            columns.append(_column_definition(part))

    return TableDefinition(name=name, columns=tuple(columns), constraints=tuple(constraints))


def _split_definitions(tokens: list[Token], open_position: int) -> list[list[Token]]:
    parts: list[list[Token]] = [[]]
    depth = 0
    for token in tokens[open_position:]:
        if token.is_punctuation("("):
            depth += 1
            if depth == 1:
                continue
        elif token.is_punctuation(")"):
            depth -= 1
            if depth == 0:
                break
        elif token.is_punctuation(",") and depth == 1:
            parts.append([])
            continue
        parts[-1].append(token)
    return parts


def _column_definition(part: list[Token]) -> ColumnDefinition:
    type_tokens: list[Token] = []
    depth = 0
    position = 1
    while position < len(part):
        token = part[position]
        if depth == 0 and token.is_keyword(*_COLUMN_CONSTRAINT_STARTERS):
            break
        if token.is_punctuation("("):
            depth += 1
        elif token.is_punctuation(")"):
            depth -= 1
        type_tokens.append(token)
        position += 1

    return ColumnDefinition(
        name=part[0],
        type_tokens=tuple(type_tokens),
        constraint_tokens=tuple(part[position:]),
    )


def _table_constraint(part: list[Token]) -> TableConstraint:
    name: Token | None = None
    body = part
    if part[0].is_keyword("CONSTRAINT") and len(part) > 1:
        name = part[1]
        body = part[2:]

    kind: ConstraintKind = "OTHER"
    if _contains_sequence(body[:2], ("PRIMARY", "KEY")):
        kind = "PRIMARY KEY"
    elif _contains_sequence(body[:2], ("FOREIGN", "KEY")):
        kind = "FOREIGN KEY"
    elif body and body[0].is_keyword("UNIQUE"):
        kind = "UNIQUE"
    elif body and body[0].is_keyword("CHECK"):
        kind = "CHECK"

    columns: tuple[str, ...] = ()
    if kind == "PRIMARY KEY":
        columns = _first_group_names(body)

    return TableConstraint(kind=kind, tokens=tuple(part), name=name, columns=columns)


def _first_group_names(tokens: list[Token]) -> tuple[str, ...]:
    names: list[str] = []
    inside = False
    for token in tokens:
        if token.is_punctuation("("):
            inside = True
        elif token.is_punctuation(")"):
            break
        elif inside and token.kind in {"identifier", "keyword"}:
            names.append(token.text.lower())
    return tuple(names)


def _contains_sequence(tokens: tuple[Token, ...] | list[Token], words: tuple[str, ...]) -> bool:
    uppers = [token.upper for token in tokens]
    width = len(words)
    return any(tuple(uppers[start : start + width]) == words for start in range(len(uppers) - width + 1))
