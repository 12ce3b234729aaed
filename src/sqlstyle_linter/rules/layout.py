"""Layout rules: clause line breaks, root keyword alignment and indentation.

Root keywords of a statement are left-aligned with its first keyword and
continuation lines are indented one step past the column their clause keyword
is aligned at. Fixes only rewrite the whitespace in front of a token.
"""

from __future__ import annotations

from typing import Iterator

from sqlstyle_linter.common import Token
from sqlstyle_linter.parser import ClauseNode, StatementTree, TokenIndex

from .models import Edit, Finding, RuleContext

_UNBROKEN_CLAUSES = frozenset({"ON"})
_UNALIGNED_CLAUSES = frozenset({"JOIN", "ON"})


def reindent(token: Token, column: int, index: TokenIndex) -> Edit:
    """Edit that moves a line-leading token to ``column``."""

    padding = " " * (column - 1)
    previous = index.previous(token)
    if previous is None or previous.kind != "whitespace":
        return Edit(token.offset, token.offset, padding)
    newline = previous.text.rfind("\n")
    return Edit(previous.offset + newline + 1, previous.end, padding)


def break_line(token: Token, column: int, index: TokenIndex) -> Edit:
    """Edit that starts a new line at ``token`` indented to ``column``."""

    replacement = "\n" + " " * (column - 1)
    previous = index.previous(token)
    if previous is None or previous.kind != "whitespace":
        return Edit(token.offset, token.offset, replacement)
    return Edit(previous.offset, previous.end, replacement)


def check_clause_newline(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    if _needs_break(clause, context):
        yield Finding(clause.keyword, f"clause '{_keyword_text(clause)}' should start on a new line")


def fix_clause_newline(clause: ClauseNode, context: RuleContext) -> Iterator[Edit]:
    if _needs_break(clause, context) and context.statement is not None:
        yield break_line(clause.keyword, context.statement.base_column, context.index)


def check_root_alignment(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    column = _misaligned(clause, context)
    if column is not None:
        yield Finding(
            clause.keyword,
            f"root keyword '{_keyword_text(clause)}' should be left-aligned at column {column}",
        )


def fix_root_alignment(clause: ClauseNode, context: RuleContext) -> Iterator[Edit]:
    column = _misaligned(clause, context)
    if column is not None:
        yield reindent(clause.keyword, column, context.index)


def check_and_or_newline(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    for token in _inline_connectives(clause, context):
        yield Finding(token, f"'{token.upper}' should start a new line")


def fix_and_or_newline(clause: ClauseNode, context: RuleContext) -> Iterator[Edit]:
    column = _continuation_column(clause, context)
    for token in _inline_connectives(clause, context):
        yield break_line(token, column, context.index)


def check_indent(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    for token in _underindented(clause, context):
        yield Finding(token, f"continuation line should be indented past '{_keyword_text(clause)}'")


def fix_indent(clause: ClauseNode, context: RuleContext) -> Iterator[Edit]:
    column = _continuation_column(clause, context)
    for token in _underindented(clause, context):
        yield reindent(token, column, context.index)


def check_closing_parenthesis(token: Token, context: RuleContext) -> Iterator[Finding]:
    column = _closing_column(token, context)
    if column is not None:
        yield Finding(token, f"closing parenthesis should be aligned at column {column}")


def fix_closing_parenthesis(token: Token, context: RuleContext) -> Iterator[Edit]:
    column = _closing_column(token, context)
    if column is not None:
        yield reindent(token, column, context.index)


def _keyword_text(clause: ClauseNode) -> str:
    return " ".join(keyword.upper for keyword in clause.keywords)


def _needs_break(clause: ClauseNode, context: RuleContext) -> bool:
    statement = context.statement
    if statement is None or not statement.is_multiline:
        return False
    if clause.clause_type in _UNBROKEN_CLAUSES:
        return False
    nodes = statement.clause_nodes()
    if nodes and nodes[0] is clause:
        return False
    return not context.index.starts_line(clause.keyword)


def _misaligned(clause: ClauseNode, context: RuleContext) -> int | None:
    statement = context.statement
    if statement is None or clause.clause_type in _UNALIGNED_CLAUSES:
        return None
    if not context.index.starts_line(clause.keyword):
        return None
    column = statement.base_column
    return None if clause.keyword.column == column else column


def _anchor_column(clause: ClauseNode, context: RuleContext) -> int:
    """Column the clause keyword ends up at once root keywords are aligned."""

    statement = context.statement
    if statement is None or clause.clause_type in _UNALIGNED_CLAUSES:
        return context.index.indentation(clause.keyword.line)
    return statement.base_column


def _continuation_column(clause: ClauseNode, context: RuleContext) -> int:
    return _anchor_column(clause, context) + context.settings.indent_width


def _inline_connectives(clause: ClauseNode, context: RuleContext) -> Iterator[Token]:
    statement = context.statement
    if statement is None or not statement.is_multiline:
        return
    depth = 0
    pending_between = False
    for item in clause.significant_items():
        if not isinstance(item, Token):
            continue
        if item.is_punctuation("("):
            depth += 1
        elif item.is_punctuation(")"):
            depth -= 1
        elif depth != 0:
            continue
        elif item.is_keyword("BETWEEN"):
            pending_between = True
        elif item.is_keyword("AND") and pending_between:
            pending_between = False
        elif item.is_keyword("AND", "OR") and not context.index.starts_line(item):
            yield item


def _underindented(clause: ClauseNode, context: RuleContext) -> Iterator[Token]:
    index = context.index
    limit = _anchor_column(clause, context)
    for child in clause.children:
        if isinstance(child, StatementTree):
            token = child.first_token
        elif child.is_significant and not child.is_punctuation(")"):
            token = child
        else:
            continue
        if token.line != clause.keyword.line and index.starts_line(token) and token.column <= limit:
            yield token


def _closing_column(token: Token, context: RuleContext) -> int | None:
    if not token.is_punctuation(")"):
        return None
    index = context.index
    opening = index.matching(token)
    if opening is None or opening.line == token.line or not index.starts_line(token):
        return None
    column = index.indentation(opening.line)
    return None if token.column == column else column
