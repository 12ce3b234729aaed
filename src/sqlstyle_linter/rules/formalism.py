"""Standard-SQL formalism rules."""

from __future__ import annotations

from typing import Iterator

from sqlstyle_linter.common import Token
from sqlstyle_linter.parser import ClauseNode
from sqlstyle_linter.tokenizer import VENDOR_FUNCTIONS

from .models import Edit, Finding, RuleContext

_FULL_FORMS = {"INT": "INTEGER", "DEC": "DECIMAL", "TEMP": "TEMPORARY"}
_TEMPORARY_OBJECTS = frozenset({"TABLE", "VIEW", "SEQUENCE"})
_NILADIC_FUNCTIONS = frozenset({"SYSDATE"})
_COMPARISONS = frozenset({"=", "<", ">", "<=", ">="})
_CONNECTIVES = ("AND", "OR")

# (name, operator, first token) of a simple ``name <op> value`` term
_Comparison = tuple[str, str, Token]


def check_vendor_function(token: Token, context: RuleContext) -> Iterator[Finding]:
    if token.kind != "keyword" or token.upper not in VENDOR_FUNCTIONS:
        return
    following = context.index.next(token, significant=True)
    called = following is not None and following.is_punctuation("(")
    if called or token.upper in _NILADIC_FUNCTIONS:
        standard = VENDOR_FUNCTIONS[token.upper]
        yield Finding(token, f"vendor-specific function {token.upper}; use standard {standard}")


def check_full_form(token: Token, context: RuleContext) -> Iterator[Finding]:
    replacement = _full_form(token, context)
    if replacement is not None:
        yield Finding(token, f"use the full keyword '{replacement.upper()}' instead of '{token.text}'")


def fix_full_form(token: Token, context: RuleContext) -> Iterator[Edit]:
    replacement = _full_form(token, context)
    if replacement is not None:
        yield Edit(token.offset, token.end, replacement)


def check_standard_operator(token: Token, context: RuleContext) -> Iterator[Finding]:
    if token.kind == "operator" and token.text == "!=":
        yield Finding(token, "use the standard operator '<>' instead of '!='")


def fix_standard_operator(token: Token, context: RuleContext) -> Iterator[Edit]:
    if token.kind == "operator" and token.text == "!=":
        yield Edit(token.offset, token.end, "<>")


def check_prefer_between(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    for expression in _expressions(clause):
        terms, connectives = _split_terms(expression)
        for position in range(len(terms) - 1):
            if connectives[position] != "AND":
                continue
            left = _comparison(terms[position])
            right = _comparison(terms[position + 1])
            if left is None or right is None or left[0] != right[0]:
                continue
            if {left[1], right[1]} == {">=", "<="}:
                yield Finding(
                    left[2],
                    f"use '{left[0]} BETWEEN ... AND ...' instead of two range comparisons",
                )


def check_prefer_in(clause: ClauseNode, context: RuleContext) -> Iterator[Finding]:
    for expression in _expressions(clause):
        terms, connectives = _split_terms(expression)
        for run in _or_runs(connectives):
            comparisons = [_comparison(terms[position]) for position in run]
            equalities = [item for item in comparisons if item is not None and item[1] == "="]
            if len(equalities) == len(run) and len({item[0] for item in equalities}) == 1:
                name, _, token = equalities[0]
                yield Finding(token, f"use '{name} IN (...)' instead of OR-ed equality comparisons")


def _full_form(token: Token, context: RuleContext) -> str | None:
    full = _FULL_FORMS.get(token.upper) if token.kind == "keyword" else None
    if full is None:
        return None
    if token.upper == "TEMP":
        following = context.index.next(token, significant=True)
        if following is None or not following.is_keyword(*_TEMPORARY_OBJECTS):
            return None
    if token.text.islower():
        return full.lower()
    return full


def _expressions(clause: ClauseNode) -> list[list[Token]]:
    """Significant tokens of the clause split into one list per paren level.

    Each parenthesised group becomes its own expression; the enclosing
    expression keeps only the parentheses.
    """

    finished: list[list[Token]] = []
    stack: list[list[Token]] = [[]]
    for item in clause.significant_items():
        if not isinstance(item, Token):
            continue
        if item.is_punctuation("("):
            stack[-1].append(item)
            stack.append([])
        elif item.is_punctuation(")") and len(stack) > 1:
            finished.append(stack.pop())
            stack[-1].append(item)
        else:
            stack[-1].append(item)
    finished.extend(stack)
    return finished


def _split_terms(tokens: list[Token]) -> tuple[list[list[Token]], list[str]]:
    terms: list[list[Token]] = [[]]
    connectives: list[str] = []
    pending_between = False
    for token in tokens:
        if token.is_keyword("BETWEEN"):
            pending_between = True
        elif token.is_keyword("AND") and pending_between:
            pending_between = False
        elif token.is_keyword(*_CONNECTIVES):
            connectives.append(token.upper)
            terms.append([])
            continue
        terms[-1].append(token)
    return terms, connectives


def _or_runs(connectives: list[str]) -> Iterator[list[int]]:
    """Term positions joined only by OR and not bound to a neighbouring AND."""

    run = [0]
    for position, word in enumerate(connectives):
        if word == "OR":
            run.append(position + 1)
            continue
        yield from _closed_run(run, connectives)
        run = [position + 1]
    yield from _closed_run(run, connectives)


def _closed_run(run: list[int], connectives: list[str]) -> Iterator[list[int]]:
    if len(run) < 2:
        return
    before = connectives[run[0] - 1] if run[0] > 0 else None
    after = connectives[run[-1]] if run[-1] < len(connectives) else None
    if before != "AND" and after != "AND":
        yield run


def _comparison(term: list[Token]) -> _Comparison | None:
    operators = [position for position, token in enumerate(term) if token.kind == "operator"]
    if len(operators) != 1:
        return None
    position = operators[0]
    operator = term[position].text
    if operator not in _COMPARISONS:
        return None
    name = _dotted_name(term[:position])
    value = term[position + 1 :]
    if name is None or not value or not all(_is_value_token(token) for token in value):
        return None
    return name, operator, term[0]


def _dotted_name(tokens: list[Token]) -> str | None:
    if not tokens or len(tokens) % 2 == 0:
        return None
    for position, token in enumerate(tokens):
        if position % 2 == 0 and token.kind != "identifier":
            return None
        if position % 2 == 1 and not token.is_punctuation("."):
            return None
    return "".join(token.text for token in tokens).lower()


def _is_value_token(token: Token) -> bool:
    if token.kind in {"literal", "identifier"} or token.is_punctuation("."):
        return True
    return token.kind == "keyword" and not token.is_keyword("AND", "OR", "NOT", "IS", "IN", "LIKE")
