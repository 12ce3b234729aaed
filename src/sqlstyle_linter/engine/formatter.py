"""Formatter: applies fixable rules until the text stops changing."""

from __future__ import annotations

import logging
from typing import Iterable

from sqlstyle_linter.common import RuleEvaluationError, Token
from sqlstyle_linter.parser import ClauseNode, StatementTree, TokenIndex, parse
from sqlstyle_linter.rules import Edit, Rule, RuleContext, RuleSet, fixes
from sqlstyle_linter.tokenizer import tokenize

from .service import default_ruleset

logger = logging.getLogger(__name__)

MAX_PASSES = 10


def format_text(text: str, ruleset: RuleSet | None = None) -> str:
    """Rewrites whitespace, keyword casing and keyword choice.

    Each fixable rule is applied on its own, re-tokenizing in between, and
    the whole sequence repeats until a pass changes nothing. Statements that
    fail to parse and lex-error regions are left as they are.
    """

    active = ruleset or default_ruleset()
    rules = active.fixable_rules()
    current = text
    for pass_number in range(1, MAX_PASSES + 1):
        changed = False
        for rule in rules:
            updated = _apply_rule(current, rule, active)
            if updated != current:
                logger.debug("pass %d: %s rewrote the text", pass_number, rule.rule_id)
                current = updated
                changed = True
        if not changed:
            return current
    logger.warning("formatting did not settle after %d passes", MAX_PASSES)
    return current


def format(tree: StatementTree, ruleset: RuleSet | None = None) -> str:  # noqa: A001
    """Formats the source text of one statement tree."""

    return format_text(tree.text, ruleset)


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """Applies non-overlapping edits; an edit overlapping an earlier one is dropped."""

    pieces: list[str] = []
    cursor = 0
    for edit in sorted(set(edits), key=lambda item: (item.start, item.end, item.text)):
        if edit.start < cursor:
            continue
        pieces.append(text[cursor : edit.start])
        pieces.append(edit.text)
        cursor = edit.end
    pieces.append(text[cursor:])
    return "".join(pieces)


def _apply_rule(text: str, rule: Rule, ruleset: RuleSet) -> str:
    lexed = tokenize(text)
    parsed = parse(lexed.tokens)
    index = TokenIndex(lexed.tokens)
    settings = ruleset.settings

    edits: list[Edit] = []
    for statement in parsed.statements:
        if rule.target == "token":
            context = RuleContext(settings, index, statement)
            for token in statement.tokens:
                edits.extend(_fixes(rule, token, context))
            continue
        for owner, node in statement.walk():
            if isinstance(node, ClauseNode):
                edits.extend(_fixes(rule, node, RuleContext(settings, index, owner)))
    if rule.target == "token":
        context = RuleContext(settings, index)
        for token in parsed.trivia:
            edits.extend(_fixes(rule, token, context))

    if not edits:
        return text
    protected = [token for token in lexed.tokens if token.kind == "error"]
    return apply_edits(text, (edit for edit in edits if not _touches(edit, protected)))


def _fixes(rule: Rule, node: Token | ClauseNode, context: RuleContext) -> tuple[Edit, ...]:
    try:
        return fixes(rule, node, context)
    except RuleEvaluationError as exc:
        logger.warning("fix %s skipped: %s", exc.rule_id, exc)
        return ()


def _touches(edit: Edit, protected: list[Token]) -> bool:
    return any(edit.start < token.end and edit.end > token.offset for token in protected)
