"""Checker engine: runs the rule table over statement trees."""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import Iterable, Sequence

from sqlstyle_linter.common import Diagnostic, RuleEvaluationError, Token
from sqlstyle_linter.parser import ClauseNode, StatementTree, TokenIndex, parse
from sqlstyle_linter.rules import LinterConfig, Rule, RuleContext, RuleSet, build_ruleset, evaluate
from sqlstyle_linter.tokenizer import tokenize

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def default_ruleset() -> RuleSet:
    """Rules of the default profile with default settings."""

    return build_ruleset(LinterConfig())


def check(
    tree: StatementTree,
    ruleset: RuleSet | None = None,
    *,
    index: TokenIndex | None = None,
    path: str = "",
) -> tuple[Diagnostic, ...]:
    """Checks one statement tree and returns its diagnostics in document order."""

    active = ruleset or default_ruleset()
    lookup = index or TokenIndex(tree.tokens)
    diagnostics = list(_token_diagnostics(tree.tokens, active, RuleContext(active.settings, lookup, tree)))
    for owner, node in tree.walk():
        if not isinstance(node, ClauseNode):
            continue
        context = RuleContext(active.settings, lookup, owner)
        for rule in active.clause_rules():
            diagnostics.extend(_evaluate(rule, node, context, active))
    return _finish(diagnostics, path)


def lint_text(text: str, ruleset: RuleSet | None = None, *, path: str = "") -> tuple[Diagnostic, ...]:
    """Tokenizes, parses and checks a whole file.

    Lex errors and failed statements become internal diagnostics; a failed
    statement gets no other rules.
    """

    active = ruleset or default_ruleset()
    lexed = tokenize(text)
    parsed = parse(lexed.tokens)
    index = TokenIndex(lexed.tokens)

    diagnostics: list[Diagnostic] = [
        Diagnostic("lex-error", "error", "internal", error.line, error.column, error.message)
        for error in lexed.errors
    ]
    diagnostics.extend(
        Diagnostic("parse-error", "error", "internal", failure.error.line, failure.error.column, failure.error.message)
        for failure in parsed.failures
    )
    for statement in parsed.statements:
        diagnostics.extend(check(statement, active, index=index))
    diagnostics.extend(_token_diagnostics(parsed.trivia, active, RuleContext(active.settings, index)))

    logger.debug(
        "linted %s: %d statements, %d failures, %d diagnostics",
        path or "<text>",
        len(parsed.statements),
        len(parsed.failures),
        len(diagnostics),
    )
    return _finish(diagnostics, path)


def _token_diagnostics(tokens: Sequence[Token], ruleset: RuleSet, context: RuleContext) -> Iterable[Diagnostic]:
    rules = ruleset.token_rules()
    for token in tokens:
        for rule in rules:
            yield from _evaluate(rule, token, context, ruleset)


def _evaluate(rule: Rule, node: object, context: RuleContext, ruleset: RuleSet) -> tuple[Diagnostic, ...]:
    try:
        return evaluate(rule, node, context, severity=ruleset.severity_of(rule))
    except RuleEvaluationError as exc:
        logger.warning("rule %s skipped: %s", exc.rule_id, exc)
        return (Diagnostic("rule-failure", "warning", "internal", exc.line, exc.column, exc.message),)


def _finish(diagnostics: Iterable[Diagnostic], path: str) -> tuple[Diagnostic, ...]:
    ordered = sorted(diagnostics, key=lambda item: item.sort_key())
    if path:
        return tuple(item.with_path(path) for item in ordered)
    return tuple(ordered)
