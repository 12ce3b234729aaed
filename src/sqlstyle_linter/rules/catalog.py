"""Rule table and rule evaluation.

``RULES`` is built once at import time and never mutated; every run selects
from it through ``build_ruleset``.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlstyle_linter.common import (
    SEVERITIES,
    ConfigError,
    Diagnostic,
    RuleEvaluationError,
    Severity,
    Token,
    UnknownRuleError,
)
from sqlstyle_linter.parser import ClauseNode

from . import casing, formalism, layout, naming, schema, spacing
from .models import PROFILES, Edit, LinterConfig, Rule, RuleContext, RuleSet

logger = logging.getLogger(__name__)

_CREATE_CLAUSES = frozenset({"CREATE_TABLE", "CREATE_VIEW", "CREATE"})
_CONDITION_CLAUSES = frozenset({"WHERE", "HAVING", "ON", "JOIN"})
_TABLE = frozenset({"CREATE_TABLE"})

_RULE_ENTRIES = (
    Rule(
        "casing",
        "Keywords are written in upper case.",
        "casing",
        "token",
        "error",
        casing.check_keyword_case,
        casing.fix_keyword_case,
    ),
    Rule(
        "naming-length",
        "Identifiers are at most max_identifier_length characters long.",
        "naming",
        "token",
        "error",
        naming.check_length,
    ),
    Rule(
        "naming-charset",
        "Identifiers use only letters, digits and underscores and begin with a letter.",
        "naming",
        "token",
        "error",
        naming.check_charset,
    ),
    Rule(
        "naming-underscore",
        "Identifiers do not begin or end with an underscore or repeat underscores.",
        "naming",
        "token",
        "warning",
        naming.check_underscores,
    ),
    Rule(
        "naming-case",
        "Unquoted identifiers are lower case with underscores.",
        "naming",
        "token",
        "warning",
        naming.check_identifier_case,
    ),
    Rule(
        "naming-quoted",
        "Quoted identifiers are avoided.",
        "naming",
        "token",
        "warning",
        naming.check_quoted,
    ),
    Rule(
        "naming-alias-as",
        "Aliases are introduced with the AS keyword.",
        "naming",
        "clause",
        "warning",
        naming.check_alias_keyword,
        clause_types=frozenset({"SELECT", "FROM", "JOIN"}),
    ),
    Rule(
        "naming-suffix",
        "Columns use the uniform suffixes (_id, _status, _total, _num, ...).",
        "naming",
        "clause",
        "warning",
        naming.check_suffixes,
        clause_types=_TABLE,
    ),
    Rule(
        "naming-prefix",
        "Object names carry no descriptive prefix such as tbl_ or sp_.",
        "naming",
        "clause",
        "warning",
        naming.check_prefixes,
        clause_types=_CREATE_CLAUSES,
    ),
    Rule(
        "naming-table-column",
        "A column never has the same name as its table.",
        "naming",
        "clause",
        "warning",
        naming.check_table_column_clash,
        clause_types=_TABLE,
    ),
    Rule(
        "naming-bare-id",
        "Tables avoid a bare 'id' column.",
        "naming",
        "clause",
        "warning",
        naming.check_bare_id,
        clause_types=_TABLE,
        profiles=frozenset({"standard"}),
    ),
    Rule(
        "spacing-trailing-whitespace",
        "Lines carry no trailing whitespace.",
        "spacing",
        "token",
        "warning",
        spacing.check_trailing_whitespace,
        spacing.fix_trailing_whitespace,
    ),
    Rule(
        "spacing-operator",
        "Comparison operators and || are surrounded by spaces.",
        "spacing",
        "token",
        "warning",
        spacing.check_operator_spacing,
        spacing.fix_operator_spacing,
    ),
    Rule(
        "spacing-comma",
        "Commas have no space before and a space or line break after.",
        "spacing",
        "token",
        "warning",
        spacing.check_comma_spacing,
        spacing.fix_comma_spacing,
    ),
    Rule(
        "layout-clause-newline",
        "In a multi-line statement every root clause starts its own line.",
        "layout",
        "clause",
        "warning",
        layout.check_clause_newline,
        layout.fix_clause_newline,
    ),
    Rule(
        "layout-root-alignment",
        "Root keywords are left-aligned with the first keyword of the statement.",
        "layout",
        "clause",
        "warning",
        layout.check_root_alignment,
        layout.fix_root_alignment,
    ),
    Rule(
        "layout-and-or-newline",
        "In a multi-line statement AND and OR start their own line.",
        "layout",
        "clause",
        "warning",
        layout.check_and_or_newline,
        layout.fix_and_or_newline,
        clause_types=_CONDITION_CLAUSES,
    ),
    Rule(
        "layout-indent",
        "Continuation lines are indented past their clause keyword.",
        "layout",
        "clause",
        "warning",
        layout.check_indent,
        layout.fix_indent,
    ),
    Rule(
        "layout-parenthesis",
        "A closing parenthesis on its own line aligns with the line that opened it.",
        "layout",
        "token",
        "warning",
        layout.check_closing_parenthesis,
        layout.fix_closing_parenthesis,
    ),
    Rule(
        "prefer-between",
        "BETWEEN is used instead of two range comparisons.",
        "formalism",
        "clause",
        "warning",
        formalism.check_prefer_between,
        clause_types=_CONDITION_CLAUSES,
    ),
    Rule(
        "prefer-in",
        "IN is used instead of OR-ed equality comparisons.",
        "formalism",
        "clause",
        "warning",
        formalism.check_prefer_in,
        clause_types=_CONDITION_CLAUSES,
    ),
    Rule(
        "vendor-function",
        "Standard functions are used instead of vendor-specific ones.",
        "formalism",
        "token",
        "warning",
        formalism.check_vendor_function,
    ),
    Rule(
        "keyword-full-form",
        "Keywords are written in full (INTEGER, DECIMAL, TEMPORARY).",
        "formalism",
        "token",
        "warning",
        formalism.check_full_form,
        formalism.fix_full_form,
    ),
    Rule(
        "operator-standard",
        "The standard inequality operator <> is used instead of !=.",
        "formalism",
        "token",
        "warning",
        formalism.check_standard_operator,
        formalism.fix_standard_operator,
    ),
    Rule(
        "type-float",
        "Floating point column types are avoided.",
        "type-choice",
        "clause",
        "warning",
        schema.check_float_types,
        clause_types=_TABLE,
    ),
    Rule(
        "type-vendor",
        "Column types are standard SQL types.",
        "type-choice",
        "clause",
        "warning",
        schema.check_vendor_types,
        clause_types=_TABLE,
    ),
    Rule(
        "type-uuid-key",
        "Primary keys use the UUID type.",
        "type-choice",
        "clause",
        "warning",
        schema.check_uuid_primary_key,
        clause_types=_TABLE,
        profiles=frozenset({"orm"}),
    ),
    Rule(
        "constraint-primary-key",
        "Every table declares a primary key.",
        "constraint-style",
        "clause",
        "warning",
        schema.check_primary_key,
        clause_types=_TABLE,
    ),
    Rule(
        "constraint-primary-key-first",
        "A column-level primary key is declared on the first column.",
        "constraint-style",
        "clause",
        "warning",
        schema.check_primary_key_first,
        clause_types=_TABLE,
    ),
    Rule(
        "constraint-check-named",
        "CHECK constraints are named with CONSTRAINT.",
        "constraint-style",
        "clause",
        "warning",
        schema.check_named_check,
        clause_types=_TABLE,
    ),
    Rule(
        "constraint-default-order",
        "DEFAULT is declared before NOT NULL.",
        "constraint-style",
        "clause",
        "warning",
        schema.check_default_order,
        clause_types=_TABLE,
    ),
)

RULES: tuple[Rule, ...] = tuple(sorted(_RULE_ENTRIES, key=lambda rule: rule.rule_id))
_RULES_BY_ID = {rule.rule_id: rule for rule in RULES}


def list_rules(profile: str | None = None) -> tuple[Rule, ...]:
    """Rules ordered by id, optionally limited to one profile."""

    if profile is None:
        return RULES
    _check_profile(profile)
    return tuple(rule for rule in RULES if profile in rule.profiles)


def get_rule(rule_id: str) -> Rule:
    try:
        return _RULES_BY_ID[rule_id]
    except KeyError:
        raise UnknownRuleError(f"unknown rule id: {rule_id}") from None


def build_ruleset(config: LinterConfig) -> RuleSet:
    """Selects the rules of one run. Unknown ids abort with ConfigError."""

    _check_profile(config.profile)
    referenced = [*config.enable, *config.disable, *config.severity_overrides]
    unknown = sorted({rule_id for rule_id in referenced if rule_id not in _RULES_BY_ID})
    if unknown:
        raise ConfigError(f"unknown rule id(s) in configuration: {', '.join(unknown)}")
    for rule_id, severity in config.severity_overrides.items():
        if severity not in SEVERITIES:
            raise ConfigError(f"invalid severity for {rule_id}: {severity!r}")

    if config.enable:
        selected = tuple(rule for rule in RULES if rule.rule_id in config.enable)
    else:
        selected = list_rules(config.profile)
    disabled = set(config.disable)
    rules = tuple(rule for rule in selected if rule.rule_id not in disabled)

    logger.debug("ruleset: profile=%s rules=%d", config.profile, len(rules))
    return RuleSet(
        rules=rules,
        profile=config.profile,
        settings=config.settings,
        severity_overrides=dict(config.severity_overrides),
    )


def evaluate(
    rule: Rule,
    node: Any,
    context: RuleContext,
    *,
    severity: Severity | None = None,
) -> tuple[Diagnostic, ...]:
    """Runs one rule against one node.

    A node of the wrong kind yields nothing. Exceptions raised by the rule
    are wrapped into ``RuleEvaluationError``.
    """

    if not _accepts(rule, node):
        return ()
    try:
        findings = tuple(rule.check(node, context))
    except Exception as exc:
        raise _evaluation_error(rule, node, exc) from exc

    level = severity or rule.severity
    return tuple(
        Diagnostic(
            rule_id=rule.rule_id,
            severity=level,
            category=rule.category,
            line=finding.token.line,
            column=finding.token.column,
            message=finding.message,
        )
        for finding in findings
    )


def fixes(rule: Rule, node: Any, context: RuleContext) -> tuple[Edit, ...]:
    """Edits proposed by one rule for one node; empty for rules without a fix."""

    if rule.fix is None or not _accepts(rule, node):
        return ()
    try:
        return tuple(rule.fix(node, context))
    except Exception as exc:
        raise _evaluation_error(rule, node, exc) from exc


def _accepts(rule: Rule, node: Any) -> bool:
    if rule.target == "token":
        return isinstance(node, Token)
    return isinstance(node, ClauseNode) and rule.applies_to_clause(node.clause_type)


def _evaluation_error(rule: Rule, node: Any, exc: Exception) -> RuleEvaluationError:
    token = node if isinstance(node, Token) else node.keyword
    return RuleEvaluationError(
        rule.rule_id,
        f"rule {rule.rule_id} failed: {exc}",
        token.line,
        token.column,
        token.offset,
    )


def _check_profile(profile: str) -> None:
    if profile not in PROFILES:
        raise ConfigError(f"unknown profile: {profile} (expected one of {', '.join(PROFILES)})")
