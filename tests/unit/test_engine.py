"""engine 모듈 테스트: 진단 생성."""

from __future__ import annotations

from sqlstyle_linter.common import Diagnostic
from sqlstyle_linter.engine import check, lint_text
from sqlstyle_linter.parser import parse
from sqlstyle_linter.rules import LinterConfig, LinterSettings, Rule, RuleSet, build_ruleset
from sqlstyle_linter.tokenizer import tokenize


def _broken_check(token, context):
    raise RuntimeError("boom")


def _rule_ids(text: str, ruleset: RuleSet | None = None) -> list[str]:
    return [item.rule_id for item in lint_text(text, ruleset)]


def test_lowercase_keyword_yields_one_casing_error() -> None:
    assert lint_text("select 1") == (
        Diagnostic("casing", "error", "casing", 1, 1, "keyword 'select' should be upper case ('SELECT')"),
    )


def test_conforming_statement_has_no_diagnostics() -> None:
    assert lint_text("SELECT 1") == ()


def test_empty_input_has_no_diagnostics() -> None:
    assert lint_text("") == ()


def test_identifier_length_limit() -> None:
    assert _rule_ids(f"SELECT {'a' * 31} FROM t").count("naming-length") == 1
    assert "naming-length" not in _rule_ids(f"SELECT {'a' * 30} FROM t")


def test_identifier_length_limit_follows_settings() -> None:
    settings = LinterSettings(max_identifier_length=10)
    ruleset = build_ruleset(LinterConfig(enable=("naming-length",), settings=settings))
    assert _rule_ids("SELECT abcdefghijk FROM t", ruleset) == ["naming-length"]


def test_unbalanced_parenthesis_is_reported_without_other_rules() -> None:
    diagnostics = lint_text("select ( 1")

    assert [(d.rule_id, d.severity, d.category, d.line, d.column) for d in diagnostics] == [
        ("parse-error", "error", "internal", 1, 8),
    ]


def test_failed_statement_does_not_stop_the_file() -> None:
    assert _rule_ids("SELECT (1;\nselect 2;\n") == ["parse-error", "casing"]


def test_lex_errors_become_diagnostics() -> None:
    diagnostics = lint_text("SELECT 'abc\nFROM t")

    assert diagnostics[0].rule_id == "lex-error"
    assert (diagnostics[0].line, diagnostics[0].column) == (1, 8)


def test_rule_failure_is_reported_and_run_continues() -> None:
    broken = Rule("broken", "Always fails.", "casing", "token", "error", _broken_check)
    ruleset = RuleSet(rules=(broken,))

    diagnostics = lint_text("SELECT 1", ruleset)

    assert [d.rule_id for d in diagnostics] == ["rule-failure"] * 3
    assert {d.severity for d in diagnostics} == {"warning"}


def test_severity_override_is_applied() -> None:
    ruleset = build_ruleset(LinterConfig(severity_overrides={"casing": "warning"}))
    assert [d.severity for d in lint_text("select 1", ruleset)] == ["warning"]


def test_diagnostics_are_sorted_and_inside_the_input() -> None:
    text = "select a ,b\nfrom t where a=1 and b=2;\n"
    diagnostics = lint_text(text, path="query.sql")

    lines = text.split("\n")
    keys = [d.sort_key() for d in diagnostics]
    assert keys == sorted(keys)
    for item in diagnostics:
        assert item.path == "query.sql"
        assert 1 <= item.line <= len(lines)
        assert 1 <= item.column <= len(lines[item.line - 1]) + 1


def test_check_runs_on_a_single_tree() -> None:
    statement = parse(tokenize("select a from t").tokens).statements[0]
    assert [d.rule_id for d in check(statement)] == ["casing", "casing"]
