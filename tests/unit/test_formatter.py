"""formatter 테스트: 수정 규칙 적용과 멱등성."""

from __future__ import annotations

from pathlib import Path

import pytest

from sqlstyle_linter.engine import apply_edits, format, format_text, lint_text
from sqlstyle_linter.parser import parse
from sqlstyle_linter.rules import Edit, LinterConfig, build_ruleset
from sqlstyle_linter.tokenizer import tokenize

FIXTURES_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "sql"

SAMPLES = [
    "",
    "select 1",
    "select a,b from t where x=1",
    "select a\n  from t where a = 1 and b = 2",
    "select a.customer_id,b.total from customers a\n  join orders b on a.customer_id=b.customer_id "
    "where b.total>=10 and b.total<=20\n    order by b.total;\n",
    "SELECT a\nFROM (\nselect b from c where d != 1\n        ) AS s;\n",
    "create temp table scratch (\nscratch_id int primary key,\n  note varchar(10)\n    );\n",
    "SELECT (1;\nselect 2;\n",
    "SELECT 'unterminated\nfrom t",
]


def test_format_fixes_casing_and_spacing() -> None:
    assert format_text("select a ,b from t where x=1  ") == "SELECT a, b FROM t WHERE x = 1"


def test_format_rewrites_keyword_choice() -> None:
    assert format_text("CREATE TEMP TABLE scratch (scratch_id INT PRIMARY KEY)") == (
        "CREATE TEMPORARY TABLE scratch (scratch_id INTEGER PRIMARY KEY)"
    )
    assert format_text("SELECT a FROM t WHERE a != 1") == "SELECT a FROM t WHERE a <> 1"


def test_format_lays_out_multiline_statement() -> None:
    assert format_text("select a\n  from t where a = 1 and b = 2") == (
        "SELECT a\nFROM t\nWHERE a = 1\n    AND b = 2"
    )


def test_format_keeps_assignment_operator_intact() -> None:
    assert format_text("select @n := @n + 1 from t") == "SELECT @n := @n + 1 FROM t"
    assert format_text("SET @total:=0;\n") == "SET @total:=0;\n"


def test_format_aligns_closing_parenthesis() -> None:
    formatted = format_text("SELECT a\nFROM (\n    SELECT b\n    FROM c\n    ) AS s")
    assert formatted == "SELECT a\nFROM (\n    SELECT b\n    FROM c\n) AS s"


def test_format_leaves_failed_statements_untouched() -> None:
    assert format_text("select (1;\nselect 2;\n") == "select (1;\nSELECT 2;\n"


def test_format_leaves_lex_error_regions_untouched() -> None:
    formatted = format_text("select 'oops\nfrom t")
    assert "'oops" in formatted
    assert formatted.startswith("SELECT ")


def test_format_respects_the_ruleset() -> None:
    ruleset = build_ruleset(LinterConfig(disable=("casing",)))
    assert format_text("select a,b from t", ruleset) == "select a, b from t"


@pytest.mark.parametrize("text", SAMPLES)
def test_format_is_idempotent(text: str) -> None:
    once = format_text(text)
    assert format_text(once) == once


@pytest.mark.parametrize("path", sorted(FIXTURES_DIR.glob("*.sql")), ids=lambda path: path.name)
def test_format_is_idempotent_on_fixtures(path: Path) -> None:
    once = format_text(path.read_text(encoding="utf-8"))
    assert format_text(once) == once


@pytest.mark.parametrize("text", SAMPLES)
def test_formatted_text_has_no_fixable_violations(text: str) -> None:
    fixable = {rule.rule_id for rule in build_ruleset(LinterConfig()).fixable_rules()}
    remaining = [d.rule_id for d in lint_text(format_text(text)) if d.rule_id in fixable]
    assert remaining == []


def test_format_single_tree() -> None:
    statement = parse(tokenize("select a from t").tokens).statements[0]
    assert format(statement) == "SELECT a FROM t"


def test_apply_edits_drops_overlaps() -> None:
    edits = [Edit(0, 3, "abc"), Edit(1, 2, "X"), Edit(5, 5, "!")]
    assert apply_edits("xyz  end", edits) == "abc  !end"
