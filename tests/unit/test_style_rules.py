"""개별 스타일 규칙 테스트."""

from __future__ import annotations

from sqlstyle_linter.engine import lint_text
from sqlstyle_linter.rules import LinterConfig, build_ruleset

ORM = build_ruleset(LinterConfig(profile="orm"))


def _found(text: str, rule_id: str, ruleset=None) -> list[tuple[int, int, str]]:
    return [(d.line, d.column, d.message) for d in lint_text(text, ruleset) if d.rule_id == rule_id]


def _positions(text: str, rule_id: str, ruleset=None) -> list[tuple[int, int]]:
    return [(line, column) for line, column, _ in _found(text, rule_id, ruleset)]


# naming


def test_charset_and_quoted_identifiers() -> None:
    text = 'SELECT "bad-name", "1st" FROM t'

    assert len(_found(text, "naming-charset")) == 2
    assert "must begin with a letter" in _found(text, "naming-charset")[1][2]
    assert _positions(text, "naming-quoted") == [(1, 8), (1, 20)]


def test_underscore_rules() -> None:
    assert _positions("SELECT _hidden, double__score, ok_name FROM t", "naming-underscore") == [(1, 8), (1, 17)]


def test_camel_case_identifier_suggests_snake_case() -> None:
    [(_, _, message)] = _found("SELECT firstName FROM t", "naming-case")
    assert "first_name" in message


def test_alias_without_as() -> None:
    assert _positions("SELECT a b FROM t u", "naming-alias-as") == [(1, 10), (1, 19)]
    assert _positions("SELECT a AS b, COUNT(*) AS n FROM t AS u", "naming-alias-as") == []
    assert _positions("SELECT COUNT(*) total FROM t", "naming-alias-as") == [(1, 17)]
    assert _positions("SELECT DISTINCT ON (a) a, b FROM t", "naming-alias-as") == []
    assert _positions("SELECT DISTINCT ON (a) a x FROM t", "naming-alias-as") == [(1, 26)]


def test_column_suffix_variants() -> None:
    text = "CREATE TABLE shipments (shipment_id INTEGER PRIMARY KEY, sent_dt DATE, item_cnt INTEGER)"
    messages = [message for _, _, message in _found(text, "naming-suffix")]

    assert len(messages) == 2
    assert "'_date'" in messages[0]
    assert "'_tally'" in messages[1]


def test_descriptive_prefixes() -> None:
    assert len(_found("CREATE TABLE tbl_orders (order_id INTEGER PRIMARY KEY)", "naming-prefix")) == 1
    assert len(_found("CREATE VIEW vw_sales AS SELECT 1", "naming-prefix")) == 1
    assert _found("CREATE TABLE orders (order_id INTEGER PRIMARY KEY)", "naming-prefix") == []


def test_column_named_like_table() -> None:
    text = "CREATE TABLE staff (staff_id INTEGER PRIMARY KEY, staff VARCHAR(10))"
    assert len(_found(text, "naming-table-column")) == 1


def test_bare_id_depends_on_profile() -> None:
    text = "CREATE TABLE staff (id INTEGER PRIMARY KEY)"

    [(_, _, message)] = _found(text, "naming-bare-id")
    assert "staff_id" in message
    assert _found(text, "naming-bare-id", ORM) == []
    assert len(_found(text, "type-uuid-key", ORM)) == 1
    assert _found("CREATE TABLE staff (staff_id UUID PRIMARY KEY)", "type-uuid-key", ORM) == []


# spacing


def test_comma_spacing() -> None:
    messages = [message for _, _, message in _found("SELECT a ,b FROM t", "spacing-comma")]
    assert len(messages) == 2
    assert _found("SELECT a,\n       b\nFROM t", "spacing-comma") == []
    assert _found("SELECT a\n     , b\nFROM t", "spacing-comma") == []


def test_operator_spacing() -> None:
    assert _positions("SELECT a FROM t WHERE a=1", "spacing-operator") == [(1, 24)]
    assert _positions("SELECT a FROM t WHERE a = 1 AND b>-1", "spacing-operator") == [(1, 34)]
    assert _found("SELECT a * 2+1 FROM t", "spacing-operator") == []


def test_trailing_whitespace() -> None:
    assert _positions("SELECT a   \nFROM t  ", "spacing-trailing-whitespace") == [(1, 9), (2, 7)]
    assert _positions("SELECT a -- note  \nFROM t", "spacing-trailing-whitespace") == [(1, 10)]
    assert _found("SELECT a\r\nFROM t\r\n", "spacing-trailing-whitespace") == []


# layout


def test_clause_must_start_its_own_line_in_multiline_statement() -> None:
    assert _positions("SELECT a, b\nFROM t WHERE a = 1", "layout-clause-newline") == [(2, 8)]
    assert _found("SELECT a, b FROM t WHERE a = 1", "layout-clause-newline") == []
    assert _found("SELECT a\nFROM t\nJOIN u ON t.x = u.x", "layout-clause-newline") == []


def test_root_keywords_are_left_aligned() -> None:
    assert _positions("SELECT a\n  FROM t", "layout-root-alignment") == [(2, 3)]
    assert _found("SELECT a\nFROM t\n  JOIN u\n    ON t.x = u.x", "layout-root-alignment") == []


def test_and_or_start_a_new_line() -> None:
    assert _positions("SELECT a\nFROM t\nWHERE a = 1 AND b = 2", "layout-and-or-newline") == [(3, 13)]
    assert _found("SELECT a\nFROM t\nWHERE a BETWEEN 1 AND 2\n  AND b = 2", "layout-and-or-newline") == []
    assert _found("SELECT a FROM t WHERE a = 1 AND b = 2", "layout-and-or-newline") == []


def test_continuation_lines_are_indented() -> None:
    assert _positions("SELECT a,\nb\nFROM t", "layout-indent") == [(2, 1)]
    assert _found("SELECT a,\n       b\nFROM t", "layout-indent") == []


def test_closing_parenthesis_alignment() -> None:
    text = "SELECT a\nFROM (\n    SELECT b\n    FROM c\n    ) AS s"
    assert _positions(text, "layout-parenthesis") == [(5, 5)]
    assert _found(text.replace("    ) AS s", ") AS s"), "layout-parenthesis") == []


# formalism


def test_prefer_between() -> None:
    assert len(_found("SELECT a FROM t WHERE a >= 1 AND a <= 5", "prefer-between")) == 1
    assert _found("SELECT a FROM t WHERE a >= 1 AND b <= 5", "prefer-between") == []


def test_prefer_in() -> None:
    assert len(_found("SELECT a FROM t WHERE a = 1 OR a = 2 OR a = 3", "prefer-in")) == 1
    assert len(_found("SELECT a FROM t WHERE (t.a = 1 OR T.A = 2) AND b = 3", "prefer-in")) == 1
    assert _found("SELECT a FROM t WHERE b = 0 AND a = 1 OR a = 2", "prefer-in") == []
    assert _found("SELECT a FROM t WHERE a = 1 OR b = 2", "prefer-in") == []


def test_vendor_functions() -> None:
    messages = [message for _, _, message in _found("SELECT NVL(a, 0), GETDATE() FROM t", "vendor-function")]
    assert messages == [
        "vendor-specific function NVL; use standard COALESCE",
        "vendor-specific function GETDATE; use standard CURRENT_TIMESTAMP",
    ]


def test_keyword_full_form_and_standard_operator() -> None:
    assert len(_found("CREATE TEMP TABLE scratch (scratch_id INT PRIMARY KEY)", "keyword-full-form")) == 2
    assert len(_found("SELECT a FROM t WHERE a != 1", "operator-standard")) == 1
    assert _found("SELECT a FROM t WHERE a <> 1", "operator-standard") == []


# schema


def test_column_type_choice() -> None:
    text = "CREATE TABLE readings (reading_id INTEGER PRIMARY KEY, temperature FLOAT, recorded DATETIME)"

    assert len(_found(text, "type-float")) == 1
    [(_, _, message)] = _found(text, "type-vendor")
    assert "TIMESTAMP" in message


def test_primary_key_rules() -> None:
    assert len(_found("CREATE TABLE notes (body TEXT)", "constraint-primary-key")) == 1
    text = "CREATE TABLE notes (body TEXT, note_id INTEGER PRIMARY KEY)"
    assert len(_found(text, "constraint-primary-key-first")) == 1
    assert _found(text, "constraint-primary-key") == []
    declared = "CREATE TABLE notes (note_id INTEGER, body TEXT, PRIMARY KEY (note_id))"
    assert _found(declared, "constraint-primary-key") == []


def test_check_constraints_must_be_named() -> None:
    unnamed = "CREATE TABLE notes (note_id INTEGER PRIMARY KEY, score INTEGER CHECK (score > 0))"
    named = (
        "CREATE TABLE notes (note_id INTEGER PRIMARY KEY, "
        "score INTEGER CONSTRAINT notes_score_positive CHECK (score > 0))"
    )
    table_level = "CREATE TABLE notes (note_id INTEGER PRIMARY KEY, score INTEGER, CHECK (score > 0))"

    assert len(_found(unnamed, "constraint-check-named")) == 1
    assert _found(named, "constraint-check-named") == []
    assert len(_found(table_level, "constraint-check-named")) == 1


def test_default_before_not_null() -> None:
    wrong = "CREATE TABLE notes (note_id INTEGER PRIMARY KEY, state VARCHAR(10) NOT NULL DEFAULT 'new')"
    right = "CREATE TABLE notes (note_id INTEGER PRIMARY KEY, state VARCHAR(10) DEFAULT 'new' NOT NULL)"

    assert len(_found(wrong, "constraint-default-order")) == 1
    assert _found(right, "constraint-default-order") == []
