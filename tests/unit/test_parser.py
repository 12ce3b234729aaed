"""parser 모듈 테스트."""

from __future__ import annotations

from sqlstyle_linter.parser import (
    ClauseNode,
    TokenIndex,
    UnknownConstruct,
    parse,
    table_definition,
)
from sqlstyle_linter.tokenizer import tokenize


def _parse(text: str):
    return parse(tokenize(text).tokens)


def _clause_types(text: str) -> list[str]:
    result = _parse(text)
    assert result.failures == ()
    return [node.clause_type for node in result.statements[0].clause_nodes()]


def test_statements_are_split_on_semicolons() -> None:
    result = _parse("SELECT 1; SELECT 2;\n")

    assert len(result.statements) == 2
    assert result.statements[0].tokens[-1].text == ";"
    assert [t.text for t in result.trivia] == ["\n"]


def test_comment_only_input_is_trivia() -> None:
    result = _parse("-- nothing here\n")

    assert result.statements == ()
    assert len(result.trivia) == 2


def test_root_clauses_are_detected() -> None:
    assert _clause_types("SELECT a FROM t WHERE x = 1 GROUP BY a HAVING COUNT(*) > 1 ORDER BY a LIMIT 5") == [
        "SELECT",
        "FROM",
        "WHERE",
        "GROUP_BY",
        "HAVING",
        "ORDER_BY",
        "LIMIT",
    ]


def test_join_keywords_are_grouped() -> None:
    statement = _parse("SELECT a FROM t LEFT OUTER JOIN u ON t.x = u.x").statements[0]
    nodes = statement.clause_nodes()

    assert [node.clause_type for node in nodes] == ["SELECT", "FROM", "JOIN", "ON"]
    assert [keyword.upper for keyword in nodes[2].keywords] == ["LEFT", "OUTER", "JOIN"]


def test_distinct_from_is_not_a_clause() -> None:
    assert _clause_types("SELECT a IS DISTINCT FROM b FROM t") == ["SELECT", "FROM"]


def test_dml_and_cte_clauses() -> None:
    assert _clause_types("WITH cte AS (SELECT 1) SELECT * FROM cte") == ["WITH", "SELECT", "FROM"]
    assert _clause_types("INSERT INTO t (a) VALUES (1)") == ["INSERT", "VALUES"]
    assert _clause_types("UPDATE t SET a = 1 WHERE b = 2") == ["UPDATE", "SET", "WHERE"]
    assert _clause_types("DELETE FROM t WHERE b = 2") == ["DELETE", "WHERE"]
    assert _clause_types("SELECT 1 UNION ALL SELECT 2") == ["SELECT", "SET_OPERATION", "SELECT"]


def test_subqueries_become_child_trees() -> None:
    statement = _parse("SELECT a FROM (SELECT b FROM c) AS s").statements[0]
    from_clause = statement.clause_nodes()[1]

    subqueries = from_clause.subqueries()
    assert len(subqueries) == 1
    assert subqueries[0].depth == 1
    assert [node.clause_type for _, node in statement.walk() if isinstance(node, ClauseNode)] == [
        "SELECT",
        "FROM",
        "SELECT",
        "FROM",
    ]


def test_unrecognised_leading_tokens_form_unknown_construct() -> None:
    statement = _parse("EXPLAIN SELECT 1").statements[0]

    assert isinstance(statement.clauses[0], UnknownConstruct)
    assert statement.clauses[1].clause_type == "SELECT"


def test_unclosed_parenthesis_is_a_statement_failure() -> None:
    result = _parse("SELECT ( 1; SELECT 2;")

    assert len(result.failures) == 1
    error = result.failures[0].error
    assert error.message == "unclosed parenthesis"
    assert (error.line, error.column) == (1, 8)
    assert len(result.statements) == 1


def test_unmatched_closing_parenthesis() -> None:
    result = _parse("SELECT 1)")

    assert result.failures[0].error.message == "unmatched closing parenthesis"
    assert result.failures[0].error.column == 9


def test_table_definition_extracts_columns_and_constraints() -> None:
    statement = _parse(
        "CREATE TABLE staff (staff_id INTEGER PRIMARY KEY, first_name VARCHAR(100) NOT NULL, "
        "CONSTRAINT staff_id_check CHECK (staff_id > 0))"
    ).statements[0]
    clause = statement.clause_nodes()[0]

    definition = table_definition(clause)

    assert clause.clause_type == "CREATE_TABLE"
    assert definition.name is not None and definition.name.text == "staff"
    assert [column.name.text for column in definition.columns] == ["staff_id", "first_name"]
    assert definition.columns[1].type_name == "VARCHAR"
    assert [t.text for t in definition.columns[1].type_tokens] == ["VARCHAR", "(", "100", ")"]
    assert [t.text for t in definition.columns[1].constraint_tokens] == ["NOT", "NULL"]
    assert definition.constraints[0].kind == "CHECK"
    assert definition.constraints[0].name is not None
    assert definition.primary_key_columns == ("staff_id",)


def test_token_index_lookups() -> None:
    tokens = tokenize("SELECT (a)\n  FROM t").tokens
    index = TokenIndex(tokens)
    by_text = {token.text: token for token in tokens}

    assert index.matching(by_text["("]) == by_text[")"]
    assert index.starts_line(by_text["FROM"])
    assert not index.starts_line(by_text["a"])
    assert index.previous(by_text["FROM"], significant=True) == by_text[")"]
    assert index.indentation(2) == 3
