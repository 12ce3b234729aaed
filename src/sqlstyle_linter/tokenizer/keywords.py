"""SQL keyword tables used to classify words."""

from __future__ import annotations

RESERVED_WORDS = frozenset(
    {
        "ADD", "ALL", "ALTER", "AND", "ANY", "AS", "ASC", "AUTO_INCREMENT",
        "BEGIN", "BETWEEN", "BY", "CASCADE", "CASE", "CHECK", "COLLATE",
        "COLUMN", "COMMIT", "CONFLICT", "CONSTRAINT", "CREATE", "CROSS",
        "CURRENT", "DEFAULT", "DELETE", "DESC", "DISTINCT", "DO", "DROP",
        "ELSE", "END", "ESCAPE", "EXCEPT", "EXISTS", "EXPLAIN", "FALSE",
        "FETCH", "FILTER", "FIRST", "FOLLOWING", "FOR", "FOREIGN", "FROM",
        "FULL", "FUNCTION", "GENERATED", "GLOBAL", "GRANT", "GROUP",
        "HAVING", "IDENTITY", "IF", "ILIKE", "IN", "INDEX", "INNER",
        "INSERT", "INTERSECT", "INTO", "IS", "JOIN", "KEY", "LAST",
        "LATERAL", "LEFT", "LIKE", "LIMIT", "LOCAL", "MATCHED", "MERGE",
        "NATURAL", "NEXT", "NO", "NOT", "NOTHING", "NULL", "NULLS", "OF",
        "OFFSET", "ON", "ONLY", "OR", "ORDER", "OUTER", "OVER", "PARTITION",
        "PRECEDING", "PRIMARY", "PROCEDURE", "RANGE", "RECURSIVE",
        "REFERENCES", "REPLACE", "RESTRICT", "RETURNING", "REVOKE", "RIGHT",
        "ROLLBACK", "ROW", "ROWS", "SCHEMA", "SELECT", "SEQUENCE", "SET",
        "SIMILAR", "SOME", "TABLE", "TEMP", "TEMPORARY", "THEN", "TO",
        "TRANSACTION", "TRIGGER", "TRUE", "TRUNCATE", "UNBOUNDED", "UNION",
        "UNIQUE", "UPDATE", "USING", "VALUES", "VIEW", "WHEN", "WHERE",
        "WINDOW", "WITH", "WITHIN", "WITHOUT",
    }
)

STANDARD_FUNCTIONS = frozenset(
    {
        "ABS", "AVG", "CAST", "CEIL", "CEILING", "CHAR_LENGTH", "COALESCE",
        "COUNT", "CURRENT_DATE", "CURRENT_TIME", "CURRENT_TIMESTAMP",
        "DENSE_RANK", "EXTRACT", "FLOOR", "LAG", "LEAD", "LOWER", "MAX",
        "MIN", "MOD", "NULLIF", "POSITION", "RANK", "ROUND", "ROW_NUMBER",
        "SUBSTRING", "SUM", "TRIM", "UPPER",
    }
)

VENDOR_FUNCTIONS: dict[str, str] = {
    "GETDATE": "CURRENT_TIMESTAMP",
    "IFNULL": "COALESCE",
    "ISNULL": "COALESCE",
    "LCASE": "LOWER",
    "LEN": "CHAR_LENGTH",
    "NOW": "CURRENT_TIMESTAMP",
    "NVL": "COALESCE",
    "SUBSTR": "SUBSTRING",
    "SYSDATE": "CURRENT_TIMESTAMP",
    "UCASE": "UPPER",
}

STANDARD_TYPES = frozenset(
    {
        "BIGINT", "BLOB", "BOOLEAN", "CHAR", "CHARACTER", "CLOB", "DATE",
        "DEC", "DECIMAL", "DOUBLE", "FLOAT", "INT", "INTEGER", "INTERVAL",
        "NUMERIC", "PRECISION", "REAL", "SMALLINT", "TEXT", "TIME",
        "TIMESTAMP", "UUID", "VARCHAR", "VARYING", "ZONE",
    }
)

VENDOR_TYPES: dict[str, str] = {
    "BIGSERIAL": "BIGINT GENERATED ALWAYS AS IDENTITY",
    "BIT": "BOOLEAN",
    "DATETIME": "TIMESTAMP",
    "DATETIME2": "TIMESTAMP",
    "LONGTEXT": "CLOB",
    "MEDIUMINT": "INTEGER",
    "MEDIUMTEXT": "CLOB",
    "MONEY": "DECIMAL",
    "NCHAR": "CHAR",
    "NUMBER": "NUMERIC",
    "NVARCHAR": "VARCHAR",
    "SERIAL": "INTEGER GENERATED ALWAYS AS IDENTITY",
    "SMALLDATETIME": "TIMESTAMP",
    "SMALLMONEY": "DECIMAL",
    "TINYINT": "SMALLINT",
    "TINYTEXT": "VARCHAR",
    "UNIQUEIDENTIFIER": "UUID",
    "VARCHAR2": "VARCHAR",
}

KEYWORDS = (
    RESERVED_WORDS
    | STANDARD_FUNCTIONS
    | frozenset(VENDOR_FUNCTIONS)
    | STANDARD_TYPES
    | frozenset(VENDOR_TYPES)
)


def is_keyword(word: str) -> bool:
    return word.upper() in KEYWORDS
