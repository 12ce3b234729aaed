"""Custom exceptions for command exit mapping and lint stage errors."""

from __future__ import annotations


class UserInputError(Exception):
    """Raised when user input or environment is invalid."""


class ConfigError(UserInputError):
    """Raised when the rule configuration cannot be loaded at startup."""


class UnknownRuleError(UserInputError):
    """Raised when a rule id is not part of the rule table."""


class LintError(Exception):
    """Base class for recoverable errors located in SQL source text."""

    def __init__(self, message: str, line: int, column: int, offset: int) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset

    def __str__(self) -> str:
        return f"{self.message} (line {self.line}, column {self.column})"


class LexError(LintError):
    """Malformed token: unterminated string/comment or unexpected character."""


class ParseError(LintError):
    """Unbalanced parentheses inside one statement."""


class RuleEvaluationError(LintError):
    """A rule predicate raised while inspecting a node."""

    def __init__(self, rule_id: str, message: str, line: int, column: int, offset: int) -> None:
        super().__init__(message, line, column, offset)
        self.rule_id = rule_id
