"""공통 모델과 예외."""

from .exceptions import (
    ConfigError,
    LexError,
    LintError,
    ParseError,
    RuleEvaluationError,
    UnknownRuleError,
    UserInputError,
)
from .models import (
    SEVERITIES,
    CheckReport,
    Diagnostic,
    DiagnosticCategory,
    FileResult,
    LexResult,
    RuleCategory,
    Severity,
    Token,
    TokenKind,
)

__all__ = [
    "SEVERITIES",
    "CheckReport",
    "ConfigError",
    "Diagnostic",
    "DiagnosticCategory",
    "FileResult",
    "LexError",
    "LexResult",
    "LintError",
    "ParseError",
    "RuleCategory",
    "RuleEvaluationError",
    "Severity",
    "Token",
    "TokenKind",
    "UnknownRuleError",
    "UserInputError",
]
