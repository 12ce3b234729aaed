"""Shared data models for SQL Style Linter."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal

from .exceptions import LexError

TokenKind = Literal[
    "keyword",
    "identifier",
    "literal",
    "operator",
    "punctuation",
    "comment",
    "whitespace",
    "error",
]

Severity = Literal["error", "warning"]

RuleCategory = Literal[
    "casing",
    "naming",
    "spacing",
    "layout",
    "formalism",
    "type-choice",
    "constraint-style",
]

DiagnosticCategory = Literal[
    "casing",
    "naming",
    "spacing",
    "layout",
    "formalism",
    "type-choice",
    "constraint-style",
    "internal",
]

SEVERITIES: tuple[Severity, ...] = ("error", "warning")

_NON_SIGNIFICANT_KINDS = frozenset({"whitespace", "comment", "error"})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.text)

    @property
    def upper(self) -> str:
        return self.text.upper()

    @property
    def is_significant(self) -> bool:
        return self.kind not in _NON_SIGNIFICANT_KINDS

    def is_keyword(self, *words: str) -> bool:
        if self.kind != "keyword":
            return False
        return not words or self.text.upper() in words

    def is_punctuation(self, text: str) -> bool:
        return self.kind == "punctuation" and self.text == text


@dataclass(frozen=True)
class LexResult:
    tokens: tuple[Token, ...]
    errors: tuple[LexError, ...] = ()


@dataclass(frozen=True)
class Diagnostic:
    rule_id: str
    severity: Severity
    category: DiagnosticCategory
    line: int
    column: int
    message: str
    path: str = ""

    def sort_key(self) -> tuple[int, int, str, str]:
        return (self.line, self.column, self.rule_id, self.message)

    def with_path(self, path: str) -> Diagnostic:
        return replace(self, path=path)

    def to_record(self) -> dict[str, object]:
        return {
            "file": self.path,
            "rule": self.rule_id,
            "severity": self.severity,
            "category": self.category,
            "line": self.line,
            "column": self.column,
            "message": self.message,
        }


@dataclass(frozen=True)
class FileResult:
    path: str
    diagnostics: tuple[Diagnostic, ...] = ()
    formatted: str | None = None
    changed: bool = False


@dataclass(frozen=True)
class CheckReport:
    files: tuple[FileResult, ...] = field(default_factory=tuple)
    interrupted: bool = False

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(item for result in self.files for item in result.diagnostics)

    @property
    def counts(self) -> dict[Severity, int]:
        counts: dict[Severity, int] = {severity: 0 for severity in SEVERITIES}
        for item in self.diagnostics:
            counts[item.severity] += 1
        return counts

    @property
    def error_count(self) -> int:
        return self.counts["error"]

    @property
    def warning_count(self) -> int:
        return self.counts["warning"]

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def exit_code(self) -> int:
        return 1 if self.has_errors else 0
