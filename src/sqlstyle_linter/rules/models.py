"""규칙 모델."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Literal, Mapping

from sqlstyle_linter.common import RuleCategory, Severity, Token
from sqlstyle_linter.parser import StatementTree, TokenIndex

RuleTarget = Literal["token", "clause"]

PROFILES: tuple[str, ...] = ("standard", "orm")
DEFAULT_PROFILE = "standard"


@dataclass(frozen=True)
class Finding:
    """규칙 위반 한 건 (위치 토큰 + 메시지)."""

    token: Token
    message: str


@dataclass(frozen=True)
class Edit:
    """원본 텍스트 ``[start, end)`` 구간 치환. start == end 이면 삽입."""

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class LinterSettings:
    """규칙 파라미터."""

    max_identifier_length: int = 30
    indent_width: int = 4


@dataclass(frozen=True)
class RuleContext:
    """규칙 함수가 읽을 수 있는 유일한 입력."""

    settings: LinterSettings
    index: TokenIndex
    statement: StatementTree | None = None


CheckFunction = Callable[[Any, RuleContext], Iterable[Finding]]
FixFunction = Callable[[Any, RuleContext], Iterable[Edit]]


@dataclass(frozen=True)
class Rule:
    """Declarative rule entry: metadata plus pure check/fix functions."""

    rule_id: str
    description: str
    category: RuleCategory
    target: RuleTarget
    severity: Severity
    check: CheckFunction = field(compare=False, repr=False)
    fix: FixFunction | None = field(default=None, compare=False, repr=False)
    clause_types: frozenset[str] | None = None
    profiles: frozenset[str] = frozenset(PROFILES)

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    def applies_to_clause(self, clause_type: str) -> bool:
        return self.clause_types is None or clause_type in self.clause_types


@dataclass(frozen=True)
class LinterConfig:
    """린터 설정 (.sqlstyle.yaml)."""

    profile: str = DEFAULT_PROFILE
    enable: tuple[str, ...] = ()
    disable: tuple[str, ...] = ()
    severity_overrides: Mapping[str, Severity] = field(default_factory=dict)
    settings: LinterSettings = field(default_factory=LinterSettings)
    workers: int = 1
    source: Path | None = None


@dataclass(frozen=True)
class RuleSet:
    """Rules selected for one run. Shared read-only between workers."""

    rules: tuple[Rule, ...]
    profile: str = DEFAULT_PROFILE
    settings: LinterSettings = field(default_factory=LinterSettings)
    severity_overrides: Mapping[str, Severity] = field(default_factory=dict)

    def __contains__(self, rule_id: object) -> bool:
        return any(rule.rule_id == rule_id for rule in self.rules)

    @property
    def rule_ids(self) -> tuple[str, ...]:
        return tuple(rule.rule_id for rule in self.rules)

    def severity_of(self, rule: Rule) -> Severity:
        return self.severity_overrides.get(rule.rule_id, rule.severity)

    def token_rules(self) -> tuple[Rule, ...]:
        return tuple(rule for rule in self.rules if rule.target == "token")

    def clause_rules(self) -> tuple[Rule, ...]:
        return tuple(rule for rule in self.rules if rule.target == "clause")

    def fixable_rules(self) -> tuple[Rule, ...]:
        return tuple(rule for rule in self.rules if rule.fixable)
