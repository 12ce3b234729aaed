"""규칙 테이블, 규칙 모델, 설정 로딩."""

from .catalog import RULES, build_ruleset, evaluate, fixes, get_rule, list_rules
from .loader import DEFAULT_CONFIG_NAME, load_linter_config
from .models import (
    DEFAULT_PROFILE,
    PROFILES,
    Edit,
    Finding,
    LinterConfig,
    LinterSettings,
    Rule,
    RuleContext,
    RuleSet,
)

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_PROFILE",
    "PROFILES",
    "RULES",
    "Edit",
    "Finding",
    "LinterConfig",
    "LinterSettings",
    "Rule",
    "RuleContext",
    "RuleSet",
    "build_ruleset",
    "evaluate",
    "fixes",
    "get_rule",
    "list_rules",
    "load_linter_config",
]
