"""CLI 커맨드 모듈."""

from __future__ import annotations

from types import ModuleType

from sqlstyle_linter.cli.commands import check, fmt, list_rules

COMMAND_MODULES: list[ModuleType] = [check, fmt, list_rules]

__all__ = ["COMMAND_MODULES"]
