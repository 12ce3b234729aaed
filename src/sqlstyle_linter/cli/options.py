"""서브커맨드 공통 옵션: 설정 파일, 프로필, 규칙 선택."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from sqlstyle_linter.common import ConfigError
from sqlstyle_linter.rules import PROFILES, LinterConfig, load_linter_config


def add_config_arguments(parser: argparse.ArgumentParser, *, selection: bool = True) -> None:
    parser.add_argument("--config", help="rule configuration YAML (default: ./.sqlstyle.yaml)")
    parser.add_argument("--profile", choices=PROFILES)
    if not selection:
        return
    parser.add_argument("--enable", help="comma separated rule ids to run exclusively")
    parser.add_argument("--disable", help="comma separated rule ids to skip")
    parser.add_argument("--workers", type=int, help="number of files checked concurrently")


def resolve_config(args: argparse.Namespace) -> LinterConfig:
    """설정 파일을 읽고 CLI 플래그로 덮어쓴다."""
    config = load_linter_config(Path(args.config) if args.config else None)

    changes: dict[str, object] = {}
    if args.profile:
        changes["profile"] = args.profile
    if getattr(args, "enable", None):
        changes["enable"] = _split_ids(args.enable)
    if getattr(args, "disable", None):
        changes["disable"] = config.disable + _split_ids(args.disable)
    workers = getattr(args, "workers", None)
    if workers is not None:
        if workers < 1:
            raise ConfigError("--workers must be a positive integer")
        changes["workers"] = workers
    return replace(config, **changes) if changes else config


def _split_ids(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())
