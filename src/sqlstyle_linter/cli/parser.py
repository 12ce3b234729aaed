"""CLI 파서 구성."""

from __future__ import annotations

import argparse

from sqlstyle_linter.cli.commands import COMMAND_MODULES


def build_parser() -> argparse.ArgumentParser:
    """메인 ArgumentParser를 생성하고 서브커맨드를 등록한다."""
    parser = argparse.ArgumentParser(prog="sqlstyle", description="SQL style guide linter and formatter")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--log-config", help="logging dictConfig YAML file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for module in COMMAND_MODULES:
        module.configure(subparsers)

    return parser
