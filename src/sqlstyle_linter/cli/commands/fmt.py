"""format 커맨드 핸들러."""

from __future__ import annotations

import argparse
import sys

from sqlstyle_linter.cli.commands.check import INTERRUPTED_EXIT_CODE
from sqlstyle_linter.cli.options import add_config_arguments, resolve_config
from sqlstyle_linter.pipeline import STDIN_NAME, run_format
from sqlstyle_linter.rules import build_ruleset


def configure(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("format", help="rewrite layout, spacing and keyword casing")
    parser.add_argument("paths", nargs="*", help="SQL files or directories ('-' or nothing reads stdin)")
    parser.add_argument("--in-place", action="store_true", help="rewrite changed files instead of printing")
    add_config_arguments(parser)
    parser.set_defaults(handler=execute)


def execute(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    ruleset = build_ruleset(config)
    report = run_format(args.paths, ruleset, in_place=args.in_place, workers=config.workers)

    for result in report.files:
        for diagnostic in result.diagnostics:
            print(f"[ERROR] {result.path}: {diagnostic.message}", file=sys.stderr)
        if result.formatted is None:
            continue
        # standard input has no file to rewrite
        if args.in_place and result.path != STDIN_NAME:
            if result.changed:
                print(f"[OK] formatted={result.path}")
        else:
            sys.stdout.write(result.formatted)

    if report.interrupted:
        return INTERRUPTED_EXIT_CODE
    return report.exit_code
