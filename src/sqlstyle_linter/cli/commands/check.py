"""check 커맨드 핸들러."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from sqlstyle_linter.cli.options import add_config_arguments, resolve_config
from sqlstyle_linter.pipeline import run_check
from sqlstyle_linter.reporter import REPORT_FORMATS, render_text, write_report
from sqlstyle_linter.rules import build_ruleset

INTERRUPTED_EXIT_CODE = 130


def configure(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("check", help="report style guide violations")
    parser.add_argument("paths", nargs="*", help="SQL files or directories ('-' or nothing reads stdin)")
    add_config_arguments(parser)
    parser.add_argument("--report", help="write a machine readable report to this path")
    parser.add_argument("--report-format", choices=REPORT_FORMATS, default="json")
    parser.set_defaults(handler=execute)


def execute(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    ruleset = build_ruleset(config)
    report = run_check(args.paths, ruleset, workers=config.workers)

    sys.stdout.write(render_text(report))
    if args.report:
        path = write_report(report, Path(args.report), args.report_format)
        print(f"[OK] report={path}", file=sys.stderr)

    if report.interrupted:
        return INTERRUPTED_EXIT_CODE
    return report.exit_code
