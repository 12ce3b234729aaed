"""list-rules 커맨드 핸들러."""

from __future__ import annotations

import argparse

from sqlstyle_linter.cli.options import add_config_arguments, resolve_config
from sqlstyle_linter.rules import build_ruleset, list_rules


def configure(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("list-rules", help="show the rule table of a profile")
    add_config_arguments(parser, selection=False)
    parser.set_defaults(handler=execute)


def execute(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    ruleset = build_ruleset(config)

    for rule in list_rules(config.profile):
        fixable = "fix" if rule.fixable else "-"
        print(
            f"{rule.rule_id:<30} {rule.category:<17} {ruleset.severity_of(rule):<8} "
            f"{fixable:<4} {rule.description}"
        )
    return 0
