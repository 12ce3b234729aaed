"""Keyword casing rule."""

from __future__ import annotations

from typing import Iterator

from sqlstyle_linter.common import Token

from .models import Edit, Finding, RuleContext


def check_keyword_case(token: Token, context: RuleContext) -> Iterator[Finding]:
    if token.kind == "keyword" and token.text != token.upper:
        yield Finding(token, f"keyword '{token.text}' should be upper case ('{token.upper}')")


def fix_keyword_case(token: Token, context: RuleContext) -> Iterator[Edit]:
    if token.kind == "keyword" and token.text != token.upper:
        yield Edit(token.offset, token.end, token.upper)
