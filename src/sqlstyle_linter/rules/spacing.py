"""Whitespace rules: trailing blanks, operator and comma spacing."""

from __future__ import annotations

from typing import Iterator

from sqlstyle_linter.common import Token

from .models import Edit, Finding, RuleContext

_SPACED_OPERATORS = frozenset({"=", "<>", "!=", "<", ">", "<=", ">=", "||"})


def check_trailing_whitespace(token: Token, context: RuleContext) -> Iterator[Finding]:
    if _strip_trailing(token, context) != token.text:
        yield Finding(token, "trailing whitespace")


def fix_trailing_whitespace(token: Token, context: RuleContext) -> Iterator[Edit]:
    stripped = _strip_trailing(token, context)
    if stripped != token.text:
        yield Edit(token.offset, token.end, stripped)


def check_operator_spacing(token: Token, context: RuleContext) -> Iterator[Finding]:
    before, after = _missing_operator_space(token, context)
    if before or after:
        yield Finding(token, f"operator '{token.text}' should be surrounded by spaces")


def fix_operator_spacing(token: Token, context: RuleContext) -> Iterator[Edit]:
    before, after = _missing_operator_space(token, context)
    if before:
        yield Edit(token.offset, token.offset, " ")
    if after:
        yield Edit(token.end, token.end, " ")


def check_comma_spacing(token: Token, context: RuleContext) -> Iterator[Finding]:
    if not token.is_punctuation(","):
        return
    if _blank_before_comma(token, context) is not None:
        yield Finding(token, "no space before a comma")
    if _missing_space_after(token, context):
        yield Finding(token, "a comma should be followed by a space or a line break")


def fix_comma_spacing(token: Token, context: RuleContext) -> Iterator[Edit]:
    if not token.is_punctuation(","):
        return
    blank = _blank_before_comma(token, context)
    if blank is not None:
        yield Edit(blank.offset, blank.end, "")
    if _missing_space_after(token, context):
        yield Edit(token.end, token.end, " ")


def _strip_trailing(token: Token, context: RuleContext) -> str:
    if token.kind == "comment" and token.text.startswith("--"):
        return token.text.rstrip()
    if token.kind != "whitespace":
        return token.text

    segments = token.text.split("\n")
    cleaned = ["\r" if segment.endswith("\r") else "" for segment in segments[:-1]]
    last = segments[-1]
    if context.index.next(token) is None:
        last = ""
    return "\n".join(cleaned + [last])


def _missing_operator_space(token: Token, context: RuleContext) -> tuple[bool, bool]:
    if token.kind != "operator" or token.text not in _SPACED_OPERATORS:
        return False, False
    previous = context.index.previous(token)
    following = context.index.next(token)
    before = previous is not None and previous.kind != "whitespace"
    after = following is not None and following.kind != "whitespace"
    return before, after


def _blank_before_comma(token: Token, context: RuleContext) -> Token | None:
    previous = context.index.previous(token)
    if previous is None or previous.kind != "whitespace":
        return None
    if "\n" in previous.text or previous.column == 1:
        return None
    return previous


def _missing_space_after(token: Token, context: RuleContext) -> bool:
    following = context.index.next(token)
    return following is not None and following.kind != "whitespace"
