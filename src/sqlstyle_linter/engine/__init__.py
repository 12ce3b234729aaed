"""검사/포맷 엔진."""

from .formatter import MAX_PASSES, apply_edits, format, format_text
from .service import check, default_ruleset, lint_text

__all__ = [
    "MAX_PASSES",
    "apply_edits",
    "check",
    "default_ruleset",
    "format",
    "format_text",
    "lint_text",
]
