"""Pipeline module."""

from .service import STDIN, STDIN_NAME, collect_sources, run_check, run_format

__all__ = ["STDIN", "STDIN_NAME", "collect_sources", "run_check", "run_format"]
