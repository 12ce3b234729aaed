"""리포트 출력."""

from .service import REPORT_FORMATS, render_text, write_report

__all__ = ["REPORT_FORMATS", "render_text", "write_report"]
