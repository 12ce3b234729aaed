"""Reporter service for text/CSV/JSON/HTML outputs."""

from __future__ import annotations

import csv
from html import escape
import json
from pathlib import Path

from sqlstyle_linter.common import CheckReport, UserInputError

REPORT_FORMATS = ("json", "csv", "html")
REPORT_FIELDS = ["file", "rule", "severity", "category", "line", "column", "message"]


def render_text(report: CheckReport) -> str:
    """Human readable report: one line per diagnostic plus a summary line."""

    lines = [
        f"{item.path or '<stdin>'}:{item.line}:{item.column}: {item.severity} [{item.rule_id}] {item.message}"
        for item in report.diagnostics
    ]
    lines.append(_summary(report))
    return "\n".join(lines) + "\n"


def write_report(report: CheckReport, output_path: Path, report_format: str) -> Path:
    """Writes the machine readable diagnostics report."""

    normalized_format = report_format.lower()
    if normalized_format not in REPORT_FORMATS:
        raise UserInputError(f"Unsupported report format: {report_format}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    rows = [item.to_record() for item in report.diagnostics]

    if normalized_format == "json":
        output_path.write_text(json.dumps(rows, ensure_ascii=False, indent=2), encoding="utf-8")
    elif normalized_format == "csv":
        _write_csv(output_path, rows)
    else:
        output_path.write_text(_render_html(report, rows), encoding="utf-8")

    return output_path


def _summary(report: CheckReport) -> str:
    summary = (
        f"{len(report.files)} file(s) checked: "
        f"{report.error_count} error(s), {report.warning_count} warning(s)"
    )
    if report.interrupted:
        summary += " (interrupted)"
    return summary


def _write_csv(path: Path, rows: list[dict[str, object]]) -> None:
    with path.open("w", encoding="utf-8", newline="") as file_obj:
        writer = csv.DictWriter(file_obj, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        writer.writerows(rows)


def _render_html(report: CheckReport, rows: list[dict[str, object]]) -> str:
    return (
        "<!doctype html>\n"
        "<html lang='en'>\n"
        "<head>\n"
        "  <meta charset='utf-8' />\n"
        "  <title>SQL Style Report</title>\n"
        "  <style>\n"
        "    body { font-family: sans-serif; margin: 24px; }\n"
        "    table { border-collapse: collapse; width: 100%; margin-bottom: 24px; }\n"
        "    th, td { border: 1px solid #ccc; padding: 8px; text-align: left; }\n"
        "    th { background: #f5f5f5; }\n"
        "    .error { color: #b00020; }\n"
        "  </style>\n"
        "</head>\n"
        "<body>\n"
        "  <h1>SQL Style Report</h1>\n"
        f"  <p>{escape(_summary(report))}</p>\n"
        f"  {_render_html_table(rows)}\n"
        "</body>\n"
        "</html>\n"
    )


def _render_html_table(rows: list[dict[str, object]]) -> str:
    if not rows:
        return "<p>No diagnostics.</p>"

    header_html = "".join(f"<th>{escape(header)}</th>" for header in REPORT_FIELDS)

    row_html_parts: list[str] = []
    for row in rows:
        css_class = escape(str(row.get("severity", "")))
        cells = "".join(f"<td>{escape(str(row.get(header, '')))}</td>" for header in REPORT_FIELDS)
        row_html_parts.append(f"<tr class='{css_class}'>{cells}</tr>")

    rows_html = "".join(row_html_parts)
    return (
        "<table>"
        f"<thead><tr>{header_html}</tr></thead>"
        f"<tbody>{rows_html}</tbody>"
        "</table>"
    )
