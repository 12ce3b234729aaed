from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from sqlstyle_linter.__main__ import build_parser, main

FIXTURES_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "sql"


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_cli_build_parser_contains_required_commands() -> None:
    parser = build_parser()
    subparsers_action = next(
        action for action in parser._actions if getattr(action, "dest", "") == "command"
    )
    commands = set(subparsers_action.choices.keys())

    assert commands == {"check", "format", "list-rules"}


def test_cli_check_clean_file_returns_zero(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["check", str(FIXTURES_DIR / "clean.sql")])

    assert code == 0
    assert "0 error(s), 0 warning(s)" in capsys.readouterr().out


def test_cli_check_violations_returns_one(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["check", str(FIXTURES_DIR / "violations.sql")])

    out = capsys.readouterr().out
    assert code == 1
    assert "[casing]" in out
    assert "[naming-prefix]" in out


def test_cli_check_empty_file_returns_zero(tmp_path: Path) -> None:
    empty = tmp_path / "empty.sql"
    empty.write_text("", encoding="utf-8")

    assert main(["check", str(empty)]) == 0


def test_cli_check_missing_path_reports_io_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["check", str(tmp_path / "missing.sql")])

    assert code == 1
    assert "[io-error]" in capsys.readouterr().out


def test_cli_check_writes_report(tmp_path: Path) -> None:
    report_path = tmp_path / "out" / "report.json"

    code = main(
        [
            "check",
            str(FIXTURES_DIR / "violations.sql"),
            "--report",
            str(report_path),
            "--report-format",
            "json",
        ]
    )

    assert code == 1
    rows = json.loads(report_path.read_text(encoding="utf-8"))
    assert any(row["rule"] == "casing" for row in rows)


def test_cli_disable_and_severity_override(tmp_path: Path) -> None:
    sql_file = tmp_path / "query.sql"
    sql_file.write_text("select a from t;\n", encoding="utf-8")

    assert main(["check", str(sql_file)]) == 1
    assert main(["check", str(sql_file), "--disable", "casing"]) == 0

    config = tmp_path / "lint.yaml"
    config.write_text("linter:\n  severity:\n    casing: warning\n", encoding="utf-8")
    assert main(["check", str(sql_file), "--config", str(config)]) == 0


def test_cli_discovers_project_config(tmp_path: Path) -> None:
    sql_file = tmp_path / "query.sql"
    sql_file.write_text("select a from t;\n", encoding="utf-8")
    (tmp_path / ".sqlstyle.yaml").write_text(
        "linter:\n  rules:\n    disable: [casing]\n", encoding="utf-8"
    )

    assert main(["check", str(sql_file)]) == 0


def test_cli_bad_config_returns_one(tmp_path: Path) -> None:
    sql_file = tmp_path / "query.sql"
    sql_file.write_text("SELECT a FROM t;\n", encoding="utf-8")

    assert main(["check", str(sql_file), "--config", str(tmp_path / "nope.yaml")]) == 1

    config = tmp_path / "bad.yaml"
    config.write_text("linter:\n  profile: nosuch\n", encoding="utf-8")
    assert main(["check", str(sql_file), "--config", str(config)]) == 1


def test_cli_unknown_rule_id_returns_one(tmp_path: Path) -> None:
    sql_file = tmp_path / "query.sql"
    sql_file.write_text("SELECT a FROM t;\n", encoding="utf-8")

    assert main(["check", str(sql_file), "--enable", "no-such-rule"]) == 1


def test_cli_check_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("select 1"))

    code = main(["check"])

    assert code == 1
    assert "<stdin>:1:1: error [casing]" in capsys.readouterr().out


def test_cli_format_prints_formatted_text(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    sql_file = tmp_path / "query.sql"
    sql_file.write_text("select a,b from t;\n", encoding="utf-8")

    code = main(["format", str(sql_file)])

    assert code == 0
    assert capsys.readouterr().out == "SELECT a, b FROM t;\n"
    assert sql_file.read_text(encoding="utf-8") == "select a,b from t;\n"


def test_cli_format_in_place(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    sql_file = tmp_path / "query.sql"
    sql_file.write_text("select a,b from t;\n", encoding="utf-8")

    code = main(["format", "--in-place", str(sql_file)])

    assert code == 0
    assert sql_file.read_text(encoding="utf-8") == "SELECT a, b FROM t;\n"
    assert f"[OK] formatted={sql_file}" in capsys.readouterr().out


def test_cli_format_in_place_on_stdin_prints_result(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("select 1;\n"))

    code = main(["format", "--in-place"])

    assert code == 0
    assert capsys.readouterr().out == "SELECT 1;\n"


def test_cli_list_rules(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["list-rules"])

    out = capsys.readouterr().out
    assert code == 0
    assert "casing" in out
    assert "naming-bare-id" in out
    assert "type-uuid-key" not in out


def test_cli_list_rules_orm_profile(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["list-rules", "--profile", "orm"]) == 0

    out = capsys.readouterr().out
    assert "type-uuid-key" in out
    assert "naming-bare-id" not in out


def test_cli_requires_command() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2
