"""Integration tests for the ``lint-import import`` command."""

from __future__ import annotations

import io
import json
import shutil
from contextlib import redirect_stdout
from pathlib import Path

import pytest

from lint_importer.cli import app

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project holding one Bar main file, one Bar test file and the BarLint reports."""

    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "MyClass.bar").write_text("\n".join(["stmt"] * 12), encoding="utf-8")
    (tmp_path / "tests").mkdir()
    (tmp_path / "tests" / "MyClass.bar").write_text("check\n", encoding="utf-8")
    (tmp_path / "build").mkdir()
    shutil.copy(FIXTURES / "barlint-report.xml", tmp_path / "build" / "barlint.xml")
    shutil.copy(FIXTURES / "barlint-report.json", tmp_path / "build" / "barlint.json")
    shutil.copy(FIXTURES / "malformed.xml", tmp_path / "build" / "malformed.xml")
    return tmp_path


def invoke_cli(args: list[str]) -> tuple[int, str]:
    """Execute the CLI with the provided arguments and capture stdout."""

    stdout = io.StringIO()
    with redirect_stdout(stdout):
        exit_code = app.main(args)
    return exit_code, stdout.getvalue()


def test_import_without_report_imports_nothing(project: Path) -> None:
    exit_code, output = invoke_cli(["import", str(project)])

    assert exit_code == 0
    assert "No issues imported." in output


def test_import_table_output_fails_on_high_issue(project: Path) -> None:
    exit_code, output = invoke_cli(["import", str(project), "--report", "build/barlint.xml"])

    assert exit_code == 1
    assert "bar-barlint:ExampleRule1" in output
    assert "src/MyClass.bar:5" in output
    assert "bar-barlint:ExampleRule2" in output


def test_fail_on_threshold_can_be_raised(project: Path) -> None:
    exit_code, _ = invoke_cli(
        ["import", str(project), "-D", "barlint.reportPath=build/barlint.xml", "--fail-on", "critical"]
    )

    assert exit_code == 0


def test_import_json_output(project: Path) -> None:
    exit_code, output = invoke_cli(
        ["import", str(project), "--report", "build/barlint.json", "--format", "json"]
    )

    assert exit_code == 1
    payload = json.loads(output)
    assert payload["metadata"]["status"] == "completed"
    assert payload["summary"]["total_issues"] == 2
    assert payload["summary"]["highest_severity"] == "high"
    assert payload["summary"]["counts"]["medium"] == 1
    assert payload["issues"] == [
        {
            "rule_key": "bar-barlint:ExampleRule1",
            "severity": "medium",
            "file": "src/MyClass.bar",
            "line": 5,
            "message": "More precise description of the error",
        },
        {
            "rule_key": "bar-barlint:ExampleRule2",
            "severity": "high",
            "file": "src/MyClass.bar",
            "line": None,
            "message": "File should declare a module header",
        },
    ]


def test_import_reports_skipped_findings(project: Path) -> None:
    exit_code, output = invoke_cli(
        ["import", str(project), "--report", "build/barlint.xml", "--format", "json"]
    )

    payload = json.loads(output)
    assert exit_code == 1
    assert payload["summary"]["skipped_findings"] == 1
    assert payload["skipped"][0]["file"] == "src/missing.bar"


def test_settings_file_configures_report(project: Path) -> None:
    settings_file = project / "lint-import.yaml"
    settings_file.write_text(
        "barlint:\n  reportPath: build/barlint.xml\n", encoding="utf-8"
    )

    exit_code, output = invoke_cli(
        ["import", str(project), "--settings", str(settings_file), "--fail-on", "critical"]
    )

    assert exit_code == 0
    assert "bar-barlint:ExampleRule1" in output


def test_malformed_report_returns_error(project: Path) -> None:
    exit_code, output = invoke_cli(["import", str(project), "--report", "build/malformed.xml"])

    assert exit_code == 2
    assert output.startswith("Error:")


def test_rule_manifest_disabling_rule_is_fatal(project: Path) -> None:
    manifest = project / "rules.yaml"
    manifest.write_text(
        "repository: barlint\nrules:\n  - key: ExampleRule2\n    enabled: false\n",
        encoding="utf-8",
    )

    exit_code, output = invoke_cli(
        [
            "import",
            str(project),
            "--report",
            "build/barlint.xml",
            "--rule-manifest",
            str(manifest),
        ]
    )

    assert exit_code == 2
    assert "bar-barlint:ExampleRule2" in output


def test_invalid_define_returns_error(project: Path) -> None:
    exit_code, output = invoke_cli(["import", str(project), "-D", "novalue"])

    assert exit_code == 2
    assert "KEY=VALUE" in output


def test_no_command_prints_help() -> None:
    exit_code, output = invoke_cli([])

    assert exit_code == 0
    assert "lint-import" in output


def test_empty_and_trailing_newline_lines_are_importable(project: Path) -> None:
    (project / "src" / "Empty.bar").write_text("", encoding="utf-8")
    (project / "src" / "Trail.bar").write_text("a\nb\n", encoding="utf-8")
    (project / "build" / "edges.xml").write_text(
        "<barlint>"
        '<error type="ExampleRule1" description="empty" file="src/Empty.bar" line="1"/>'
        '<error type="ExampleRule1" description="trailing" file="src/Trail.bar" line="3"/>'
        "</barlint>",
        encoding="utf-8",
    )

    exit_code, output = invoke_cli(
        ["import", str(project), "--report", "build/edges.xml", "--format", "json"]
    )

    assert exit_code == 0
    payload = json.loads(output)
    assert [(issue["file"], issue["line"]) for issue in payload["issues"]] == [
        ("src/Empty.bar", 1),
        ("src/Trail.bar", 3),
    ]
